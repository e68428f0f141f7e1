"""Shared HTML frame for storefront emails."""

from html import escape

_STYLE = (
    "body { font-family: Arial, sans-serif; line-height: 1.6; color: #1e3a8a; }"
    ".header { background: linear-gradient(135deg, #1e3a8a 0%, #f97316 100%); color: white;"
    " padding: 20px; text-align: center; }"
    ".content { padding: 20px; }"
    ".highlight { background: #f0f9ff; padding: 20px; border-radius: 8px; margin: 20px 0;"
    " border-left: 4px solid #f97316; }"
    ".footer { background: #1e3a8a; color: white; padding: 20px; text-align: center; margin-top: 30px; }"
)

SIGNATURE = "Best regards,\nThe MiniHub Team"


def wrap_html(heading: str, content: str) -> str:
    """Place pre-escaped ``content`` inside the branded header and footer."""
    return (
        "<!DOCTYPE html><html><head>"
        f"<style>{_STYLE}</style>"
        "</head><body>"
        f'<div class="header"><h1>MiniWorld</h1><h2>{escape(heading)}</h2></div>'
        f'<div class="content">{content}</div>'
        '<div class="footer"><p>Best regards,<br>The MiniHub Team</p>'
        '<p style="font-size: 12px;">support@minihubpk.com | minihubpk.com</p></div>'
        "</body></html>"
    )
