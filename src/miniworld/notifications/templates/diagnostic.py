"""Test message used to check the email configuration from the back office."""

from html import escape

from miniworld.notifications.templates.layout import wrap_html


class DiagnosticEmailTemplate:
    email_type = "test"

    @staticmethod
    def render(context: dict) -> dict:
        sent_at = context.get("sent_at", "")
        sender = context.get("from_address", "support@minihubpk.com")
        content = (
            "<p>This is a test email to verify your email configuration is working correctly.</p>"
            f"<p><strong>Time sent:</strong> {escape(sent_at)}</p>"
            f"<p><strong>From:</strong> {escape(sender)}</p>"
            '<p style="color: #10b981; font-weight: bold;">Email system is working perfectly!</p>'
        )
        return {
            "subject": "Test Email from MiniWorld",
            "body": f"MiniWorld Email Test - This is a test email sent at {sent_at}",
            "html": wrap_html("MiniWorld Email Test", content),
        }
