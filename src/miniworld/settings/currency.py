"""PKR display formatting.

Amounts are always rendered in Pakistani Rupees, independent of the
configurable currency setting.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_PREFIX = re.compile(r"PKR\s*", re.IGNORECASE)


def _half_up(amount: float, places: str) -> Decimal:
    return Decimal(str(amount)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_pkr(amount, show_decimals: bool = False, compact: bool = False) -> str:
    """Render ``amount`` as ``PKR 25,000`` (or ``PKR 25.0K`` when compact)."""
    if amount is None or isinstance(amount, bool):
        return "PKR 0"
    try:
        amount = float(amount)
    except (TypeError, ValueError):
        return "PKR 0"
    if not math.isfinite(amount):
        return "PKR 0"

    if compact and amount >= 1000:
        if amount >= 1_000_000:
            return f"PKR {_half_up(amount / 1_000_000, '0.1')}M"
        return f"PKR {_half_up(amount / 1000, '0.1')}K"

    if show_decimals:
        return f"PKR {_half_up(amount, '0.01'):,}"
    return f"PKR {_half_up(amount, '1'):,}"


def parse_pkr(text: str | None) -> float:
    """Inverse of ``format_pkr`` for plain amounts; unparseable text gives 0."""
    if not text:
        return 0.0
    cleaned = _PREFIX.sub("", text).replace(",", "").strip()
    match = re.match(r"^[-+]?\d*\.?\d+", cleaned)
    if not match:
        return 0.0
    return float(match.group(0))
