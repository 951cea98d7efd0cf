"""
Validators — Month keys, amounts, and resident types for payment submissions.
"""
import math
import re
from datetime import datetime

MONTH_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}")


def month_key(moment: datetime | None = None) -> str:
    """YYYY-MM bucket for a timestamp (defaults to now, local time)."""
    moment = moment or datetime.now()
    return f"{moment.year}-{moment.month:02d}"


def validate_month(month: str | None) -> bool:
    """Validate a YYYY-MM month key (shape only, like the web client sends)."""
    if not month:
        return False
    return MONTH_PATTERN.fullmatch(month) is not None


def parse_amount(raw: str | float | None) -> float | None:
    """Parse a submitted amount. Returns None when it is not a finite number."""
    if raw is None:
        return None
    try:
        amount = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def validate_resident_type(resident_type: str | None) -> bool:
    return resident_type in ("owner", "tenant")
