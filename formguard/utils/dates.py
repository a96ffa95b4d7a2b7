"""
Formguard Date Helpers
======================

Date parsing and the epoch-offset age arithmetic used by the age rules.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, List, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DEFAULT_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    # Slash dates read month first; day-first only when that cannot parse
    "%m/%d/%Y",
    "%d/%m/%Y",
]


def utcnow() -> datetime:
    """Get current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_date(
    value: Any,
    formats: Optional[List[str]] = None,
) -> Optional[datetime]:
    """
    Parse a date-like value into an aware UTC datetime.

    Accepts ``datetime``, ``date`` and strings (ISO 8601 first, then each
    of ``formats``). Naive values are taken as UTC.

    Returns:
        Parsed datetime, or None when the value is empty or unparseable
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        parsed = _parse_string(value.strip(), formats or DEFAULT_FORMATS)
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_string(text: str, formats: List[str]) -> Optional[datetime]:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    return None


def epoch_offset_years(birth: datetime, now: datetime) -> int:
    """
    Whole years between ``birth`` and ``now``, epoch-offset style.

    The elapsed interval is added to 1970-01-01T00:00Z and the distance of
    the resulting UTC year from 1970 is returned as an absolute value. Leap
    days inside the interval shift the result by up to a day around
    birthdays; callers depend on this exact arithmetic.
    """
    elapsed = now - birth
    try:
        shifted = EPOCH + elapsed
    except OverflowError:
        shifted = datetime.min.replace(tzinfo=timezone.utc) if elapsed < timedelta(0) \
            else datetime.max.replace(tzinfo=timezone.utc)
    return abs(shifted.year - 1970)
