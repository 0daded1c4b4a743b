"""
Date/time parsing and expiry utilities - framework-agnostic.

All timestamps handled by the service are timezone-aware UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

# Relative expiry presets accepted from the dashboard's create form
EXPIRY_PRESETS: dict[str, Optional[timedelta]] = {
    "never": None,
    "1day": timedelta(days=1),
    "7days": timedelta(days=7),
    "30days": timedelta(days=30),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a date/time value into a timezone-aware UTC datetime.

    Accepts:
    - ``None`` → ``None``
    - ``datetime`` → converted to UTC (naive assumed UTC)
    - ``str`` ending in ``"Z"`` → converted to ``+00:00`` before parsing
    - Any ISO 8601 string (``datetime.fromisoformat``)

    Returns:
        A timezone-aware ``datetime`` in UTC, or ``None`` if *value* is ``None``
        or cannot be parsed.
    """
    if value is None:
        return None
    try:
        if isinstance(value, datetime):
            dt = value
        else:
            raw = str(value).strip()
            if raw.endswith("Z"):
                raw = raw[:-1] + "+00:00"
            dt = datetime.fromisoformat(raw)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def resolve_expiry(value: Any, now: Optional[datetime] = None) -> Optional[datetime]:
    """Turn an ``expiresAt`` input into an absolute UTC datetime.

    ``None``, ``""`` and ``"never"`` mean no expiry. The presets ``"1day"``,
    ``"7days"`` and ``"30days"`` are relative to *now*. Anything else must be
    an ISO 8601 timestamp (or a datetime).

    Raises:
        ValueError: if *value* is neither a preset nor a parseable timestamp.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str) and value in EXPIRY_PRESETS:
        delta = EXPIRY_PRESETS[value]
        if delta is None:
            return None
        return (now or utc_now()) + delta
    if not isinstance(value, (str, datetime)):
        raise ValueError(f"Unsupported expiry value: {value!r}")
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid expiry date format: {value!r}")
    return parsed


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """Return True when *expires_at* is set and lies strictly in the past."""
    if expires_at is None:
        return False
    return expires_at < (now or utc_now())
