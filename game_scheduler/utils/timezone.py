"""
Date and Time utilities

Centralizes RFC 3339 parsing and formatting so every component agrees on what
an "absolute timestamp" is.
"""
from datetime import date, datetime, timezone
import logging
import re

logger = logging.getLogger(__name__)

# Date, 'T', time with optional fraction, then a mandatory zone designator
_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateFormatError(ValueError):
    """Raised when date format is invalid"""
    pass


def _normalize_rfc3339_string(date_str: str) -> str:
    """Normalize an RFC 3339 string for datetime.fromisoformat

    Replaces a trailing 'Z' with '+00:00' and pads or trims the fractional
    seconds to six digits.

    Args:
        date_str: RFC 3339 datetime string

    Returns:
        Normalized string with explicit timezone offset
    """
    normalized = date_str[:-1] + "+00:00" if date_str[-1] in "Zz" else date_str
    normalized = normalized[:10] + "T" + normalized[11:]
    if "." in normalized:
        head, rest = normalized.split(".", 1)
        fraction, offset = rest[:-6], rest[-6:]
        normalized = f"{head}.{fraction[:6].ljust(6, '0')}{offset}"
    return normalized


def parse_rfc3339(date_str: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into a timezone-aware datetime

    Only absolute timestamps are accepted: a bare date or a naive datetime is
    rejected rather than guessed.

    Args:
        date_str: RFC 3339 string (e.g., '2025-01-16T00:00:00Z' or '2025-01-15T19:00:00-05:00')

    Returns:
        Timezone-aware datetime, keeping the original offset

    Raises:
        DateFormatError: If the string is not an RFC 3339 timestamp
    """
    if not isinstance(date_str, str) or not _RFC3339_PATTERN.match(date_str):
        raise DateFormatError(f"Invalid RFC 3339 timestamp: '{date_str}'")
    try:
        return datetime.fromisoformat(_normalize_rfc3339_string(date_str))
    except ValueError as e:
        raise DateFormatError(f"Invalid RFC 3339 timestamp: '{date_str}'") from e


def format_rfc3339(dt: datetime) -> str:
    """
    Format a timezone-aware datetime as RFC 3339 with second precision

    UTC is rendered with a 'Z' suffix, other offsets are kept as-is.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    rendered = dt.replace(microsecond=0).isoformat()
    if rendered.endswith("+00:00"):
        rendered = rendered[:-6] + "Z"
    return rendered


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_z(dt: datetime) -> str:
    """Render a datetime in UTC as RFC 3339 ('...Z')."""
    return format_rfc3339(dt.astimezone(timezone.utc))


def validate_date(date_str: str) -> str:
    """
    Validate a calendar date in YYYY-MM-DD form

    Raises:
        DateFormatError: If the value is not a real calendar date
    """
    if not isinstance(date_str, str) or not _DATE_PATTERN.match(date_str):
        raise DateFormatError(f"Invalid date '{date_str}': expected YYYY-MM-DD")
    try:
        date.fromisoformat(date_str)
    except ValueError as e:
        raise DateFormatError(f"Invalid date '{date_str}': {e}") from e
    return date_str


def today_iso() -> str:
    """Today's date in the local timezone, YYYY-MM-DD."""
    return date.today().isoformat()
