"""Date utilities (UTC)."""

from datetime import date, datetime, timezone
from typing import Optional

SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def parse_date_key(value: str) -> Optional[datetime]:
    """
    Parse an ISO date or datetime key into an aware UTC datetime.

    Naive values are interpreted as UTC. Returns None when the key
    cannot be parsed.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def years_between(start: str, end: str) -> float:
    """
    Elapsed years between two date keys using a 365.25-day year.

    Returns 0.0 when either key is unparsable.
    """
    start_dt = parse_date_key(start)
    end_dt = parse_date_key(end)
    if start_dt is None or end_dt is None:
        return 0.0
    return (end_dt - start_dt).total_seconds() / SECONDS_PER_YEAR


def to_utc_midnight_iso(value: date) -> str:
    """RFC-3339 timestamp of UTC midnight on the given day."""
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


def format_display_date(value: str) -> str:
    """Render a date key as DD-MM-YYYY (UTC)."""
    parsed = parse_date_key(value)
    if parsed is None:
        return value
    return parsed.strftime("%d-%m-%Y")
