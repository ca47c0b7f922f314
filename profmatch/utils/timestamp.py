"""Timestamp formatting utilities."""

from datetime import date, datetime, timezone
from typing import Optional, Union


def today() -> str:
    """Current UTC date as YYYY-MM-DD (used in export filenames and headers)."""
    return datetime.now(timezone.utc).date().isoformat()


def now() -> str:
    """Current local time as a filesystem-safe stamp (e.g., 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """Current UTC time as ISO 8601 with milliseconds."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def epoch_millis() -> int:
    """Milliseconds since the epoch, used to build record identifiers."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def resolve_date(generated_on: Optional[Union[date, str]]) -> str:
    """
    Normalize an optional export date to YYYY-MM-DD.

    Args:
        generated_on: A date, an ISO date string, or None for today

    Returns:
        ISO date string
    """
    if generated_on is None:
        return today()
    if isinstance(generated_on, datetime):
        return generated_on.date().isoformat()
    if isinstance(generated_on, date):
        return generated_on.isoformat()
    return date.fromisoformat(generated_on).isoformat()


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute time (e.g., "2025-11-13 18:45:40")

    Returns:
        Human-readable timestamp

    Examples:
        format_timestamp("2025-11-13T18:45:40.572+00:00")
        # "2025-11-13 18:45:40"

        format_timestamp("2025-11-13T18:45:40.572+00:00", relative=True)
        # "2h ago"
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))

        if relative:
            return _format_relative_time(dt)
        else:
            return dt.strftime("%Y-%m-%d %H:%M:%S")

    except (ValueError, AttributeError):
        # Return original if parsing fails
        return iso_timestamp


def _format_relative_time(dt: datetime) -> str:
    """
    Format datetime as relative time in compact format (e.g., "2h ago").

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    """
    if dt.tzinfo is None:
        current = datetime.now()
    else:
        current = datetime.now(timezone.utc)
    diff = current - dt

    # Future times
    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
