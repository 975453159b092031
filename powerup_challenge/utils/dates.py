"""UTC date formatting helpers.

Every formatter reads the calendar fields from the UTC view of the instant, so
the output never depends on the timezone of the machine running the analysis.
"""
from datetime import datetime, timezone
from typing import Optional

MONTH_ABBREVIATIONS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime, treating naive values as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_operation_timestamp(timestamp: str) -> datetime:
    """
    Parse a HAfAH operation timestamp as UTC.

    The API returns ISO timestamps without a zone marker ("2025-09-01T12:00:00"),
    which are UTC by convention.
    """
    value = timestamp.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return ensure_utc(datetime.fromisoformat(value))


def format_for_query(value: datetime) -> str:
    """Format for the HAfAH from-block/to-block filters: YYYY-MM-DD HH:MM:SS"""
    return ensure_utc(value).strftime('%Y-%m-%d %H:%M:%S')


def format_display(value: datetime) -> str:
    """Format for logs and results: YYYY-MM-DD HH:MM:SS UTC"""
    return f"{format_for_query(value)} UTC"


def format_human(value: datetime) -> str:
    """Format for summaries: Mon D, YYYY HH:MM UTC"""
    utc = ensure_utc(value)
    month = MONTH_ABBREVIATIONS[utc.month - 1]
    return f"{month} {utc.day}, {utc.year} {utc.hour:02d}:{utc.minute:02d} UTC"


def format_for_input(value: Optional[datetime]) -> str:
    """Format for datetime-local inputs (YYYY-MM-DDTHH:MM), empty for missing values"""
    if value is None:
        return ''
    return ensure_utc(value).strftime('%Y-%m-%dT%H:%M')
