from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Sao_Paulo"


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        # Supabase returns ISO 8601, sometimes with a trailing Z
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def to_local(dt: datetime, tz: str = DEFAULT_TIMEZONE) -> datetime:
    """Aware timestamps (timestamptz comes back in UTC) are shown in `tz`.
    Naive ones are already local wall time."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(ZoneInfo(tz))


def as_local(dt: datetime, tz: str = DEFAULT_TIMEZONE) -> datetime:
    """Attach `tz` to a naive wall-clock datetime before it is stored."""
    if dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=ZoneInfo(tz))


def format_date_br(value: Any, tz: str = DEFAULT_TIMEZONE) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return "" if value is None else str(value)
    return to_local(parsed, tz).strftime("%d/%m/%Y")


def format_datetime_br(value: Any, tz: str = DEFAULT_TIMEZONE) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return "" if value is None else str(value)
    return to_local(parsed, tz).strftime("%d/%m/%Y %H:%M")


def format_time_br(value: Any, tz: str = DEFAULT_TIMEZONE) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    return to_local(parsed, tz).strftime("%H:%M")
