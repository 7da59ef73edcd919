"""Calendar-day helpers.

Every function takes the timezone explicitly; nothing here reads the
ambient locale. Naive datetimes are interpreted as wall time in *tz*.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal


def get_system_timezone() -> str:
    """Detect system timezone.

    Returns:
        Timezone string (e.g., "Europe/Berlin" or "UTC" if detection fails)
    """
    tz = tzlocal.get_localzone()
    return str(tz.key) if hasattr(tz, "key") else str(tz)


def resolve_timezone(name: str | None) -> tzinfo:
    """Turn an IANA zone name into a tzinfo, defaulting to the system zone."""
    if not name:
        name = get_system_timezone()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def _localize(moment: datetime, tz: tzinfo) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def day_of(moment: datetime, tz: tzinfo) -> date:
    """Calendar day containing *moment* in *tz*."""
    return _localize(moment, tz).date()


def same_day(t1: datetime, t2: datetime, tz: tzinfo) -> bool:
    """True when both timestamps fall on the same calendar day in *tz*."""
    return day_of(t1, tz) == day_of(t2, tz)


def start_of_day(moment: datetime, tz: tzinfo) -> datetime:
    """Midnight (aware, in *tz*) of the day containing *moment*."""
    return datetime.combine(day_of(moment, tz), time.min, tzinfo=tz)
