"""Current time tool backed by the platform's IANA zone database."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from greeting_server.config import DEFAULT_TIMEZONE
from greeting_server.types import DomainFailure

INVALID_TIMEZONE = "invalid_timezone"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(dt_timezone.utc)


def resolve_zone(name: str) -> ZoneInfo | None:
    """Resolve an IANA zone name, or return None if it is not a valid zone."""
    try:
        return ZoneInfo(name)
    # Malformed keys raise ValueError, directory-like keys can raise OSError
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def format_utc_offset(offset: timedelta | None) -> str:
    """Format a UTC offset as 'UTC+HH:MM'."""
    offset = offset or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"UTC{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def zone_display_name(zone: ZoneInfo, moment: datetime) -> str:
    """Human-readable zone name, e.g. 'Asia/Seoul (KST, UTC+09:00)'."""
    local = moment.astimezone(zone)
    return f"{zone.key} ({local.tzname()}, {format_utc_offset(local.utcoffset())})"


def current_time(
    timezone: str | None = None,
    *,
    default_timezone: str = DEFAULT_TIMEZONE,
    clock: Callable[[], datetime] = utcnow,
) -> str | DomainFailure:
    """Report the current local time in a timezone.

    Args:
        timezone: IANA zone name; the default zone is used when absent or empty.
        default_timezone: Zone used when none is given.
        clock: Source of the current aware datetime.

    Returns:
        Text with the zone's display name and formatted local time, or a
        DomainFailure echoing an unresolvable zone name.
    """
    target = timezone or default_timezone
    zone = resolve_zone(target)
    if zone is None:
        return DomainFailure(
            f"Error: invalid timezone (input: {target}).\n"
            "Use an IANA timezone name, e.g. Asia/Seoul or America/New_York.",
            code=INVALID_TIMEZONE,
            details={"timezone": target},
        )

    now = clock()
    local = now.astimezone(zone)
    return (
        f"Current time in {zone_display_name(zone, now)}: "
        f"{local.strftime(TIMESTAMP_FORMAT)}"
    )


__all__ = [
    "INVALID_TIMEZONE",
    "TIMESTAMP_FORMAT",
    "current_time",
    "format_utc_offset",
    "resolve_zone",
    "utcnow",
    "zone_display_name",
]
