"""Internet date-time (RFC 3339) with mandatory fractional seconds."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

_INTERNET_DATE_TIME = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"\.(?P<fraction>[0-9]+)"
    r"(?P<designator>Z|[+-][0-9]{2}:[0-9]{2})"
)


def parse_offset(designator: str) -> Optional[timedelta]:
    """Return the UTC offset for a ``Z`` or ``±hh:mm`` designator."""
    if designator == "Z":
        return timedelta(0)
    match = re.fullmatch(r"([+-])([0-9]{2}):([0-9]{2})", designator)
    if match is None:
        return None
    sign, hours, minutes = match.groups()
    if int(hours) > 23 or int(minutes) > 59:
        return None
    offset = timedelta(hours=int(hours), minutes=int(minutes))
    return -offset if sign == "-" else offset


def designator(text: str) -> Optional[str]:
    match = _INTERNET_DATE_TIME.fullmatch(text)
    return match.group("designator") if match else None


def parse_datetime(text: str) -> Optional[datetime]:
    """Parse ``text`` into an aware UTC datetime, or return None when it does not conform."""
    match = _INTERNET_DATE_TIME.fullmatch(text)
    if match is None:
        return None
    offset = parse_offset(match.group("designator"))
    if offset is None:
        return None
    microsecond = int(match.group("fraction")[:6].ljust(6, "0"))
    try:
        moment = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            microsecond,
            tzinfo=timezone(offset),
        )
        return moment.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def format_offset(offset: Optional[timedelta]) -> str:
    if not offset:
        return "Z"
    sign = "-" if offset < timedelta(0) else "+"
    total_minutes = abs(int(offset.total_seconds())) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_datetime(moment: datetime, time_zone: tzinfo) -> str:
    """Render ``moment`` in ``time_zone`` with millisecond precision.

    Naive datetimes are taken to be UTC. Milliseconds are truncated, not rounded.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone(time_zone)
    return (
        f"{local.year:04d}-{local.month:02d}-{local.day:02d}"
        f"T{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
        f".{local.microsecond // 1000:03d}"
        f"{format_offset(local.utcoffset())}"
    )
