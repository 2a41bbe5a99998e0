from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ontology import iso8601

UTC = timezone.utc

_UTC_ALIASES = {"Z", "UTC", "GMT", "Etc/UTC", "Etc/GMT"}


def fixed_offset(designator: str) -> Optional[tzinfo]:
    offset = iso8601.parse_offset(designator)
    if offset is None:
        return None
    return UTC if not offset else timezone(offset)


def time_zone_from_iso8601(text: str) -> Optional[tzinfo]:
    """Derive the zone encoded by the designator at the end of an ISO-8601 string.

    ``Z`` and ``+00:00`` both yield UTC; any other offset yields a fixed-offset zone.
    """
    found = iso8601.designator(text)
    if found is None:
        return None
    return fixed_offset(found)


def resolve_time_zone(identifier: str) -> tzinfo:
    """Resolve a UTC alias, a ``±hh:mm`` offset or an IANA name into a ``tzinfo``."""
    name = identifier.strip()
    if not name:
        raise ValueError("Time zone identifier must not be empty")
    if name in _UTC_ALIASES:
        return UTC
    if name[:1] in "+-" and name[1:2].isdigit():
        zone = fixed_offset(name)
        if zone is None:
            raise ValueError(f"Invalid UTC offset '{identifier}'")
        return zone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone '{identifier}'") from exc
