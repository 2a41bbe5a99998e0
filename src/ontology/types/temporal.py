from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, SerializationInfo, field_validator, model_serializer, model_validator

from ontology import iso8601
from ontology.coding import keys
from ontology.coding.decoder import decode_string, keyed_container, single_value_string
from ontology.coding.encoder import EncodingContext
from ontology.coding.errors import CodingKey, DataCorruptedError, DecodingError
from ontology.time_zones import UTC, resolve_time_zone, time_zone_from_iso8601
from ontology.vocab import SCHEMA_ORG

logger = logging.getLogger(__name__)

VALUE = keys.attribute("value")


class TemporalValue(BaseModel):
    """An absolute instant together with the time zone it should be shown in.

    ``value`` is always timezone-aware and normalized to UTC. ``time_zone``
    only affects formatting. Equality compares both fields.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: datetime
    time_zone: Optional[tzinfo] = None

    @model_validator(mode="before")
    @classmethod
    def _decode_serialized(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and isinstance(data.get(VALUE), datetime):
            return data
        if isinstance(data, Mapping) and "time_zone" in data:
            # Component construction: an explicit zone is kept as given.
            parsed = cls._parse(decode_string(data, VALUE, ()), (VALUE,))
            return {"value": parsed.value, "time_zone": data["time_zone"]}
        if isinstance(data, (str, Mapping)):
            decoded = cls.from_jsonld(data)
            return {"value": decoded.value, "time_zone": decoded.time_zone}
        return data

    @model_serializer
    def _serialize(self, info: SerializationInfo) -> str:
        context = info.context if isinstance(info.context, Mapping) else {}
        override = context.get("time_zone_override")
        if isinstance(override, str):
            override = resolve_time_zone(override)
        return self.isoformat(override)

    @field_validator("value")
    @classmethod
    def _normalize_to_utc(cls, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)

    @classmethod
    def now(cls, time_zone: Optional[tzinfo] = None) -> "TemporalValue":
        return cls(value=datetime.now(timezone.utc), time_zone=time_zone)

    @classmethod
    def from_string(cls, text: str) -> Optional["TemporalValue"]:
        """Parse an internet date-time with fractional seconds.

        Returns None when ``text`` does not conform. The zone is taken from
        the offset designator, so ``Z`` yields UTC.
        """
        moment = iso8601.parse_datetime(text)
        if moment is None:
            return None
        return cls(value=moment, time_zone=time_zone_from_iso8601(text))

    @classmethod
    def from_jsonld(cls, node: Any, coding_path: Sequence[CodingKey] = ()) -> "TemporalValue":
        """Decode either ``{"value": "<date>", ...}`` or a bare ``"<date>"`` string.

        Any decoding error raised while reading the object shape, including an
        invalid date inside it, sends decoding to the bare string shape.
        """
        try:
            container = keyed_container(node, coding_path)
            return cls._parse(decode_string(container, VALUE, coding_path), coding_path)
        except DecodingError as error:
            logger.debug("Decoding %s as a bare string: %s", cls.__name__, error)
        return cls._parse(single_value_string(node, coding_path), coding_path)

    @classmethod
    def _parse(cls, text: str, coding_path: Sequence[CodingKey]) -> "TemporalValue":
        parsed = cls.from_string(text)
        if parsed is None:
            raise DataCorruptedError(coding_path, "Invalid date format")
        return parsed

    def display_time_zone(self, override: Optional[tzinfo] = None) -> tzinfo:
        if override is not None:
            return override
        if self.time_zone is not None:
            return self.time_zone
        return UTC

    def isoformat(self, time_zone: Optional[tzinfo] = None) -> str:
        return iso8601.format_datetime(self.value, self.display_time_zone(time_zone))

    def to_datetime(self) -> datetime:
        return self.value.astimezone(self.display_time_zone())

    def to_jsonld(self, context: Optional[EncodingContext] = None) -> Any:
        context = context or EncodingContext()
        string = self.isoformat(context.options.time_zone_override)
        if context.is_root:
            return {keys.CONTEXT: SCHEMA_ORG, keys.TYPE: type(self).__name__, VALUE: string}
        return string

    def __str__(self) -> str:
        return self.isoformat()
