from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ontology.coding.errors import CodingKey, CodingPath, EncodingError
from ontology.coding.options import EncodingOptions
from ontology.time_zones import resolve_time_zone


@dataclass(frozen=True)
class EncodingContext:
    """Position of a value inside the document being encoded, plus encoder options."""

    coding_path: CodingPath = ()
    options: EncodingOptions = field(default_factory=EncodingOptions)

    @property
    def is_root(self) -> bool:
        return not self.coding_path

    def nested(self, key: CodingKey) -> "EncodingContext":
        return EncodingContext(coding_path=self.coding_path + (key,), options=self.options)


@runtime_checkable
class JSONLDEncodable(Protocol):
    def to_jsonld(self, context: EncodingContext) -> Any:
        ...


class JSONLDEncoder:
    """Renders values as JSON, letting JSON-LD aware types pick their shape.

    A value sitting at the top of the document is encoded with an empty
    coding path; values reached through mappings, sequences or model fields
    carry the keys that lead to them.
    """

    def __init__(
        self,
        options: Optional[EncodingOptions] = None,
        *,
        time_zone_override: Optional[tzinfo | str] = None,
        indent: Optional[int] = None,
        sort_keys: bool = False,
    ) -> None:
        if options is None:
            options = EncodingOptions()
        if time_zone_override is not None:
            if isinstance(time_zone_override, str):
                time_zone_override = resolve_time_zone(time_zone_override)
            options = options.model_copy(update={"time_zone_override": time_zone_override})
        self.options = options
        self.indent = indent
        self.sort_keys = sort_keys

    def encode(self, value: Any) -> str:
        return json.dumps(self.to_jsonable(value), indent=self.indent, sort_keys=self.sort_keys)

    def to_jsonable(self, value: Any) -> Any:
        return self._encode_value(value, EncodingContext(options=self.options))

    def _encode_value(self, value: Any, context: EncodingContext) -> Any:
        if isinstance(value, JSONLDEncodable):
            return value.to_jsonld(context)
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, BaseModel):
            return self._encode_model(value, context)
        if isinstance(value, Mapping):
            return self._encode_mapping(value, context)
        if isinstance(value, (list, tuple)):
            return [self._encode_value(item, context.nested(index)) for index, item in enumerate(value)]
        try:
            return to_jsonable_python(value)
        except PydanticSerializationError as exc:
            raise EncodingError(context.coding_path, f"Unable to encode value of type {type(value).__name__}") from exc

    def _encode_mapping(self, value: Mapping[Any, Any], context: EncodingContext) -> dict:
        encoded = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise EncodingError(context.coding_path, f"Mapping keys must be strings, got {type(key).__name__}")
            encoded[key] = self._encode_value(item, context.nested(key))
        return encoded

    def _encode_model(self, model: BaseModel, context: EncodingContext) -> dict:
        encoded = {}
        for name, info in type(model).model_fields.items():
            if info.exclude:
                continue
            key = info.serialization_alias or info.alias or name
            encoded[key] = self._encode_value(getattr(model, name), context.nested(key))
        return encoded
