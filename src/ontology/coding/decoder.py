from __future__ import annotations

import json
from typing import Any, Mapping, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ontology.coding.errors import CodingKey, DataCorruptedError, KeyNotFoundError, TypeMismatchError

T = TypeVar("T")


def _describe(node: Any) -> str:
    if node is None:
        return "null"
    if isinstance(node, Mapping):
        return "a dictionary"
    if isinstance(node, list):
        return "an array"
    if isinstance(node, bool):
        return "a boolean"
    if isinstance(node, (int, float)):
        return "a number"
    if isinstance(node, str):
        return "a string"
    return type(node).__name__


def keyed_container(node: Any, coding_path: Sequence[CodingKey]) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise TypeMismatchError(coding_path, f"Expected to decode a dictionary but found {_describe(node)} instead.")
    return node


def decode_string(container: Mapping[str, Any], key: str, coding_path: Sequence[CodingKey]) -> str:
    if key not in container:
        raise KeyNotFoundError(coding_path, key)
    value = container[key]
    if not isinstance(value, str):
        raise TypeMismatchError(
            tuple(coding_path) + (key,), f"Expected to decode a string but found {_describe(value)} instead."
        )
    return value


def single_value_string(node: Any, coding_path: Sequence[CodingKey]) -> str:
    if not isinstance(node, str):
        raise TypeMismatchError(coding_path, f"Expected to decode a string but found {_describe(node)} instead.")
    return node


class JSONLDDecoder:
    """Decodes JSON text into values that understand the JSON-LD shapes."""

    def decode(self, cls: Type[T], data: Union[str, bytes, bytearray]) -> T:
        try:
            node = json.loads(data)
        except json.JSONDecodeError as exc:
            raise DataCorruptedError((), "The given data was not valid JSON.") from exc
        return self.decode_node(cls, node)

    def decode_node(self, cls: Type[T], node: Any) -> T:
        from_jsonld = getattr(cls, "from_jsonld", None)
        if from_jsonld is not None:
            return from_jsonld(node, ())
        if isinstance(cls, type) and issubclass(cls, BaseModel):
            try:
                return cls.model_validate(node)
            except ValidationError as exc:
                first = exc.errors()[0] if exc.error_count() else {}
                raise DataCorruptedError(tuple(first.get("loc", ())), str(exc)) from exc
        raise TypeError(f"{cls!r} cannot be decoded from JSON-LD")
