from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

CodingKey = Union[str, int]
CodingPath = Tuple[CodingKey, ...]


def format_coding_path(coding_path: Sequence[CodingKey]) -> str:
    if not coding_path:
        return "<root>"
    parts = []
    for key in coding_path:
        parts.append(f"[{key}]" if isinstance(key, int) else f".{key}")
    return "".join(parts).lstrip(".")


class DecodingError(ValueError):
    """Raised when a serialized node cannot be decoded into a value."""

    def __init__(self, coding_path: Sequence[CodingKey], debug_description: str) -> None:
        self.coding_path: CodingPath = tuple(coding_path)
        self.debug_description = debug_description
        super().__init__(f"{debug_description} (at {format_coding_path(self.coding_path)})")


class TypeMismatchError(DecodingError):
    pass


class KeyNotFoundError(DecodingError):
    def __init__(self, coding_path: Sequence[CodingKey], key: str, debug_description: Optional[str] = None) -> None:
        self.key = key
        super().__init__(coding_path, debug_description or f"No value associated with key '{key}'")


class DataCorruptedError(DecodingError):
    pass


class EncodingError(ValueError):
    def __init__(self, coding_path: Sequence[CodingKey], debug_description: str) -> None:
        self.coding_path: CodingPath = tuple(coding_path)
        self.debug_description = debug_description
        super().__init__(f"{debug_description} (at {format_coding_path(self.coding_path)})")
