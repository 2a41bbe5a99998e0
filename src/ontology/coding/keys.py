"""JSON-LD keys used when encoding typed objects."""

from __future__ import annotations

CONTEXT = "@context"
TYPE = "@type"


def attribute(name: str) -> str:
    return name
