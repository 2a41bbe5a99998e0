from __future__ import annotations

SCHEMA_ORG = "https://schema.org"
