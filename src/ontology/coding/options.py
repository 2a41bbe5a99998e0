from __future__ import annotations

import logging
import os
from datetime import tzinfo
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ontology.time_zones import resolve_time_zone

TIME_ZONE_OVERRIDE_ENV = "ONTOLOGY_TIME_ZONE_OVERRIDE"

logger = logging.getLogger(__name__)


class EncodingOptions(BaseModel):
    """Encoder configuration shared by every value in a document.

    ``time_zone_override`` takes precedence over a value's own zone when
    rendering timestamps.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    time_zone_override: Optional[tzinfo] = None

    @field_validator("time_zone_override", mode="before")
    @classmethod
    def _resolve_identifier(cls, value: object) -> object:
        if isinstance(value, str):
            return resolve_time_zone(value)
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EncodingOptions":
        env = os.environ if environ is None else environ
        identifier = env.get(TIME_ZONE_OVERRIDE_ENV, "").strip()
        if not identifier:
            return cls()
        logger.debug("Using time zone override %s from %s", identifier, TIME_ZONE_OVERRIDE_ENV)
        return cls(time_zone_override=identifier)
