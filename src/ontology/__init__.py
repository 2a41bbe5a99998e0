from .coding import EncodingOptions, JSONLDDecoder, JSONLDEncoder
from .coding.errors import DecodingError, EncodingError
from .types.temporal import TemporalValue
from .vocab import SCHEMA_ORG

__all__ = [
    "TemporalValue",
    "JSONLDEncoder",
    "JSONLDDecoder",
    "EncodingOptions",
    "DecodingError",
    "EncodingError",
    "SCHEMA_ORG",
]
