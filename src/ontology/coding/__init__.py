from .decoder import JSONLDDecoder
from .encoder import EncodingContext, JSONLDEncoder
from .errors import DataCorruptedError, DecodingError, EncodingError, KeyNotFoundError, TypeMismatchError
from .options import EncodingOptions

__all__ = [
    "JSONLDDecoder",
    "JSONLDEncoder",
    "EncodingContext",
    "EncodingOptions",
    "DecodingError",
    "DataCorruptedError",
    "KeyNotFoundError",
    "TypeMismatchError",
    "EncodingError",
]
