from .errors import FileMapError, NotFound, MapIOError, KeyEncodingError, KeyDecodeError
from .keycodec import encode_key, decode_key
from .mapping import FileMap

__all__ = [
    "FileMap",
    "FileMapError",
    "NotFound",
    "MapIOError",
    "KeyEncodingError",
    "KeyDecodeError",
    "encode_key",
    "decode_key",
]
