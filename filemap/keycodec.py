from __future__ import annotations
import base64
import binascii

from .errors import KeyDecodeError, KeyEncodingError

# URL-safe alphabet: '-' and '_' in place of '+' and '/', so a name is
# always a single path component.
_ALTCHARS = b"-_"


def encode_key(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"key must be str, not {type(key).__name__}")
    if not key:
        raise KeyEncodingError("empty key has no filename")
    try:
        raw = key.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise KeyEncodingError(f"key is not UTF-8 encodable: {exc}") from exc
    return base64.b64encode(raw, altchars=_ALTCHARS).decode("ascii")


def decode_key(name: str) -> str:
    """
    Inverse of encode_key(). Rejects anything encode_key() could not have
    produced: foreign characters, bad padding, non-canonical trailing bits,
    bytes that are not UTF-8.
    """
    try:
        ascii_name = name.encode("ascii")
    except UnicodeEncodeError:
        raise KeyDecodeError(name, "non-ascii characters") from None
    if not ascii_name:
        raise KeyDecodeError(name, "empty name")
    try:
        raw = base64.b64decode(ascii_name, altchars=_ALTCHARS, validate=True)
    except binascii.Error as exc:
        raise KeyDecodeError(name, str(exc)) from exc
    # b64decode tolerates the standard alphabet's '+' and '/' even with altchars
    if base64.b64encode(raw, altchars=_ALTCHARS) != ascii_name:
        raise KeyDecodeError(name, "not a canonical encoding")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise KeyDecodeError(name, f"invalid utf-8: {exc.reason}") from exc
