from __future__ import annotations
from typing import Optional


class FileMapError(Exception):
    """Base class for every error raised by filemap."""


class NotFound(FileMapError, KeyError):
    """
    Sentinel: the requested key has no entry in the map.
    Subclasses KeyError so mapping-style access behaves as expected.
    """
    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"filemap.NotFound: {self.key!r}"


class MapIOError(FileMapError):
    """
    Filesystem failure while performing a map operation.
    The underlying OSError is chained as __cause__.
    """
    def __init__(
        self,
        op: str,
        msg: str,
        *,
        key: Optional[str] = None,
        path: Optional[str] = None,
        errno: Optional[int] = None,
    ) -> None:
        super().__init__(f"{op}: {msg}")
        self.op = op
        self.key = key
        self.path = path
        self.errno = errno


class KeyEncodingError(FileMapError, ValueError):
    """Key cannot be turned into a filename."""


class KeyDecodeError(KeyEncodingError):
    """Directory entry name is not a filename produced by encode_key()."""
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"cannot decode entry name {name!r}: {reason}")
        self.name = name
