from __future__ import annotations
import errno
import logging
import os
import threading
from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

from .errors import KeyEncodingError, MapIOError, NotFound
from .keycodec import decode_key, encode_key
from .progress import Progress, ProgressCallback
from .storage import DEFAULT_FILE_MODE, DirectoryStorage

log = logging.getLogger(__name__)

Value = Union[bytes, bytearray, memoryview]
Visitor = Callable[[str, bytes], Optional[BaseException]]

class FileMap:
    """
    Key/value map stored as one file per entry in an existing directory.

    set/get/has/delete/num_entries are serialized by an instance lock.
    Traversal (range/items/keys) runs without that lock unless the map was
    built with lock_range=True: entries added or removed concurrently may or
    may not be seen, and an entry removed between listing and reading is
    skipped.
    """
    def __init__(
        self,
        directory: Union[str, "os.PathLike[str]"],
        *,
        file_mode: int = DEFAULT_FILE_MODE,
        lock_range: bool = False,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.directory = os.fspath(directory)
        if not os.path.isdir(self.directory):
            code = errno.ENOTDIR if os.path.exists(self.directory) else errno.ENOENT
            raise MapIOError(
                "open",
                f"{self.directory} is not an existing directory",
                path=self.directory,
                errno=code,
            )
        self.file_mode = file_mode
        self.lock_range = lock_range
        self._fs = DirectoryStorage(self.directory)
        self._name_max = self._fs.name_max()
        self._on_progress = on_progress
        # Reentrant so a lock_range visitor can call back into the map
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"FileMap({self.directory!r})"

    # ----- Point operations (locked) -----

    def set(self, key: str, value: Value) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"value must be bytes-like, not {type(value).__name__}")
        name = self._name_for(key)
        data = bytes(value)
        with self._lock:
            try:
                self._fs.write(name, data, self.file_mode)
            except OSError as exc:
                raise self._io_error("set", f"writing {self._fs.path_for(name)}", exc, key=key, name=name) from exc

    def get(self, key: str) -> bytes:
        name = self._name_for(key)
        with self._lock:
            try:
                return self._fs.read(name)
            except FileNotFoundError:
                raise NotFound(key) from None
            except OSError as exc:
                raise self._io_error("get", f"reading {self._fs.path_for(name)}", exc, key=key, name=name) from exc

    def has(self, key: str) -> bool:
        name = self._name_for(key)
        with self._lock:
            return self._fs.exists(name)

    def delete(self, key: str) -> None:
        name = self._name_for(key)
        with self._lock:
            try:
                self._fs.remove(name)
            except FileNotFoundError:
                raise NotFound(key) from None
            except OSError as exc:
                raise self._io_error("delete", f"removing {self._fs.path_for(name)}", exc, key=key, name=name) from exc

    def num_entries(self) -> int:
        with self._lock:
            return len(self._list_names("num_entries"))

    # ----- Traversal -----

    def range(self, visit: Visitor) -> None:
        """
        Call visit(key, value) once per entry, in directory listing order.

        An exception raised by visit propagates unchanged and stops the
        traversal. Returning an exception instance has the same effect.
        Entries already visited stay visited. With lock_range=True the
        instance lock is held from the listing until the last visit returns.
        """
        if self.lock_range:
            with self._lock:
                self._visit_all(visit)
        else:
            self._visit_all(visit)

    def items(self) -> Iterator[Tuple[str, bytes]]:
        """
        Lazy (key, value) iterator over a listing taken now.
        The lock is never held between yields: with lock_range=True only the
        listing is taken under it, contents are read as the caller advances.
        """
        return self._iter_items(self._snapshot("range"))

    def keys(self) -> Iterator[str]:
        for name in self._snapshot("keys"):
            yield decode_key(name)

    def _visit_all(self, visit: Visitor) -> None:
        entries = self._iter_items(self._list_names("range"))
        try:
            for key, value in entries:
                ret = visit(key, value)
                if isinstance(ret, BaseException):
                    raise ret
        finally:
            entries.close()

    def _iter_items(self, names: List[str]) -> Iterator[Tuple[str, bytes]]:
        # One Progress per traversal, so concurrent traversals keep their own counters
        progress = Progress(self._on_progress)
        total = len(names)
        log.debug("range over %s: %d names listed", self.directory, total)
        progress.emit("range.start", 0, f"{total} entries")
        visited = 0
        for i, name in enumerate(names, 1):
            key = decode_key(name)
            try:
                value = self._fs.read(name)
            except FileNotFoundError:
                # Removed after the listing was taken
                log.debug("range: entry %r vanished before read", key)
                continue
            except OSError as exc:
                raise self._io_error(
                    "range", f"reading contents of {self._fs.path_for(name)}", exc, key=key, name=name
                ) from exc
            yield key, value
            visited += 1
            progress.step("range.visit", i, total)
        progress.emit("range.done", 100, f"{visited} visited")
        log.debug("range over %s: %d entries visited", self.directory, visited)

    # ----- Mapping sugar -----

    def __contains__(self, key: Any) -> bool:
        if not isinstance(key, str):
            return False
        try:
            return self.has(key)
        except KeyEncodingError:
            return False

    def __len__(self) -> int:
        return self.num_entries()

    def __getitem__(self, key: str) -> bytes:
        return self.get(key)

    def __setitem__(self, key: str, value: Value) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.delete(key)

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    # ----- Helpers -----

    def _name_for(self, key: str) -> str:
        name = encode_key(key)
        if len(name) > self._name_max:
            raise KeyEncodingError(
                f"key {key[:32]!r}... encodes to a {len(name)}-character file name, "
                f"longer than the {self._name_max} this directory allows"
            )
        return name

    def _snapshot(self, op: str) -> List[str]:
        if self.lock_range:
            with self._lock:
                return self._list_names(op)
        return self._list_names(op)

    def _list_names(self, op: str) -> List[str]:
        try:
            return self._fs.list_names()
        except OSError as exc:
            raise self._io_error(op, f"listing map directory {self.directory}", exc) from exc

    def _io_error(
        self,
        op: str,
        msg: str,
        exc: OSError,
        *,
        key: Optional[str] = None,
        name: Optional[str] = None,
    ) -> MapIOError:
        if key is not None:
            msg = f"{msg} for key {key!r}"
        path = self._fs.path_for(name) if name is not None else self.directory
        return MapIOError(op, f"{msg}: {exc.strerror or exc}", key=key, path=path, errno=exc.errno)
