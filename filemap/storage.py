from __future__ import annotations
import errno
import logging
import os
from typing import List

log = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644
DEFAULT_NAME_MAX = 255

class DirectoryStorage:
    """
    Low-level I/O on a single directory, one regular file per name.
    No locking and no error translation: OSError propagates as-is.
    """
    def __init__(self, directory: str) -> None:
        self.directory = directory

    def path_for(self, name: str) -> str:
        return os.path.join(self.directory, name)

    def write(self, name: str, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        path = self.path_for(name)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        log.debug("wrote %d bytes to %s", len(data), path)

    def read(self, name: str) -> bytes:
        with open(self.path_for(name), "rb") as f:
            return f.read()

    def exists(self, name: str) -> bool:
        try:
            os.stat(self.path_for(name))
        except FileNotFoundError:
            return False
        except OSError as exc:
            # A name the filesystem cannot hold never exists
            if exc.errno in (errno.ENAMETOOLONG, errno.ENOTDIR):
                return False
            # Present but not stat-able (e.g. permissions) still counts as present
            return True
        return True

    def remove(self, name: str) -> None:
        path = self.path_for(name)
        os.remove(path)
        log.debug("removed %s", path)

    def list_names(self) -> List[str]:
        return os.listdir(self.directory)

    def name_max(self) -> int:
        """Longest file name the directory's filesystem accepts."""
        try:
            limit = os.pathconf(self.directory, "PC_NAME_MAX")
        except (AttributeError, ValueError, OSError):
            # No pathconf (Windows) or the name is unknown to this platform
            return DEFAULT_NAME_MAX
        return limit if limit > 0 else DEFAULT_NAME_MAX
