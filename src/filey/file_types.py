"""Classification of filesystem entries."""

from __future__ import annotations

import os
import stat
from enum import Enum

from filey.errors import StatFailed


class FileType(str, Enum):
    """Kind of entry a path points at."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def which(path: str | os.PathLike[str]) -> "FileType":
        """Judge the type of the entry at ``path`` without following a final symlink.

        Raises:
            StatFailed: The entry does not exist or cannot be inspected.
        """
        try:
            mode = os.lstat(path).st_mode
        except OSError as exc:
            raise StatFailed(os.fspath(path), cause=exc) from exc
        if stat.S_ISLNK(mode):
            return FileType.SYMLINK
        if stat.S_ISDIR(mode):
            return FileType.DIRECTORY
        return FileType.FILE


__all__ = ["FileType"]
