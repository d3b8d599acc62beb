"""Read-only view of the rwx permission bits of an entry."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

from filey.errors import StatFailed


@dataclass(slots=True, frozen=True)
class Permission:
    """Read, write and execute bits for one class of users."""

    read: bool = False
    write: bool = False
    execute: bool = False

    @classmethod
    def from_bits(cls, bits: int) -> "Permission":
        """Build from a single octal digit (``0``-``7``)."""
        if not 0 <= bits <= 7:
            raise ValueError(f"permission bits out of range: {bits}")
        return cls(read=bool(bits & 4), write=bool(bits & 2), execute=bool(bits & 1))

    @property
    def bits(self) -> int:
        return (4 if self.read else 0) | (2 if self.write else 0) | (1 if self.execute else 0)

    def __str__(self) -> str:
        return (
            ("r" if self.read else "-")
            + ("w" if self.write else "-")
            + ("x" if self.execute else "-")
        )


@dataclass(slots=True, frozen=True)
class Permissions:
    """Permission bits for the owning user, the group and everyone else."""

    user: Permission
    group: Permission
    others: Permission

    @classmethod
    def from_mode(cls, mode: int) -> "Permissions":
        """Extract permissions from an ``st_mode`` value; file-type bits are ignored."""
        mode = stat.S_IMODE(mode)
        return cls(
            user=Permission.from_bits((mode >> 6) & 0o7),
            group=Permission.from_bits((mode >> 3) & 0o7),
            others=Permission.from_bits(mode & 0o7),
        )

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> "Permissions":
        """Read permissions of ``path``, following symlinks.

        Raises:
            StatFailed: The entry does not exist or cannot be inspected.
        """
        try:
            mode = os.stat(path).st_mode
        except OSError as exc:
            raise StatFailed(os.fspath(path), cause=exc) from exc
        return cls.from_mode(mode)

    @property
    def octal(self) -> str:
        return f"{self.user.bits}{self.group.bits}{self.others.bits}"

    def __str__(self) -> str:
        return f"{self.user}{self.group}{self.others}"


__all__ = ["Permission", "Permissions"]
