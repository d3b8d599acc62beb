"""Summary: Typed failures raised by path values and batch operations.
Why: Give callers the operation, the paths involved, and the OS cause in one object.
"""

from __future__ import annotations

from enum import Enum


class FileyError(Exception):
    """Base class for every error raised by filey."""


class InvalidPath(FileyError, ValueError):
    """Raised when a value cannot be used as a path."""


class HomeDirUnresolvable(FileyError):
    """Raised when ``~`` must be expanded but no home directory is known."""


class OperationFailed(FileyError):
    """A filesystem operation failed; wraps the underlying ``OSError``.

    Attributes:
        operation: Short verb naming the failed operation (``"move"``, ...).
        paths: Paths involved, source first.
        cause: The OS-level error, also chained as ``__cause__``.
    """

    operation: str = "operation"

    def __init__(self, *paths: str, cause: OSError | None = None, detail: str | None = None) -> None:
        self.paths: tuple[str, ...] = paths
        self.cause: OSError | None = cause
        self.detail: str | None = detail
        super().__init__(self._render())

    @property
    def errno(self) -> int | None:
        return self.cause.errno if self.cause is not None else None

    def _render(self) -> str:
        subject = " → ".join(self.paths) if self.paths else "<no path>"
        reason = self.detail
        if reason is None and self.cause is not None:
            reason = self.cause.strerror or str(self.cause)
        if reason:
            return f"{self.operation} failed for {subject}: {reason}"
        return f"{self.operation} failed for {subject}"


class MoveStage(str, Enum):
    """Step of ``move_to`` that was running when a move failed."""

    RENAME = "rename"
    COPY = "copy"
    REMOVE_SOURCE = "remove_source"


class MoveFailed(OperationFailed):
    """A move failed.

    ``source_removed`` is True when the source no longer exists after the
    failure; ``target_created`` is True when something was left at the
    target. Both False means nothing happened.
    """

    operation = "move"

    def __init__(
        self,
        source: str,
        target: str,
        *,
        cause: OSError | None = None,
        detail: str | None = None,
        stage: MoveStage = MoveStage.RENAME,
        source_removed: bool = False,
        target_created: bool = False,
    ) -> None:
        self.stage = stage
        self.source_removed = source_removed
        self.target_created = target_created
        super().__init__(source, target, cause=cause, detail=detail)

    @property
    def source(self) -> str:
        return self.paths[0]

    @property
    def target(self) -> str:
        return self.paths[1]


class CopyFailed(OperationFailed):
    operation = "copy"


class SymlinkFailed(OperationFailed):
    operation = "symlink"


class LinkFailed(OperationFailed):
    operation = "hard link"


class RemoveFailed(OperationFailed):
    operation = "remove"


class CreateFailed(OperationFailed):
    operation = "create"


class WriteFailed(OperationFailed):
    operation = "write"


class StatFailed(OperationFailed):
    operation = "stat"


class ReadFailed(OperationFailed):
    """A read failed; ``index`` is the input position when concatenating."""

    operation = "read"

    def __init__(
        self,
        path: str,
        *,
        cause: OSError | None = None,
        detail: str | None = None,
        index: int | None = None,
    ) -> None:
        self.index = index
        super().__init__(path, cause=cause, detail=detail)

    @property
    def path(self) -> str:
        return self.paths[0]

    def _render(self) -> str:
        rendered = super()._render()
        if self.index is None:
            return rendered
        return f"input #{self.index}: {rendered}"


__all__ = [
    "CopyFailed",
    "CreateFailed",
    "FileyError",
    "HomeDirUnresolvable",
    "InvalidPath",
    "LinkFailed",
    "MoveFailed",
    "MoveStage",
    "OperationFailed",
    "ReadFailed",
    "RemoveFailed",
    "StatFailed",
    "SymlinkFailed",
    "WriteFailed",
]
