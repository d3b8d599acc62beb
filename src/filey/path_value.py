"""Summary: Path value wrapping one filesystem path with chainable operations.
Why: Replace scattered os/shutil calls with one object that reports typed failures.
"""

from __future__ import annotations

import errno
import functools
import logging
import os
from pathlib import Path, PurePath
from typing import Self

from filey.config.settings import CLEANUP_PARTIAL_TARGET, ENCODING, OVERWRITE_EXISTING
from filey.errors import (
    CopyFailed,
    CreateFailed,
    HomeDirUnresolvable,
    InvalidPath,
    LinkFailed,
    MoveFailed,
    MoveStage,
    ReadFailed,
    RemoveFailed,
    StatFailed,
    SymlinkFailed,
    WriteFailed,
)
from filey.file_types import FileType
from filey.permissions import Permissions
from filey.platform.filesystem import (
    copy_entry,
    discard_partial,
    is_cross_device,
    remove_entry,
    rename_entry,
)
from filey.platform.logging import log_event
from filey.units import UnitOfInfo

PathInput = str | bytes | os.PathLike[str] | os.PathLike[bytes]

_HOME_MARKER = "~"
_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def coerce_path(value: PathInput) -> str:
    """Normalize a path-like value to the string form stored by ``PathValue``.

    Raises:
        InvalidPath: ``value`` is not path-like, is empty, or contains NUL.
    """
    try:
        raw = os.fspath(value)
    except TypeError as exc:
        raise InvalidPath(f"not a path-like value: {value!r}") from exc
    text = os.fsdecode(raw) if isinstance(raw, bytes) else raw
    if not text:
        raise InvalidPath("path cannot be empty")
    if "\x00" in text:
        raise InvalidPath(f"path contains a NUL character: {text!r}")
    return text


def home_directory() -> str:
    """Return the invoking user's home directory.

    Raises:
        HomeDirUnresolvable: Neither ``HOME`` nor the password database knows it.
    """
    try:
        home = str(Path.home())
    except (RuntimeError, KeyError) as exc:
        raise HomeDirUnresolvable("could not determine the home directory") from exc
    if not home or home.startswith(_HOME_MARKER):
        raise HomeDirUnresolvable("could not determine the home directory")
    return home


def _has_home_marker(path: str) -> bool:
    return path == _HOME_MARKER or any(path.startswith(_HOME_MARKER + sep) for sep in _SEPARATORS)


def _missing(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


def _occupied(path: str) -> FileExistsError:
    return FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), path)


@functools.total_ordering
class PathValue:
    """One filesystem path plus the operations that act on it.

    Derivations (``expand_user``, ``absolutized``, ``copy_to``, ``symlink``,
    ...) return new values and leave this one alone. ``move_to`` is the only
    operation that changes ``path``: it updates this instance in place and
    returns it, so ``PathValue("a").move_to("b/").path`` and the original
    reference agree.

    No file handle is held between calls. Equality and ordering compare the
    path strings; instances are deliberately unhashable because ``move_to``
    can change the path they would hash on.
    """

    __slots__ = ("_path",)

    def __init__(self, path: PathInput) -> None:
        self._path: str = coerce_path(path)

    @property
    def path(self) -> str:
        """Current path, exactly as supplied or as last assigned by ``move_to``."""
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathValue):
            return self._path == other._path
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, PathValue):
            return self._path < other._path
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # Derived names -----------------------------------------------------------

    @property
    def file_name(self) -> str | None:
        """Final path segment, or None when the path has none (``"/"``, ``"."``)."""
        return PurePath(self._path).name or None

    @property
    def file_stem(self) -> str | None:
        return PurePath(self._path).stem or None

    @property
    def parent_dir(self) -> str | None:
        """Parent directory; None for a root or a bare ``"."``."""
        pure = PurePath(self._path)
        if pure.parent == pure:
            return None
        return str(pure.parent)

    # Home directory handling -------------------------------------------------

    def expand_user(self) -> PathValue:
        """Replace a leading ``~`` segment with the home directory.

        Only ``"~"`` and ``"~/..."`` are expanded; ``~name`` forms and tildes
        further along stay literal. Paths without the marker come back
        unchanged and the home directory is not consulted.

        Raises:
            HomeDirUnresolvable: The path starts with ``~`` but no home is known.
        """
        if not _has_home_marker(self._path):
            return PathValue(self._path)
        home = home_directory()
        if self._path == _HOME_MARKER:
            return PathValue(home)
        return PathValue(home.rstrip("".join(_SEPARATORS)) + self._path[1:])

    def contract_user(self) -> PathValue:
        """Replace a leading home directory with ``~``; inverse of ``expand_user``."""
        home = home_directory().rstrip("".join(_SEPARATORS))
        if self._path == home:
            return PathValue(_HOME_MARKER)
        for sep in _SEPARATORS:
            if home and self._path.startswith(home + sep):
                return PathValue(_HOME_MARKER + self._path[len(home):])
        return PathValue(self._path)

    def absolutized(self) -> PathValue:
        """Expand ``~`` and make the path absolute without resolving symlinks."""
        return PathValue(os.path.abspath(self.expand_user().path))

    def canonicalized(self) -> PathValue:
        """Absolute path with every symlink resolved; the path must exist.

        Raises:
            StatFailed: A component is missing or cannot be resolved.
        """
        try:
            resolved = os.path.realpath(self._path, strict=True)
        except OSError as exc:
            raise StatFailed(self._path, cause=exc) from exc
        return PathValue(resolved)

    # Queries -----------------------------------------------------------------

    def exists(self) -> bool:
        """True when an entry exists; a dangling symlink counts as existing."""
        return os.path.lexists(self._path)

    def is_file(self) -> bool:
        return os.path.isfile(self._path)

    def is_dir(self) -> bool:
        return os.path.isdir(self._path)

    def is_symlink(self) -> bool:
        return os.path.islink(self._path)

    def probe_error(self) -> OSError | None:
        """Return the error that makes the boolean queries report False, if any.

        ``exists()`` folds permission problems into False; this tells a
        genuinely absent path (``FileNotFoundError``) from one that could
        not be inspected (``PermissionError``, ...).
        """
        try:
            _ = os.lstat(self._path)
        except OSError as exc:
            return exc
        return None

    def file_type(self) -> FileType | None:
        """Type of the entry, or None when it does not exist or cannot be inspected."""
        try:
            return FileType.which(self._path)
        except StatFailed:
            return None

    def size(self) -> int:
        """Size in bytes, following symlinks.

        Raises:
            StatFailed: The entry does not exist or cannot be inspected.
        """
        try:
            return os.stat(self._path).st_size
        except OSError as exc:
            raise StatFailed(self._path, cause=exc) from exc

    def size_styled(self) -> str:
        """Size formatted with a binary unit, e.g. ``"1.5MiB"``."""
        return UnitOfInfo.format(self.size())

    def permissions(self) -> Permissions:
        return Permissions.from_path(self._path)

    def list_dir(self) -> list[PathValue]:
        """Entries of this directory, sorted by name.

        Raises:
            StatFailed: The path is not a readable directory.
        """
        try:
            names = os.listdir(self._path)
        except OSError as exc:
            raise StatFailed(self._path, cause=exc) from exc
        return [PathValue(os.path.join(self._path, name)) for name in sorted(names)]

    # Moving and copying ------------------------------------------------------

    def _effective_target(self, destination: PathInput) -> str:
        target = coerce_path(destination)
        if not os.path.isdir(target):
            return target
        name = self.file_name
        if name is None or name == "..":
            raise InvalidPath(f"{self._path!r} has no file name to place inside {target!r}")
        return os.path.join(target, name)

    def move_to(self, destination: PathInput, *, overwrite: bool | None = None) -> Self:
        """Move the entry to ``destination`` and point this value at it.

        When ``destination`` is an existing directory the entry keeps its name
        inside it. Within one filesystem this is an atomic rename; across
        filesystems the entry is copied and the source deleted afterwards.

        Args:
            destination: Target path or existing directory.
            overwrite: Replace an existing effective target. Defaults to the
                ``overwrite`` configuration value (False).

        Returns:
            This instance, now referring to the effective target.

        Raises:
            MoveFailed: Nothing was moved, or the cross-device fallback stopped
                part way. ``stage``, ``source_removed`` and ``target_created``
                describe what is left on disk. ``path`` is unchanged.
            InvalidPath: The source has no name to place inside a directory.
        """
        source = self._path
        target = self._effective_target(destination)
        allow_overwrite = OVERWRITE_EXISTING if overwrite is None else overwrite

        if not os.path.lexists(source):
            raise MoveFailed(source, target, cause=_missing(source))
        if not allow_overwrite and os.path.lexists(target):
            raise MoveFailed(source, target, cause=_occupied(target))

        try:
            rename_entry(source, target, replace_existing=allow_overwrite)
        except OSError as exc:
            if not is_cross_device(exc):
                raise MoveFailed(source, target, cause=exc) from exc
            self._move_across_devices(source, target, allow_overwrite=allow_overwrite)

        self._path = target
        log_event(
            logging.DEBUG,
            "filey.move",
            "Moved %s to %s",
            source,
            target,
            source_path=source,
            target_path=target,
        )
        return self

    def _move_across_devices(self, source: str, target: str, *, allow_overwrite: bool) -> None:
        log_event(
            logging.INFO,
            "filey.move.fallback",
            "Moving %s to %s across filesystems",
            source,
            target,
            source_path=source,
            target_path=target,
        )
        target_existed = os.path.lexists(target)
        try:
            copy_entry(source, target, replace_existing=allow_overwrite, follow_symlinks=False)
        except OSError as exc:
            target_created = os.path.lexists(target)
            if target_created and not target_existed and CLEANUP_PARTIAL_TARGET:
                target_created = not discard_partial(target)
            log_event(
                logging.ERROR,
                "filey.move.error",
                "Copying %s to %s failed; source left in place",
                source,
                target,
                source_path=source,
                target_path=target,
                error_message=exc.strerror or str(exc),
            )
            raise MoveFailed(
                source,
                target,
                cause=exc,
                stage=MoveStage.COPY,
                target_created=target_created,
            ) from exc

        try:
            remove_entry(source, recursive=True)
        except OSError as exc:
            source_removed = not os.path.lexists(source)
            log_event(
                logging.ERROR,
                "filey.move.error",
                "Copied %s to %s but could not delete the source",
                source,
                target,
                source_path=source,
                target_path=target,
                error_message=exc.strerror or str(exc),
            )
            raise MoveFailed(
                source,
                target,
                cause=exc,
                stage=MoveStage.REMOVE_SOURCE,
                source_removed=source_removed,
                target_created=True,
            ) from exc

    def copy_to(self, destination: PathInput, *, overwrite: bool | None = None) -> PathValue:
        """Copy the entry to ``destination`` and return a value for the copy.

        Files keep their content and mode bits; directories are copied
        recursively with inner symlinks preserved. The source is only read.

        Raises:
            CopyFailed: The source is missing, the target exists and
                ``overwrite`` is off, or any read/write failed. A copy that
                did not exist beforehand is removed again.
        """
        source = self._path
        target = self._effective_target(destination)
        allow_overwrite = OVERWRITE_EXISTING if overwrite is None else overwrite

        if not os.path.lexists(source):
            raise CopyFailed(source, target, cause=_missing(source))
        target_existed = os.path.lexists(target)
        if target_existed and not allow_overwrite:
            raise CopyFailed(source, target, cause=_occupied(target))

        try:
            copy_entry(source, target, replace_existing=allow_overwrite)
        except OSError as exc:
            if not target_existed:
                _ = discard_partial(target)
            raise CopyFailed(source, target, cause=exc) from exc

        log_event(
            logging.DEBUG,
            "filey.copy",
            "Copied %s to %s",
            source,
            target,
            source_path=source,
            target_path=target,
        )
        return PathValue(target)

    # Links -------------------------------------------------------------------

    def symlink(self, link_path: PathInput) -> PathValue:
        """Create a symlink at ``link_path`` pointing at this value's absolute path.

        The target does not have to exist; dangling links are allowed.

        Raises:
            SymlinkFailed: The link path exists, symlinks are unsupported
                there, or permission is denied.
        """
        original = self.absolutized().path
        link = PathValue(link_path).expand_user().path
        try:
            os.symlink(original, link, target_is_directory=os.path.isdir(original))
        except OSError as exc:
            raise SymlinkFailed(link, original, cause=exc) from exc

        log_event(
            logging.DEBUG,
            "filey.symlink",
            "Linked %s to %s",
            link,
            original,
            source_path=link,
            target_path=original,
        )
        return PathValue(link)

    def hard_link(self, link_path: PathInput) -> PathValue:
        """Create a hard link to this file at ``link_path``.

        Raises:
            LinkFailed: The source is missing or not a file, the link path
                exists, or the two paths are on different filesystems.
        """
        link = PathValue(link_path).expand_user().path
        try:
            os.link(self._path, link)
        except OSError as exc:
            raise LinkFailed(link, self._path, cause=exc) from exc

        log_event(
            logging.DEBUG,
            "filey.hard_link",
            "Hard-linked %s to %s",
            link,
            self._path,
            source_path=link,
            target_path=self._path,
        )
        return PathValue(link)

    # Creation and removal ----------------------------------------------------

    def create_file(self) -> Self:
        """Create an empty file, truncating one that already exists."""
        try:
            with open(self._path, "wb"):
                pass
        except OSError as exc:
            raise CreateFailed(self._path, cause=exc) from exc
        log_event(logging.DEBUG, "filey.create", "Created file %s", self._path, source_path=self._path)
        return self

    def create_dir(self) -> Self:
        """Create this directory and any missing parents."""
        try:
            os.makedirs(self._path, exist_ok=True)
        except OSError as exc:
            raise CreateFailed(self._path, cause=exc) from exc
        log_event(logging.DEBUG, "filey.create", "Created directory %s", self._path, source_path=self._path)
        return self

    def remove(self, *, recursive: bool = False) -> None:
        """Delete a file, a symlink itself, or an empty directory.

        Args:
            recursive: Also delete a non-empty directory and its contents.
                Never implied.

        Raises:
            RemoveFailed: The entry does not exist or the OS refused, e.g. a
                non-empty directory without ``recursive``.
        """
        try:
            remove_entry(self._path, recursive=recursive)
        except OSError as exc:
            raise RemoveFailed(self._path, cause=exc) from exc
        log_event(logging.DEBUG, "filey.remove", "Removed %s", self._path, source_path=self._path)

    # Content -----------------------------------------------------------------

    def read_bytes(self) -> bytes:
        try:
            with open(self._path, "rb") as handle:
                return handle.read()
        except OSError as exc:
            raise ReadFailed(self._path, cause=exc) from exc

    def read_text(self, encoding: str | None = None) -> str:
        """Read the whole file as text (configured encoding by default).

        Raises:
            ReadFailed: The file cannot be read or decoded.
        """
        data = self.read_bytes()
        codec = encoding or ENCODING
        try:
            return data.decode(codec)
        except (UnicodeDecodeError, LookupError) as exc:
            raise ReadFailed(self._path, detail=f"cannot decode as {codec}: {exc}") from exc

    def write_bytes(self, data: bytes) -> Self:
        try:
            with open(self._path, "wb") as handle:
                _ = handle.write(data)
        except OSError as exc:
            raise WriteFailed(self._path, cause=exc) from exc
        return self

    def write_text(self, data: str, encoding: str | None = None) -> Self:
        codec = encoding or ENCODING
        try:
            encoded = data.encode(codec)
        except (UnicodeEncodeError, LookupError) as exc:
            raise WriteFailed(self._path, detail=f"cannot encode as {codec}: {exc}") from exc
        return self.write_bytes(encoded)


__all__ = ["PathInput", "PathValue", "coerce_path", "home_directory"]
