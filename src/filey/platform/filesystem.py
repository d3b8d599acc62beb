"""Filesystem primitives shared by path values and batch helpers.

These functions raise plain ``OSError``; translating failures into typed
errors is left to the callers, which know the operation being performed.
"""

from __future__ import annotations

import errno
import os
import secrets
import shutil

from filey.platform.logging import logger


def is_cross_device(exc: OSError) -> bool:
    """Return True when ``exc`` reports a rename across filesystems."""

    return exc.errno == errno.EXDEV


def rename_entry(source: str, target: str, *, replace_existing: bool = False) -> None:
    """Rename within one filesystem; ``os.replace`` when an existing target may go."""

    if replace_existing:
        os.replace(source, target)
    else:
        os.rename(source, target)


def _is_real_dir(path: str) -> bool:
    return os.path.isdir(path) and not os.path.islink(path)


def _staging_path(target: str) -> str:
    directory, name = os.path.split(target)
    return os.path.join(directory, f".{name}.{secrets.token_hex(4)}.filey-tmp")


def _copy_to_new(source: str, target: str, *, follow_symlinks: bool, merge_directories: bool) -> None:
    if not follow_symlinks and os.path.islink(source):
        os.symlink(os.readlink(source), target)
        return
    if os.path.isdir(source):
        _ = shutil.copytree(source, target, symlinks=True, dirs_exist_ok=merge_directories)
        return
    _ = shutil.copyfile(source, target)
    shutil.copymode(source, target)


def copy_entry(
    source: str,
    target: str,
    *,
    replace_existing: bool = False,
    follow_symlinks: bool = True,
) -> None:
    """Copy a file (content and mode bits) or a directory tree to ``target``.

    Symlinks inside a copied tree are recreated as symlinks. A symlink given
    as ``source`` is followed unless ``follow_symlinks`` is False, in which
    case the link itself is recreated at ``target``.

    With ``replace_existing`` a directory copied onto an existing directory
    is merged into it. Any other existing ``target`` (a file or a symlink) is
    replaced as a whole: the copy is written to a hidden sibling first and
    renamed over ``target``, so a symlink at ``target`` is replaced rather
    than written through.
    """
    copies_tree = os.path.isdir(source) and (follow_symlinks or not os.path.islink(source))
    if replace_existing and os.path.lexists(target) and not (copies_tree and _is_real_dir(target)):
        staging = _staging_path(target)
        try:
            _copy_to_new(source, staging, follow_symlinks=follow_symlinks, merge_directories=False)
            os.replace(staging, target)
        except OSError:
            _ = discard_partial(staging)
            raise
        return
    _copy_to_new(source, target, follow_symlinks=follow_symlinks, merge_directories=replace_existing)


def remove_entry(path: str, *, recursive: bool = False) -> None:
    """Delete a file, a symlink (never its target) or a directory.

    Directories must be empty unless ``recursive`` is True.
    """
    if os.path.islink(path) or not os.path.isdir(path):
        os.remove(path)
    elif recursive:
        shutil.rmtree(path)
    else:
        os.rmdir(path)


def discard_partial(path: str) -> bool:
    """Best-effort removal of a half-written copy at ``path``.

    Returns:
        bool: True when nothing remains at ``path``.
    """
    if not os.path.lexists(path):
        return True
    try:
        remove_entry(path, recursive=True)
    except OSError as exc:
        logger.warning("Could not remove partial copy at %s: %s", path, exc)
        return False
    return True


__all__ = ["copy_entry", "discard_partial", "is_cross_device", "remove_entry", "rename_entry"]
