"""Summary: Operations spanning several paths: concatenation and batch create/remove.
Why: Keep multi-path coordination out of the single-path value type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Literal, overload

from filey.config.settings import ENCODING, READ_WORKERS
from filey.errors import InvalidPath, ReadFailed
from filey.file_types import FileType
from filey.path_value import PathInput, PathValue
from filey.platform.logging import log_event


def _resolve_inputs(paths: Iterable[PathInput]) -> list[PathValue]:
    values: list[PathValue] = []
    for index, item in enumerate(paths):
        try:
            values.append(PathValue(item))
        except InvalidPath as exc:
            raise ReadFailed(repr(item), index=index, detail=str(exc)) from exc
    return values


def _read_input(index: int, value: PathValue) -> bytes:
    try:
        return value.read_bytes()
    except ReadFailed as exc:
        raise ReadFailed(value.path, cause=exc.cause, detail=exc.detail, index=index) from exc


def _read_all(values: list[PathValue], workers: int) -> list[bytes]:
    if workers <= 1 or len(values) <= 1:
        return [_read_input(index, value) for index, value in enumerate(values)]

    with ThreadPoolExecutor(
        max_workers=min(workers, len(values)),
        thread_name_prefix="filey-read",
    ) as pool:
        futures: list[Future[bytes]] = [
            pool.submit(_read_input, index, value) for index, value in enumerate(values)
        ]
        try:
            # Collected in input order, so the lowest failing index wins.
            return [future.result() for future in futures]
        except ReadFailed:
            for future in futures:
                _ = future.cancel()
            raise


@overload
def concatenate(
    paths: Iterable[PathInput],
    *,
    binary: Literal[False] = False,
    encoding: str | None = None,
    workers: int | None = None,
) -> str: ...


@overload
def concatenate(
    paths: Iterable[PathInput],
    *,
    binary: Literal[True],
    encoding: str | None = None,
    workers: int | None = None,
) -> bytes: ...


def concatenate(
    paths: Iterable[PathInput],
    *,
    binary: bool = False,
    encoding: str | None = None,
    workers: int | None = None,
) -> str | bytes:
    """Read every input fully and join the contents in input order.

    Nothing is inserted between inputs and no trailing newline is added.
    Failure is all-or-nothing: when any input cannot be read, content already
    read is discarded and only the error is returned to the caller.

    Args:
        paths: Ordered path-like inputs. An empty sequence yields ``""``
            (or ``b""``).
        binary: Return raw ``bytes`` instead of decoded text.
        encoding: Text encoding; defaults to the configured ``encoding``.
        workers: Read with this many threads. Defaults to the configured
            ``read_workers`` (1, i.e. sequential). Output order never changes.

    Returns:
        str | bytes: The joined content.

    Raises:
        ReadFailed: An input is not a usable path, cannot be read, or cannot
            be decoded. ``index`` and ``path`` identify the first such input.
    """
    values = _resolve_inputs(paths)
    chunks = _read_all(values, READ_WORKERS if workers is None else workers)

    log_event(
        logging.DEBUG,
        "filey.concatenate",
        "Concatenated %d inputs",
        len(values),
        count=len(values),
    )
    if binary:
        return b"".join(chunks)

    codec = encoding or ENCODING
    texts: list[str] = []
    for index, (value, chunk) in enumerate(zip(values, chunks)):
        try:
            texts.append(chunk.decode(codec))
        except (UnicodeDecodeError, LookupError) as exc:
            raise ReadFailed(
                value.path,
                index=index,
                detail=f"cannot decode as {codec}: {exc}",
            ) from exc
    return "".join(texts)


def create_all(file_type: FileType, *paths: PathInput) -> list[PathValue]:
    """Create each missing path as an empty file or a directory.

    Paths that already exist are left untouched.

    Returns:
        list[PathValue]: The entries that were created.

    Raises:
        ValueError: ``file_type`` is ``FileType.SYMLINK``; a link needs a target.
        CreateFailed: A path could not be created. Earlier ones stay created.
    """
    if file_type is FileType.SYMLINK:
        raise ValueError("create_all cannot create symlinks; use PathValue.symlink")

    created: list[PathValue] = []
    for item in paths:
        value = PathValue(item)
        if value.exists():
            continue
        if file_type is FileType.DIRECTORY:
            _ = value.create_dir()
        else:
            _ = value.create_file()
        created.append(value)
    return created


def remove_all(*paths: PathInput, recursive: bool = True) -> list[PathValue]:
    """Remove each existing path; missing ones are skipped.

    Directories are removed with their contents unless ``recursive`` is False.

    Returns:
        list[PathValue]: The entries that were removed.

    Raises:
        RemoveFailed: An existing entry could not be removed. Earlier ones
            stay removed.
    """
    removed: list[PathValue] = []
    for item in paths:
        value = PathValue(item)
        if not value.exists():
            continue
        value.remove(recursive=recursive)
        removed.append(value)
    return removed


__all__ = ["concatenate", "create_all", "remove_all"]
