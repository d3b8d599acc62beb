"""filey: chainable convenience operations on single filesystem paths.

Main pieces:

- ``PathValue``: one path with expansion, move/copy, link, removal and query
  operations.
- ``concatenate``: join the contents of several files in order.
- ``FileType``, ``UnitOfInfo``, ``Permissions``: helpers for describing
  entries.
"""

from __future__ import annotations

from filey.config.config import config as _config
from filey.errors import (
    CopyFailed,
    CreateFailed,
    FileyError,
    HomeDirUnresolvable,
    InvalidPath,
    LinkFailed,
    MoveFailed,
    MoveStage,
    OperationFailed,
    ReadFailed,
    RemoveFailed,
    StatFailed,
    SymlinkFailed,
    WriteFailed,
)
from filey.file_types import FileType
from filey.operations import concatenate, create_all, remove_all
from filey.path_value import PathInput, PathValue
from filey.permissions import Permission, Permissions
from filey.platform.logging import DEFAULT_LOG_FILE, setup_logger
from filey.units import UnitOfInfo

# FILEY_LOG_FILE wins; otherwise honour log_file from the config file.
if DEFAULT_LOG_FILE is None and _config.log_file is not None:
    _ = setup_logger(log_file=_config.log_file)

__all__ = [
    "CopyFailed",
    "CreateFailed",
    "FileType",
    "FileyError",
    "HomeDirUnresolvable",
    "InvalidPath",
    "LinkFailed",
    "MoveFailed",
    "MoveStage",
    "OperationFailed",
    "PathInput",
    "PathValue",
    "Permission",
    "Permissions",
    "ReadFailed",
    "RemoveFailed",
    "StatFailed",
    "SymlinkFailed",
    "UnitOfInfo",
    "WriteFailed",
    "concatenate",
    "create_all",
    "remove_all",
]
