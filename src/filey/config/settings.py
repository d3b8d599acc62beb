"""Where: src/filey/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to the path and batch layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks.
"""

from __future__ import annotations

import codecs

from filey.config.config import (
    ENCODING_DEFAULT,
    READ_WORKERS_DEFAULT,
    config as app_config,
)


def _valid_encoding(name: object) -> str:
    if not isinstance(name, str) or not name:
        return ENCODING_DEFAULT
    try:
        _ = codecs.lookup(name)
    except LookupError:
        return ENCODING_DEFAULT
    return name


# Text handling ---------------------------------------------------------------

ENCODING: str = _valid_encoding(getattr(app_config, "encoding", ENCODING_DEFAULT))


# Move/copy policy ------------------------------------------------------------

# Whether an existing effective target may be replaced by move_to/copy_to.
OVERWRITE_EXISTING: bool = bool(getattr(app_config, "overwrite", False))

# Whether a cross-device move that fails mid-copy deletes the partial target.
CLEANUP_PARTIAL_TARGET: bool = bool(getattr(app_config, "cleanup_partial_target", True))


# Concatenation ---------------------------------------------------------------

_read_workers = getattr(app_config, "read_workers", READ_WORKERS_DEFAULT)
READ_WORKERS: int = (
    _read_workers
    if isinstance(_read_workers, int) and _read_workers > 0
    else READ_WORKERS_DEFAULT
)


__all__ = [
    "CLEANUP_PARTIAL_TARGET",
    "ENCODING",
    "OVERWRITE_EXISTING",
    "READ_WORKERS",
]
