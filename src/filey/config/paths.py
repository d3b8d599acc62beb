"""Shared path utilities for configuration and log locations.

Policy:
- Config: ``$FILEY_CONFIG`` when set, otherwise
  ``$XDG_CONFIG_HOME/filey/config.toml`` falling back to
  ``~/.config/filey/config.toml``.
- Log file: only when ``FILEY_LOG_FILE`` is set. A library should not write
  logs to disk unless asked to.
"""

from __future__ import annotations

import os
from pathlib import Path
from collections.abc import Mapping
from typing import Callable, Final


_ENV_CONFIG_FILE: Final[str] = "FILEY_CONFIG"
_ENV_LOG_FILE: Final[str] = "FILEY_LOG_FILE"
_ENV_XDG_CONFIG_HOME: Final[str] = "XDG_CONFIG_HOME"


def _env_value(env: Mapping[str, str] | None, name: str) -> str:
    mapping = env if env is not None else os.environ
    return (mapping.get(name) or "").strip()


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    if env_var:
        candidate = _env_value(env, env_var)
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def default_config_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the directory holding ``config.toml``.

    Honors ``XDG_CONFIG_HOME`` and falls back to ``~/.config``.
    """
    xdg_home = _env_value(env, _ENV_XDG_CONFIG_HOME)
    base = Path(xdg_home) if xdg_home else Path("~") / ".config"
    return (base / "filey").expanduser()


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the path to the TOML config file."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_CONFIG_FILE,
        default_factory=lambda: default_config_dir(env) / "config.toml",
    )


def default_log_file(env: Mapping[str, str] | None = None) -> Path | None:
    """Get the log file requested through ``FILEY_LOG_FILE``, if any."""

    candidate = _env_value(env, _ENV_LOG_FILE)
    if not candidate:
        return None
    return Path(candidate).expanduser().resolve()


__all__ = [
    "default_config_dir",
    "default_config_path",
    "default_log_file",
    "resolve_overridable_path",
]
