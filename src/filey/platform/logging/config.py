"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Configure logging defaults and expose the shared library logger.
Why: Keep handler formatting separate from setup so configuration stays concise.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Any, Final

from rich.console import Console

from filey.config.paths import default_log_file

from .handlers import PathRichHandler


DEFAULT_LOG_FILE: Final[Path | None] = default_log_file()

# Host applications only see problems on stderr unless they ask for more.
DEFAULT_CONSOLE_LEVEL: Final[int] = logging.WARNING


def setup_logger(
    log_file: Path | None = None,
    console_level: int = DEFAULT_CONSOLE_LEVEL,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Set up and configure the library logger.

    Call with ``console_level=logging.INFO`` to see every operation on stderr.
    """

    logger = logging.getLogger("filey")
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console = Console(stderr=True, soft_wrap=True)
    console_handler = PathRichHandler(console=console)
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved_log_file = Path(log_file).expanduser().resolve()
        os.makedirs(resolved_log_file.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def log_event(
    level: int,
    event: str,
    message: str,
    *args: object,
    **extra: Any,
) -> None:
    """Emit ``message`` on the shared logger tagged with a ``filey_event``."""

    if not logger.isEnabledFor(level):
        return
    extra["filey_event"] = event
    logger.log(level, message, *args, extra=extra)


logger: Final[logging.Logger] = setup_logger(log_file=DEFAULT_LOG_FILE)


__all__ = ["DEFAULT_CONSOLE_LEVEL", "DEFAULT_LOG_FILE", "log_event", "setup_logger", "logger"]
