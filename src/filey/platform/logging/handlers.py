"""Rich console handler that renders filesystem operation records."""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class PathRichHandler(RichHandler):
    """Rich handler that displays operation events with compact, coloured paths.

    Records carrying a ``filey_event`` extra are rendered as a single line:
    an icon, a verb, the source path and, for two-path operations, an arrow
    followed by the target path. Other records fall back to Rich's default
    rendering.
    """

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str, str]]] = {
        "filey.move": ("📦", "magenta", "Moved "),
        "filey.move.fallback": ("🚚", "yellow", "Copying across devices "),
        "filey.move.error": ("⛔", "red", "Move failed "),
        "filey.copy": ("📄", "cyan", "Copied "),
        "filey.symlink": ("🔗", "blue", "Linked "),
        "filey.hard_link": ("🔗", "blue", "Hard-linked "),
        "filey.remove": ("🗑️", "yellow", "Removed "),
        "filey.create": ("✨", "green", "Created "),
        "filey.concatenate": ("🧵", "green", "Concatenated "),
    }
    _TWO_PATH_EVENTS: ClassVar[frozenset[str]] = frozenset(
        {"filey.move", "filey.move.fallback", "filey.move.error", "filey.copy", "filey.symlink", "filey.hard_link"}
    )
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Format a path with coloured separators and ellipsis truncation.

        Args:
            path: Absolute or relative path string to format.

        Returns:
            Text: Path keeping only the last few segments.
        """
        pure_path = self._to_pure_path(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        body_parts = [part for part in pure_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = ""
        if anchor:
            display_string = anchor.rstrip("\\/") + separator
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)
        if not display_string:
            display_string = "."
        return self._style_path_string(display_string, separator)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _style_path_string(path_string: str, separator: str) -> Text:
        text = Text()
        separator_chars = {separator, "/"}
        for char in path_string:
            if char in separator_chars or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_event_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured operation events with dedicated styling."""

        event = getattr(record, "filey_event", None)
        if not isinstance(event, str):
            return None

        icon, color, verb = self._EVENT_STYLES.get(event, ("ℹ️", "blue", ""))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        _ = body.append(verb)

        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        if source_path:
            _ = body.append_text(self._format_path(str(source_path)))
        if event in self._TWO_PATH_EVENTS and target_path:
            _ = body.append(" → ")
            _ = body.append_text(self._format_path(str(target_path)))

        details: list[str] = []
        count = getattr(record, "count", None)
        if isinstance(count, int):
            details.append(f"{count} file{'s' if count != 1 else ''}")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        event_text = self._render_event_message(record)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["PathRichHandler"]
