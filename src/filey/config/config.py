"""Configuration management for filey."""
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from filey.config.file_ops import write_text_file
from filey.config.paths import default_config_path
from filey.platform.logging import logger

ENCODING_DEFAULT = "utf-8"
READ_WORKERS_DEFAULT = 1


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Library configuration."""

    # Text encoding used by read_text/write_text and concatenate
    encoding: str = ENCODING_DEFAULT

    # Whether move_to/copy_to may replace an existing effective target
    overwrite: bool = False

    # Thread count for concatenate; 1 reads sequentially
    read_workers: int = READ_WORKERS_DEFAULT

    # Remove a half-written target when a cross-device move fails mid-copy
    cleanup_partial_target: bool = True

    # Log file path
    log_file: Path | None = _path_field()

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to file and return the written path."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path if path is not None else default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        logger.info("Configuration saved to %s", target)
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# filey configuration file")
        lines.append("")

        lines.append("# Text encoding for read_text, write_text and concatenate")
        lines.append(f"encoding = {self._format_toml_value(config['encoding'])}")
        lines.append("")

        lines.append("# Allow move_to/copy_to to replace an existing target (default false)")
        lines.append(f"overwrite = {self._format_toml_value(config['overwrite'])}")
        lines.append("")

        lines.append("# Threads used by concatenate; 1 reads files one after another")
        lines.append(f"read_workers = {self._format_toml_value(config['read_workers'])}")
        lines.append("")

        lines.append("# Delete a partially written target when a cross-device move fails")
        lines.append(
            "cleanup_partial_target = "
            + self._format_toml_value(config["cleanup_partial_target"])
        )
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/filey.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file.

        A missing file yields the defaults without creating anything on disk.
        Unknown keys are ignored so older libraries can read newer files.

        Args:
            path: Explicit config file. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.
        """
        if cls._instance is not None and path is None:
            return cls._instance

        config_file = path if path is not None else default_config_path()

        if not config_file.exists():
            instance = cls()
        else:
            try:
                with open(config_file, "rb") as f:
                    raw = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.error("Failed to load configuration from %s: %s", config_file, e)
                raise

            known = {f.name for f in fields(cls)}
            config_dict = {key: value for key, value in raw.items() if key in known}
            if config_dict.get("log_file") == "":
                config_dict["log_file"] = None
            logger.debug("Configuration loaded from %s", config_file)
            instance = cls(**config_dict)

        if path is None:
            cls._instance = instance
            cls._loaded_from = config_file
        return instance


# Global configuration instance
config = Config.load()
