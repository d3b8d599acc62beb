"""Tests for derived runtime settings."""

from __future__ import annotations

from filey.config import settings
from filey.config.config import ENCODING_DEFAULT


def test_invalid_encoding_falls_back_to_default() -> None:
    assert settings._valid_encoding("no-such-codec") == ENCODING_DEFAULT  # pyright: ignore[reportPrivateUsage]
    assert settings._valid_encoding("") == ENCODING_DEFAULT  # pyright: ignore[reportPrivateUsage]
    assert settings._valid_encoding("latin-1") == "latin-1"  # pyright: ignore[reportPrivateUsage]


def test_read_workers_is_positive() -> None:
    assert settings.READ_WORKERS >= 1
