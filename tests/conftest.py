"""Shared pytest fixtures for path value tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``HOME`` at a fresh directory so ``~`` expansion is predictable."""

    home_dir = tmp_path / "home" / "tester"
    home_dir.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Create ``a/file.txt`` holding a short payload."""

    source_dir = tmp_path / "a"
    source_dir.mkdir()
    path = source_dir / "file.txt"
    _ = path.write_bytes(b"payload\n")
    return path
