"""
Summary: Construction, derived names, home expansion and queries of PathValue.
Why: Pin the path normalization rules every other operation builds on.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import NoReturn

import pytest
from pytest_mock import MockerFixture

from filey import FileType, HomeDirUnresolvable, InvalidPath, PathValue, StatFailed
from filey import path_value


@pytest.mark.parametrize(
    "raw",
    ["relative/file.txt", "/etc/hosts", "a/b/../c/", "~/.vimrc", "dir/~/literal"],
)
def test_path_is_returned_exactly_as_given(raw: str) -> None:
    """String inputs are stored without normalization."""

    assert PathValue(raw).path == raw


def test_path_accepts_other_path_like_inputs(tmp_path: Path) -> None:
    """pathlib paths, bytes and other values normalize to the same string."""

    target = tmp_path / "x.txt"
    assert PathValue(target).path == str(target)
    assert PathValue(os.fsencode(str(target))).path == str(target)
    assert PathValue(PathValue(target)).path == str(target)


@pytest.mark.parametrize("raw", ["", b"", "bad\x00name"])
def test_invalid_inputs_are_rejected(raw: str | bytes) -> None:
    """Empty or NUL-containing paths raise InvalidPath."""

    with pytest.raises(InvalidPath):
        _ = PathValue(raw)


def test_non_path_like_input_is_rejected() -> None:
    """Values without a filesystem representation raise InvalidPath."""

    with pytest.raises(InvalidPath):
        _ = PathValue(42)  # pyright: ignore[reportArgumentType]


def test_invalid_path_is_a_value_error() -> None:
    """Callers catching ValueError keep working."""

    with pytest.raises(ValueError):
        _ = PathValue("")


def test_construction_does_not_touch_the_filesystem(tmp_path: Path) -> None:
    """A missing path is still a valid value."""

    value = PathValue(tmp_path / "missing")
    assert not value.exists()


def test_derived_names() -> None:
    """File name, stem and parent follow the last path segment."""

    value = PathValue("src/lib.rs")
    assert value.file_name == "lib.rs"
    assert value.file_stem == "lib"
    assert value.parent_dir == "src"


def test_derived_names_for_root() -> None:
    """A root path has neither a name nor a parent."""

    root = PathValue("/")
    assert root.file_name is None
    assert root.parent_dir is None


def test_trailing_separator_keeps_directory_name() -> None:
    """``dir/`` still names ``dir``."""

    assert PathValue("photos/animals/").file_name == "animals"


def test_dunder_protocols(tmp_path: Path) -> None:
    """PathValue works with os APIs, compares by path, and sorts."""

    value = PathValue(tmp_path)
    assert os.fspath(value) == str(tmp_path)
    assert str(value) == str(tmp_path)
    assert repr(PathValue("a")) == "PathValue('a')"
    assert PathValue("a") == PathValue("a")
    assert PathValue("a") != PathValue("b")
    assert sorted([PathValue("b"), PathValue("a")]) == [PathValue("a"), PathValue("b")]


def test_path_values_are_unhashable() -> None:
    """move_to mutates the path, so values cannot be dict keys."""

    with pytest.raises(TypeError):
        _ = hash(PathValue("a"))


# Home expansion ----------------------------------------------------------------


def test_expand_user_replaces_leading_marker(home: Path) -> None:
    """``~/.vimrc`` expands to ``<home>/.vimrc``."""

    expanded = PathValue("~/.vimrc").expand_user()
    assert expanded.path == f"{home}/.vimrc"


def test_expand_user_bare_marker(home: Path) -> None:
    """A lone ``~`` expands to the home directory itself."""

    assert PathValue("~").expand_user().path == str(home)


@pytest.mark.parametrize("raw", ["/etc/hosts", "dir/~/x", "~other/x", "a~"])
def test_expand_user_leaves_other_paths_unchanged(home: Path, raw: str) -> None:
    """Only a leading ``~`` segment is expanded."""

    _ = home
    assert PathValue(raw).expand_user().path == raw


def test_expand_user_is_idempotent(home: Path) -> None:
    """Applying expand_user twice equals applying it once."""

    _ = home
    once = PathValue("~/notes/todo.md").expand_user()
    assert once.expand_user() == once


def test_expand_user_returns_new_value(home: Path) -> None:
    """The original value keeps its unexpanded path."""

    _ = home
    original = PathValue("~/x")
    _ = original.expand_user()
    assert original.path == "~/x"


def test_expand_user_with_root_home(monkeypatch: pytest.MonkeyPatch) -> None:
    """A home of ``/`` does not produce a doubled separator."""

    monkeypatch.setenv("HOME", "/")
    assert PathValue("~/x").expand_user().path == "/x"


def _no_home() -> NoReturn:
    raise RuntimeError("Could not determine home directory.")


def test_expand_user_fails_without_home(monkeypatch: pytest.MonkeyPatch) -> None:
    """An unresolvable home directory raises HomeDirUnresolvable."""

    monkeypatch.setattr(path_value.Path, "home", _no_home)
    with pytest.raises(HomeDirUnresolvable):
        _ = PathValue("~/x").expand_user()


def test_expand_user_without_marker_ignores_missing_home(monkeypatch: pytest.MonkeyPatch) -> None:
    """Paths without ``~`` never consult the home directory."""

    monkeypatch.setattr(path_value.Path, "home", _no_home)
    assert PathValue("/etc/hosts").expand_user().path == "/etc/hosts"


def test_contract_user_round_trips(home: Path) -> None:
    """contract_user undoes expand_user."""

    _ = home
    original = PathValue("~/music/cats.png")
    assert original.expand_user().contract_user() == original


def test_contract_user_leaves_foreign_paths(home: Path) -> None:
    """Paths outside home, or merely sharing a prefix, are unchanged."""

    assert PathValue("/srv/data").contract_user().path == "/srv/data"
    assert PathValue(f"{home}-other/x").contract_user().path == f"{home}-other/x"
    assert PathValue(str(home)).contract_user().path == "~"


def test_absolutized_expands_and_normalizes(
    tmp_path: Path, home: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Relative paths are joined to the cwd; ``~`` is expanded first."""

    monkeypatch.chdir(tmp_path)
    assert PathValue("a/../b.txt").absolutized().path == os.path.join(os.getcwd(), "b.txt")
    assert PathValue("~/x").absolutized().path == str(home / "x")


def test_canonicalized_resolves_symlinks(tmp_path: Path) -> None:
    """Symlinks are resolved to the real file."""

    real = tmp_path / "real.txt"
    _ = real.write_text("x")
    link = tmp_path / "link.txt"
    link.symlink_to(real)

    assert PathValue(link).canonicalized().path == os.path.realpath(real)


def test_canonicalized_requires_existing_path(tmp_path: Path) -> None:
    """A missing path cannot be canonicalized."""

    with pytest.raises(StatFailed):
        _ = PathValue(tmp_path / "missing").canonicalized()


# Queries -----------------------------------------------------------------------


def test_type_queries(tmp_path: Path, sample_file: Path) -> None:
    """Queries agree with the entry type on disk."""

    file_value = PathValue(sample_file)
    dir_value = PathValue(tmp_path)
    link = tmp_path / "link"
    link.symlink_to(sample_file)
    link_value = PathValue(link)

    assert file_value.exists() and file_value.is_file()
    assert not file_value.is_dir() and not file_value.is_symlink()
    assert dir_value.is_dir() and not dir_value.is_file()
    assert link_value.is_symlink() and link_value.is_file()

    assert file_value.file_type() is FileType.FILE
    assert dir_value.file_type() is FileType.DIRECTORY
    assert link_value.file_type() is FileType.SYMLINK


def test_queries_on_missing_path(tmp_path: Path) -> None:
    """Missing paths answer False everywhere and report why."""

    value = PathValue(tmp_path / "missing")
    assert not value.exists()
    assert not value.is_file()
    assert not value.is_dir()
    assert not value.is_symlink()
    assert value.file_type() is None
    assert isinstance(value.probe_error(), FileNotFoundError)


def test_dangling_symlink_exists(tmp_path: Path) -> None:
    """A link whose target is gone still exists as an entry."""

    link = tmp_path / "dangling"
    link.symlink_to(tmp_path / "nowhere")
    value = PathValue(link)

    assert value.exists()
    assert value.is_symlink()
    assert not value.is_file()
    assert value.probe_error() is None


def test_probe_errors_fold_into_false(tmp_path: Path, mocker: MockerFixture) -> None:
    """Permission problems read as absent; probe_error exposes the cause."""

    value = PathValue(tmp_path / "guarded")
    _ = mocker.patch(
        "filey.path_value.os.lstat",
        side_effect=PermissionError(errno.EACCES, "Permission denied"),
    )

    assert value.exists() is False
    assert value.is_symlink() is False
    assert isinstance(value.probe_error(), PermissionError)
