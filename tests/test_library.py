"""Tests for directory scanning."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from dirplay import library
from dirplay.errors import RootDirectoryError, StartupError


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


def test_list_files_recurses_in_name_order(tmp_path: Path) -> None:
    _touch(tmp_path / "b.mp3")
    _touch(tmp_path / "a.mp3")
    _touch(tmp_path / "sub" / "z.ogg")
    _touch(tmp_path / "sub" / "deeper" / "c.wav")
    (tmp_path / "empty").mkdir()
    entries = library.list_files(tmp_path)
    assert entries == (
        str(tmp_path / "a.mp3"),
        str(tmp_path / "b.mp3"),
        str(tmp_path / "sub" / "deeper" / "c.wav"),
        str(tmp_path / "sub" / "z.ogg"),
    )
    assert isinstance(entries, tuple)


def test_list_files_includes_every_regular_file(tmp_path: Path) -> None:
    _touch(tmp_path / "cover.jpg")
    _touch(tmp_path / "song.flac")
    assert len(library.list_files(tmp_path)) == 2


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinked_directories_are_not_followed(tmp_path: Path) -> None:
    _touch(tmp_path / "real" / "a.mp3")
    try:
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks here")
    assert library.list_files(tmp_path) == (str(tmp_path / "real" / "a.mp3"),)


def test_traversal_error_propagates(monkeypatch, tmp_path: Path) -> None:
    _touch(tmp_path / "a.mp3")
    _touch(tmp_path / "locked" / "b.mp3")
    _touch(tmp_path / "z" / "c.mp3")
    original = Path.iterdir

    def iterdir(self: Path):
        if self.name == "locked":
            raise PermissionError("denied")
        return original(self)

    monkeypatch.setattr(Path, "iterdir", iterdir)
    with pytest.raises(PermissionError):
        library.list_files(tmp_path)


def test_load_entries_returns_files(tmp_path: Path) -> None:
    _touch(tmp_path / "a.mp3")
    assert library.load_entries(tmp_path) == (str(tmp_path / "a.mp3"),)


def test_load_entries_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(RootDirectoryError):
        library.load_entries(tmp_path / "nope")


def test_load_entries_rejects_file_root(tmp_path: Path) -> None:
    with pytest.raises(RootDirectoryError):
        library.load_entries(_touch(tmp_path / "a.mp3"))


def test_load_entries_rejects_empty_tree(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    with pytest.raises(StartupError, match="No files found"):
        library.load_entries(tmp_path)


def test_load_entries_wraps_scan_errors(monkeypatch, tmp_path: Path) -> None:
    def boom(_root):
        raise PermissionError("denied")

    monkeypatch.setattr(library, "list_files", boom)
    with pytest.raises(RootDirectoryError, match="denied"):
        library.load_entries(tmp_path)
