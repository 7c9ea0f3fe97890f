"""Tests for opening and probing audio files."""

from __future__ import annotations

from pathlib import Path
import wave

import pytest

from dirplay.decoder import AudioStream, _display_title, open_and_decode
from dirplay.errors import PlaybackError, PlaybackErrorKind


def _write_wav(path: Path, seconds: float = 0.5, rate: int = 8000) -> Path:
    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(1)
        handle.setsampwidth(2)
        handle.setframerate(rate)
        handle.writeframes(b"\x00\x00" * int(rate * seconds))
    return path


def test_decodes_wav_with_duration(tmp_path: Path) -> None:
    path = _write_wav(tmp_path / "tone.wav")
    stream = open_and_decode(path)
    assert isinstance(stream, AudioStream)
    assert stream.path == str(path)
    assert stream.title == "tone.wav"
    assert stream.duration_ms is not None
    assert 400 <= stream.duration_ms <= 600


def test_accepts_string_paths(tmp_path: Path) -> None:
    path = _write_wav(tmp_path / "tone.wav")
    assert open_and_decode(str(path)).path == str(path)


def test_missing_file_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(PlaybackError) as info:
        open_and_decode(tmp_path / "missing.mp3")
    assert info.value.kind is PlaybackErrorKind.NOT_FOUND
    assert "missing.mp3" in str(info.value)


def test_directory_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(PlaybackError) as info:
        open_and_decode(tmp_path)
    assert info.value.kind is PlaybackErrorKind.NOT_FOUND


def test_unrecognised_content_is_decode_error(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("not audio at all", encoding="utf-8")
    with pytest.raises(PlaybackError) as info:
        open_and_decode(path)
    assert info.value.kind is PlaybackErrorKind.DECODE


class _Frame:
    def __init__(self, *text: str) -> None:
        self.text = list(text)


def test_display_title_uses_tags() -> None:
    tags = {"TIT2": _Frame("Song"), "TPE1": _Frame("Artist")}
    assert _display_title(Path("x.mp3"), tags) == "Artist – Song"


def test_display_title_without_artist() -> None:
    assert _display_title(Path("x.flac"), {"title": ["Only Title"]}) == "Only Title"


def test_display_title_falls_back_to_name() -> None:
    assert _display_title(Path("dir/x.ogg"), None) == "x.ogg"
    assert _display_title(Path("dir/x.ogg"), {"title": ["  "]}) == "x.ogg"
