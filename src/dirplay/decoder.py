"""Open and probe audio files before they are handed to the output device."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from mutagen import File as MutagenFile
from mutagen import MutagenError

from dirplay.errors import PlaybackError, PlaybackErrorKind


@dataclass(frozen=True)
class AudioStream:
    """A file that has been opened and recognised as decodable audio."""

    path: str
    title: str
    duration_ms: Optional[int] = None


def _first_text(tags: object | None, keys: tuple[str, ...]) -> str | None:
    if tags is None:
        return None
    getter = getattr(tags, "get", None)
    if getter is None:
        return None
    for key in keys:
        try:
            value = getter(key)
        except (KeyError, ValueError):
            continue
        if value is None:
            continue
        if hasattr(value, "text"):
            value = value.text
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def _display_title(path: Path, tags: object | None) -> str:
    title = _first_text(tags, ("title", "TITLE", "TIT2", "\xa9nam"))
    if not title:
        return path.name
    artist = _first_text(tags, ("artist", "ARTIST", "TPE1", "\xa9ART"))
    if artist:
        return f"{artist} – {title}"
    return title


def open_and_decode(path: Union[str, Path]) -> AudioStream:
    """Open ``path`` and confirm it holds a recognised audio stream.

    Raises PlaybackError with kind NOT_FOUND when the file cannot be opened
    and DECODE when its contents are not an audio format mutagen understands.
    """
    source = Path(path)
    try:
        with source.open("rb") as handle:
            try:
                audio = MutagenFile(handle)
            except MutagenError as exc:
                raise PlaybackError(
                    PlaybackErrorKind.DECODE, source, str(exc)
                ) from exc
    except OSError as exc:
        raise PlaybackError(
            PlaybackErrorKind.NOT_FOUND, source, exc.strerror
        ) from exc
    if audio is None:
        raise PlaybackError(
            PlaybackErrorKind.DECODE, source, "unsupported audio format"
        )
    info = getattr(audio, "info", None)
    length = getattr(info, "length", None)
    duration_ms = int(length * 1000) if isinstance(length, (int, float)) else None
    return AudioStream(
        path=str(path),
        title=_display_title(source, getattr(audio, "tags", None)),
        duration_ms=duration_ms,
    )
