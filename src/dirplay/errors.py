"""Exception hierarchy for dirplay."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Union


class DirPlayError(Exception):
    """Base exception for dirplay."""


class StartupError(DirPlayError):
    """Fatal problem detected before the session loop starts."""


class RootDirectoryError(StartupError):
    """The root directory is missing, unreadable, or holds no files."""


class DeviceUnavailableError(StartupError):
    """The default audio output device could not be opened."""


class RenderError(DirPlayError):
    """Terminal rendering failed; the session cannot continue."""


class PlaybackErrorKind(Enum):
    NOT_FOUND = "not_found"
    DECODE = "decode"
    DEVICE = "device"


class PlaybackError(DirPlayError):
    """Recoverable failure while starting playback of a single file."""

    def __init__(
        self,
        kind: PlaybackErrorKind,
        path: Union[str, Path, None] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.path = str(path) if path is not None else None
        self.detail = detail
        super().__init__(self._describe())

    def _describe(self) -> str:
        label = {
            PlaybackErrorKind.NOT_FOUND: "File not found",
            PlaybackErrorKind.DECODE: "Cannot decode",
            PlaybackErrorKind.DEVICE: "Audio device error",
        }[self.kind]
        parts = [label]
        if self.path:
            parts.append(self.path)
        text = ": ".join(parts)
        if self.detail:
            text = f"{text} ({self.detail})"
        return text
