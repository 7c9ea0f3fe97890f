"""VLC-backed audio output device and sink."""

from __future__ import annotations

import logging
import threading
from types import TracebackType
from typing import Any, Optional, cast

from dirplay.decoder import AudioStream
from dirplay.errors import DeviceUnavailableError, PlaybackError, PlaybackErrorKind

logger = logging.getLogger(__name__)

vlc: Any | None = None
_VLC_IMPORT_ERROR: Optional[Exception] = None


def _load_vlc() -> None:
    global vlc
    global _VLC_IMPORT_ERROR
    if vlc is not None or _VLC_IMPORT_ERROR is not None:
        return
    try:
        import vlc as vlc_module  # type: ignore
    except Exception as exc:  # pragma: no cover - platform-dependent import
        vlc = None
        _VLC_IMPORT_ERROR = exc
    else:
        vlc = cast(Any, vlc_module)
        _VLC_IMPORT_ERROR = None


class Sink:
    """Single-stream output queue on top of a VLC MediaPlayer.

    ``append`` replaces whatever media was loaded; the sink never holds more
    than one stream.
    """

    def __init__(self, instance: Any) -> None:
        self._instance = instance
        self._player = instance.media_player_new()
        if self._player is None:
            raise DeviceUnavailableError("libvlc refused a new media player")
        self._stream: Optional[AudioStream] = None
        self._paused = False
        self._end_reached = threading.Event()
        self._attach_end_reached_event()

    def _attach_end_reached_event(self) -> None:
        if vlc is None:
            return
        vlc_module = cast(Any, vlc)
        try:
            event_manager = self._player.event_manager()
            event_manager.event_attach(
                vlc_module.EventType.MediaPlayerEndReached, self._handle_end_reached
            )
        except Exception:
            logger.warning("End-of-track events unavailable", exc_info=True)

    def _handle_end_reached(self, event: object) -> None:
        del event
        self._end_reached.set()

    @property
    def stream(self) -> Optional[AudioStream]:
        return self._stream

    def empty(self) -> bool:
        return self._stream is None

    def append(self, stream: AudioStream) -> None:
        """Load ``stream`` as the sink's only media."""
        try:
            media = self._instance.media_new(stream.path)
            if media is not None:
                self._player.set_media(media)
        except Exception as exc:
            raise PlaybackError(
                PlaybackErrorKind.DEVICE, stream.path, f"libvlc error: {exc}"
            ) from exc
        if media is None:
            raise PlaybackError(
                PlaybackErrorKind.DEVICE, stream.path, "libvlc could not open media"
            )
        self._stream = stream
        self._paused = False
        self._end_reached.clear()

    def play(self) -> None:
        path = self._stream.path if self._stream else None
        try:
            result = self._player.play()
        except Exception as exc:
            raise PlaybackError(
                PlaybackErrorKind.DEVICE, path, f"libvlc error: {exc}"
            ) from exc
        if result == -1:
            raise PlaybackError(PlaybackErrorKind.DEVICE, path, "playback refused")
        self._paused = False

    def pause(self) -> None:
        self._player.set_pause(1)
        self._paused = True

    def stop(self) -> None:
        """Stop output and drop the loaded stream."""
        self._player.stop()
        self._stream = None
        self._paused = False
        self._end_reached.clear()

    def is_paused(self) -> bool:
        return self._paused

    def set_volume(self, level: float) -> None:
        """Set volume from a 0.0-1.0 level."""
        self._player.audio_set_volume(int(round(max(0.0, min(1.0, level)) * 100)))

    def consume_end_reached(self) -> bool:
        """Return True if an end-reached event fired since last check."""
        if self._end_reached.is_set():
            self._end_reached.clear()
            return True
        return False

    def release(self) -> None:
        self.stop()
        releaser = getattr(self._player, "release", None)
        if callable(releaser):
            releaser()


class OutputDevice:
    """Handle on the default audio output, valid until ``close``."""

    def __init__(self, instance: Any) -> None:
        self._instance = instance
        self._closed = False

    def new_sink(self) -> Sink:
        if self._closed:
            raise DeviceUnavailableError("audio device is closed")
        return Sink(self._instance)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        releaser = getattr(self._instance, "release", None)
        if callable(releaser):
            releaser()
        logger.info("Audio device released")

    def __enter__(self) -> "OutputDevice":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


def open_default_device() -> OutputDevice:
    """Open the default output device or raise DeviceUnavailableError."""
    _load_vlc()
    if vlc is None:
        raise DeviceUnavailableError(
            "VLC backend is unavailable. Install VLC and the python-vlc package."
        ) from _VLC_IMPORT_ERROR
    try:
        instance = cast(Any, vlc).Instance("--no-video", "--quiet")
    except Exception as exc:
        raise DeviceUnavailableError(f"Cannot start libvlc: {exc}") from exc
    if instance is None:
        raise DeviceUnavailableError("libvlc failed to initialise an audio instance")
    logger.info("Audio device opened")
    return OutputDevice(instance)
