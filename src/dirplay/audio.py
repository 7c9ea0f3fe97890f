"""Audio session: one output sink and its playback mode."""

from __future__ import annotations

from enum import Enum
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from dirplay.audio_device import OutputDevice
from dirplay.decoder import AudioStream, open_and_decode
from dirplay.errors import PlaybackError

logger = logging.getLogger(__name__)


class PlaybackMode(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class AudioSession:
    """Owns the output sink and at most one queued track.

    Starting a new track always stops and discards the previous one, so at
    most one track is ever audible.
    """

    def __init__(
        self,
        device: OutputDevice,
        *,
        volume: float = 1.0,
        decoder: Callable[[Union[str, Path]], AudioStream] = open_and_decode,
    ) -> None:
        self._sink = device.new_sink()
        self._decoder = decoder
        self._mode = PlaybackMode.STOPPED
        self._queued: Optional[AudioStream] = None
        self._volume = 1.0
        self.set_volume(volume)

    @property
    def mode(self) -> PlaybackMode:
        return self._mode

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def queued_stream(self) -> Optional[AudioStream]:
        return self._queued

    @property
    def queued_path(self) -> Optional[str]:
        return self._queued.path if self._queued else None

    def play(self, path: Union[str, Path]) -> AudioStream:
        """Decode ``path`` and make it the only queued track.

        Decoding happens before the current track is touched, so a file that
        cannot be opened or decoded leaves the session as it was. A sink
        failure after the swap leaves the session stopped and empty.
        """
        stream = self._decoder(path)
        self._discard()
        try:
            self._sink.append(stream)
            self._sink.play()
        except PlaybackError:
            self._discard()
            raise
        self._queued = stream
        self._mode = PlaybackMode.PLAYING
        logger.info("Playing %s", stream.path)
        return stream

    def pause(self) -> None:
        if self._mode is not PlaybackMode.PLAYING:
            return
        self._sink.pause()
        self._mode = PlaybackMode.PAUSED
        logger.info("Playback paused")

    def resume(self) -> None:
        if self._mode is not PlaybackMode.PAUSED:
            return
        self._sink.play()
        self._mode = PlaybackMode.PLAYING
        logger.info("Playback resumed")

    def toggle_pause_resume(self) -> None:
        if self._mode is PlaybackMode.PLAYING:
            self.pause()
        elif self._mode is PlaybackMode.PAUSED:
            self.resume()

    def stop(self) -> None:
        was_active = self._mode is not PlaybackMode.STOPPED
        self._discard()
        if was_active:
            logger.info("Playback stopped")

    def set_volume(self, level: float) -> None:
        self._volume = max(0.0, min(1.0, float(level)))
        self._sink.set_volume(self._volume)

    def consume_end_of_track(self) -> bool:
        """Return True once after the queued track finished on its own."""
        if self._queued is None:
            return False
        return self._sink.consume_end_reached()

    def close(self) -> None:
        self._discard()
        self._sink.release()

    def _discard(self) -> None:
        self._sink.stop()
        self._queued = None
        self._mode = PlaybackMode.STOPPED
