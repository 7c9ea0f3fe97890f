"""Pytest configuration and shared fakes for dirplay."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, Union

import pytest

from dirplay.audio import AudioSession
from dirplay.decoder import AudioStream
from dirplay.errors import PlaybackError, PlaybackErrorKind


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    del config
    if os.environ.get("DIRPLAY_CI") != "1":
        return
    skip_vlc = pytest.mark.skip(reason="Skipping VLC-dependent tests in CI.")
    for item in items:
        if "vlc" in item.keywords:
            item.add_marker(skip_vlc)


class FakeSink:
    def __init__(self) -> None:
        self.stream: Optional[AudioStream] = None
        self.appended: list[str] = []
        self.play_calls = 0
        self.pause_calls = 0
        self.stop_calls = 0
        self.volume: Optional[float] = None
        self.released = False
        self.fail_play = False
        self._paused = False
        self._end_reached = False

    def empty(self) -> bool:
        return self.stream is None

    def append(self, stream: AudioStream) -> None:
        self.stream = stream
        self.appended.append(stream.path)

    def play(self) -> None:
        self.play_calls += 1
        if self.fail_play:
            raise PlaybackError(PlaybackErrorKind.DEVICE, detail="no output")
        self._paused = False

    def pause(self) -> None:
        self.pause_calls += 1
        self._paused = True

    def stop(self) -> None:
        self.stop_calls += 1
        self.stream = None
        self._paused = False
        self._end_reached = False

    def is_paused(self) -> bool:
        return self._paused

    def set_volume(self, level: float) -> None:
        self.volume = level

    def consume_end_reached(self) -> bool:
        if self._end_reached:
            self._end_reached = False
            return True
        return False

    def signal_end_reached(self) -> None:
        self._end_reached = True

    def release(self) -> None:
        self.released = True


class FakeDevice:
    def __init__(self) -> None:
        self.sinks: list[FakeSink] = []
        self.closed = False

    @property
    def sink(self) -> FakeSink:
        return self.sinks[-1]

    def new_sink(self) -> FakeSink:
        sink = FakeSink()
        self.sinks.append(sink)
        return sink

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeDevice":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def fake_decoder(path: Union[str, Path]) -> AudioStream:
    """Decode anything except names starting with ``missing`` or ``bad``."""
    name = Path(path).name
    if name.startswith("missing"):
        raise PlaybackError(PlaybackErrorKind.NOT_FOUND, path)
    if name.startswith("bad"):
        raise PlaybackError(PlaybackErrorKind.DECODE, path, "garbage")
    return AudioStream(path=str(path), title=name, duration_ms=1000)


@pytest.fixture
def fake_device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
def make_session(fake_device: FakeDevice) -> Callable[..., AudioSession]:
    def factory(**kwargs: object) -> AudioSession:
        kwargs.setdefault("decoder", fake_decoder)
        return AudioSession(fake_device, **kwargs)  # type: ignore[arg-type]

    return factory
