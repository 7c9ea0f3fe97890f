"""Crash dumps and a watchdog for a stalled render tick."""

from __future__ import annotations

import faulthandler
import logging
import threading
import time
from pathlib import Path
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)

_DUMP_FILE: Optional[TextIO] = None
_LOCK = threading.Lock()


def enable_faulthandler(log_path: Path) -> Path:
    """Route faulthandler output to ``hangdump.log`` beside ``log_path``."""
    dump_path = log_path.parent / "hangdump.log"
    try:
        dump_path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(dump_path, "a", encoding="utf-8")
    except OSError:
        logger.warning("Cannot open %s; crash dumps disabled", dump_path)
        return dump_path
    global _DUMP_FILE
    with _LOCK:
        _DUMP_FILE = handle
    faulthandler.enable(file=handle, all_threads=True)
    return dump_path


def dump_threads(label: str) -> None:
    """Append a labelled stack dump of every thread to the dump file."""
    with _LOCK:
        handle = _DUMP_FILE
    if handle is None:
        return
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    try:
        handle.write(f"\n[{stamp}] {label}\n")
        faulthandler.dump_traceback(file=handle, all_threads=True)
        handle.flush()
    except (OSError, ValueError):
        logger.warning("Thread dump failed for %s", label, exc_info=True)


class TickWatchdog:
    """Background thread that dumps stacks when the render tick stops."""

    def __init__(
        self,
        last_tick: Callable[[], float],
        *,
        threshold_seconds: float = 15.0,
        repeat_seconds: float = 30.0,
        poll_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._last_tick = last_tick
        self._threshold = threshold_seconds
        self._repeat = repeat_seconds
        self._poll = poll_seconds
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="TickWatchdog", daemon=True
        )
        self._last_dump: Optional[float] = None

    def start(self) -> None:
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        self._stop_event.set()
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)

    def check(self) -> bool:
        """Dump threads if the tick is stale; return True when a dump was taken."""
        now = self._clock()
        if now - self._last_tick() <= self._threshold:
            return False
        if self._last_dump is not None and now - self._last_dump <= self._repeat:
            return False
        self._last_dump = now
        logger.warning("Render tick stalled for over %.0fs", self._threshold)
        dump_threads("render tick stalled")
        return True

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.check()
            self._stop_event.wait(self._poll)
