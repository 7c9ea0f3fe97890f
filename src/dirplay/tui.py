"""Textual session loop for dirplay."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Optional

try:
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
    from rich.text import Text
except Exception as exc:  # pragma: no cover - depends on environment
    raise RuntimeError(
        "Textual is required for the TUI. Install the 'textual' dependency."
    ) from exc

from dirplay.audio import AudioSession
from dirplay.audio_device import OutputDevice
from dirplay.commands import Command, dispatch, key_name
from dirplay.config import SessionConfig
from dirplay.errors import RenderError
from dirplay.hangwatch import TickWatchdog
from dirplay.library import EntryList
from dirplay.logging_setup import restore_console_levels, set_console_level
from dirplay.processor import CommandOutcome, CommandProcessor, SessionState
from dirplay.selection import Selection
from dirplay.ui.entry_list_view import EntryListView
from dirplay.ui.status_line import StatusLine

logger = logging.getLogger(__name__)


class StatusBar(Static):
    """One-line status bar below the list."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(self, status: StatusLine, audio: AudioSession, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._status_line = status
        self._audio = audio

    def render(self) -> Text:
        stream = self._audio.queued_stream
        return self._status_line.render_line(
            max(1, self.content_region.width),
            self._audio.mode,
            now_playing=stream.title if stream else None,
        )


class DirPlayApp(App):
    """Interactive list of entries bound to one audio session."""

    TITLE = "dirplay"
    CSS = """
    Screen {
        layout: vertical;
    }
    """

    def __init__(
        self,
        *,
        entries: EntryList,
        audio: AudioSession,
        config: Optional[SessionConfig] = None,
        processor: Optional[CommandProcessor] = None,
        now: Callable[[], float] = time.monotonic,
        watchdog: bool = True,
    ) -> None:
        super().__init__()
        self.session_config = config or SessionConfig()
        self.session = SessionState(
            entries=entries,
            selection=Selection(len(entries)),
            audio=audio,
        )
        self._processor = processor or CommandProcessor()
        self._now = now
        self._status_line = StatusLine(now)
        self._list_view: Optional[EntryListView] = None
        self._status_bar: Optional[StatusBar] = None
        self._tick_count = 0
        self._last_tick = now()
        self._use_watchdog = watchdog
        self._watchdog: Optional[TickWatchdog] = None

    @property
    def status_line(self) -> StatusLine:
        return self._status_line

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def compose(self) -> ComposeResult:
        yield EntryListView(self.session.entries, id="entry_list")
        yield StatusBar(self._status_line, self.session.audio, id="status_bar")

    # --- Lifecycle ---
    def on_mount(self) -> None:
        self._list_view = self.query_one("#entry_list", EntryListView)
        self._status_bar = self.query_one("#status_bar", StatusBar)
        self._install_asyncio_exception_handler()
        self._start_watchdog()
        self.set_interval(self.session_config.tick_interval, self._on_tick)
        self._on_tick()
        logger.info("TUI mounted entries=%d", len(self.session.entries))

    def on_unmount(self) -> None:
        if self._watchdog:
            self._watchdog.stop()
            self._watchdog = None
        logger.info("TUI unmounted")

    def _install_asyncio_exception_handler(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        def handler(_loop: asyncio.AbstractEventLoop, context: dict) -> None:
            exc = context.get("exception")
            if exc:
                logger.exception("Asyncio exception", exc_info=exc)
            else:
                logger.error("Asyncio error: %s", context.get("message"))

        loop.set_exception_handler(handler)

    def _start_watchdog(self) -> None:
        if not self._use_watchdog:
            return
        self._watchdog = TickWatchdog(
            lambda: self._last_tick,
            threshold_seconds=self.session_config.watchdog_threshold,
        )
        self._watchdog.start()

    # --- Tick ---
    def _on_tick(self) -> None:
        self._tick_count += 1
        self._last_tick = self._now()
        if self.session.audio.consume_end_of_track():
            logger.info("End of track %s", self.session.audio.queued_path)
            self._status_line.show_message("Track finished")
        self._refresh_view()

    def _refresh_view(self) -> None:
        if self._list_view is not None:
            self._list_view.show_selection(self.session.selection.index)
        if self._status_bar is not None:
            self._status_bar.refresh()

    # --- Input ---
    def on_key(self, event: events.Key) -> None:
        command = dispatch(
            key_name(event),
            selected=self.session.selection.index,
            mode=self.session.audio.mode,
        )
        if command is Command.NOOP:
            return
        event.stop()
        self.handle_command(command)

    def handle_command(self, command: Command) -> CommandOutcome:
        """Apply ``command`` and reflect the outcome on screen."""
        outcome = self._processor.apply(command, self.session)
        if outcome.message:
            self._status_line.show_message(outcome.message, level=outcome.level)
        if outcome.quit:
            logger.info("TUI exit requested")
            self.exit(return_code=0)
            return outcome
        self._refresh_view()
        return outcome


# Public entrypoints
def run_tui(entries: EntryList, device: OutputDevice, config: SessionConfig) -> int:
    """Run the session loop and return an exit code.

    The audio session is closed and the console log level restored on every
    exit path; Textual restores the terminal mode itself.
    """
    logger.info("TUI start root=%s entries=%d", config.root, len(entries))
    audio = AudioSession(device, volume=config.volume)
    previous_levels = set_console_level(logging.CRITICAL)
    try:
        app = DirPlayApp(entries=entries, audio=audio, config=config)
        try:
            app.run()
        except Exception as exc:
            logger.exception("Terminal session failed")
            raise RenderError(f"Terminal session failed: {exc}") from exc
        exit_code = app.return_code or 0
    finally:
        audio.close()
        restore_console_levels(previous_levels)
    logger.info("TUI exit code=%s", exit_code)
    return exit_code
