"""Status line state and rendering for the TUI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from rich.text import Text

from dirplay.audio import PlaybackMode
from dirplay.ui.entry_list_view import truncate

HINT = "j/k: move  g/G: top/bottom  Enter: play  c: pause  x: stop  q: quit"

_LEVEL_STYLES = {
    "warn": "#ffcc66",
    "error": "#ff5f52",
}

_DEFAULT_TIMEOUTS = {
    "info": 3.0,
    "warn": 6.0,
    "error": 6.0,
}

_MODE_LABELS = {
    PlaybackMode.STOPPED: "[ STOPPED ]",
    PlaybackMode.PLAYING: "[ PLAYING ]",
    PlaybackMode.PAUSED: "[ PAUSED ]",
}


@dataclass(frozen=True)
class StatusMessage:
    text: str
    level: str
    until: Optional[float]


class StatusLine:
    """Holds one transient message and renders the bottom status line."""

    def __init__(self, now: Callable[[], float]) -> None:
        self._now = now
        self._message: Optional[StatusMessage] = None

    @property
    def message(self) -> Optional[StatusMessage]:
        return self._current_message()

    def show_message(
        self,
        text: str,
        *,
        level: str = "info",
        timeout: Optional[float] = None,
    ) -> None:
        """Show ``text`` until ``timeout`` seconds pass; 0 keeps it until replaced."""
        if timeout is None:
            timeout = _DEFAULT_TIMEOUTS.get(level, 3.0)
        until = None if timeout == 0 else self._now() + max(0.0, timeout)
        self._message = StatusMessage(text=text, level=level, until=until)

    def clear_message(self) -> None:
        self._message = None

    def render_line(
        self,
        width: int,
        mode: PlaybackMode,
        now_playing: Optional[str] = None,
    ) -> Text:
        label = _MODE_LABELS[mode]
        message = self._current_message()
        if message:
            body = message.text
            style = _LEVEL_STYLES.get(message.level)
        elif now_playing and mode is not PlaybackMode.STOPPED:
            body = now_playing
            style = None
        else:
            body = HINT
            style = None
        room = max(0, width - len(label) - 1)
        line = Text(truncate(body, room), style=style or "")
        line.append(" " * max(0, room - len(line.plain)))
        line.append(" ")
        line.append(label, style="bold")
        return line

    def _current_message(self) -> Optional[StatusMessage]:
        if not self._message:
            return None
        if self._message.until is None or self._message.until > self._now():
            return self._message
        self._message = None
        return None
