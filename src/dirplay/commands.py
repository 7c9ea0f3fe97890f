"""Key classification into session commands."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from textual import events

from dirplay.audio import PlaybackMode


class Command(Enum):
    MOVE_NEXT = "move_next"
    MOVE_PREV = "move_prev"
    MOVE_FIRST = "move_first"
    MOVE_LAST = "move_last"
    UNSELECT = "unselect"
    TOGGLE_PAUSE_RESUME = "toggle_pause_resume"
    STOP = "stop"
    ACTIVATE = "activate"
    SEEK_FORWARD = "seek_forward"
    SEEK_BACKWARD = "seek_backward"
    QUIT = "quit"
    NOOP = "noop"


KEYMAP: dict[str, Command] = {
    "q": Command.QUIT,
    "j": Command.MOVE_NEXT,
    "k": Command.MOVE_PREV,
    "g": Command.MOVE_FIRST,
    "G": Command.MOVE_LAST,
    "h": Command.SEEK_BACKWARD,
    "l": Command.SEEK_FORWARD,
    "c": Command.TOGGLE_PAUSE_RESUME,
    "x": Command.STOP,
    "escape": Command.UNSELECT,
    "enter": Command.ACTIVATE,
}

_SEEK_COMMANDS = {Command.SEEK_FORWARD, Command.SEEK_BACKWARD}


def key_name(event: events.Key) -> str:
    """Return the printable character for ``event``, else its key name."""
    if event.is_printable and event.character:
        return event.character
    return event.key


def dispatch(
    key: str,
    *,
    selected: Optional[int],
    mode: PlaybackMode,
) -> Command:
    """Classify one key press given the current selection and playback mode."""
    command = KEYMAP.get(key, Command.NOOP)
    if command is Command.ACTIVATE and selected is None:
        return Command.NOOP
    if command in _SEEK_COMMANDS and mode is PlaybackMode.STOPPED:
        return Command.NOOP
    return command
