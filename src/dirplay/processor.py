"""Apply session commands to the selection and the audio session."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

from dirplay.audio import AudioSession, PlaybackMode
from dirplay.commands import Command
from dirplay.errors import PlaybackError
from dirplay.library import EntryList
from dirplay.selection import Selection

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Everything the loop mutates between ticks."""

    entries: EntryList
    selection: Selection
    audio: AudioSession


@dataclass(frozen=True)
class CommandOutcome:
    quit: bool = False
    error: Optional[PlaybackError] = None
    message: Optional[str] = None
    level: str = "info"


_NAVIGATION = {
    Command.MOVE_NEXT: Selection.move_next,
    Command.MOVE_PREV: Selection.move_prev,
    Command.MOVE_FIRST: Selection.move_first,
    Command.MOVE_LAST: Selection.move_last,
    Command.UNSELECT: Selection.unselect,
}

_TOGGLE_MESSAGES = {
    PlaybackMode.PLAYING: "Playing",
    PlaybackMode.PAUSED: "Paused",
}


class CommandProcessor:
    """Turns one Command into state changes plus an outcome for the loop."""

    def apply(self, command: Command, state: SessionState) -> CommandOutcome:
        navigate = _NAVIGATION.get(command)
        if navigate is not None:
            navigate(state.selection)
            return CommandOutcome()
        if command is Command.TOGGLE_PAUSE_RESUME:
            state.audio.toggle_pause_resume()
            return CommandOutcome(message=_TOGGLE_MESSAGES.get(state.audio.mode))
        if command is Command.STOP:
            state.audio.stop()
            return CommandOutcome(message="Stopped")
        if command is Command.ACTIVATE:
            return self._activate(state)
        if command in (Command.SEEK_FORWARD, Command.SEEK_BACKWARD):
            return CommandOutcome(message="Seek unsupported", level="warn")
        if command is Command.QUIT:
            logger.info("Quit requested")
            return CommandOutcome(quit=True)
        return CommandOutcome()

    def _activate(self, state: SessionState) -> CommandOutcome:
        index = state.selection.index
        if index is None:
            return CommandOutcome()
        path = state.entries[index]
        try:
            stream = state.audio.play(path)
        except PlaybackError as exc:
            logger.warning("Playback failed: %s", exc)
            return CommandOutcome(error=exc, message=str(exc), level="error")
        return CommandOutcome(message=f"Playing: {stream.title}")
