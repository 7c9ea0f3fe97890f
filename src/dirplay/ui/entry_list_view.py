"""Render the entry list with a highlight marker and a scroll window."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from rich.text import Text
from textual.widgets import Static

HIGHLIGHT_SYMBOL = ">>"
HIGHLIGHT_STYLE = "italic"


def truncate(text: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if width == 1:
        return "…"
    return text[: width - 1] + "…"


def scroll_offset(selected: Optional[int], offset: int, height: int, total: int) -> int:
    """Return the first visible row so that ``selected`` stays in view."""
    if height <= 0 or total <= 0:
        return 0
    offset = max(0, min(offset, max(0, total - height)))
    if selected is None:
        return offset
    if selected < offset:
        return selected
    if selected >= offset + height:
        return selected - height + 1
    return offset


def render_entry_list(
    entries: Sequence[str],
    selected: Optional[int],
    *,
    width: int,
    height: int,
    offset: int = 0,
) -> tuple[Text, int]:
    """Render the visible window of ``entries``.

    Returns the rendered text and the scroll offset that was used, which the
    caller feeds back on the next tick.
    """
    offset = scroll_offset(selected, offset, height, len(entries))
    pad = " " * (len(HIGHLIGHT_SYMBOL) + 1)
    marker = HIGHLIGHT_SYMBOL + " "
    text_width = max(0, width - len(pad))
    lines: list[Text] = []
    for index in range(offset, min(len(entries), offset + max(0, height))):
        label = truncate(entries[index], text_width)
        if index == selected:
            lines.append(Text(marker + label, style=HIGHLIGHT_STYLE))
        else:
            lines.append(Text(pad + label))
    return Text("\n").join(lines), offset


class EntryListView(Static):
    """Bordered list of entries; the app pushes a fresh render each tick."""

    DEFAULT_CSS = """
    EntryListView {
        height: 1fr;
        border: round $accent;
        border-title-align: left;
        padding: 0 1;
    }
    """

    def __init__(self, entries: Sequence[str], **kwargs: Any) -> None:
        super().__init__("", **kwargs)
        self.border_title = "Music List"
        self._entries = entries
        self._offset = 0
        self._last_key: Optional[tuple[Optional[int], int, int, int]] = None

    @property
    def first_visible_row(self) -> int:
        return self._offset

    def show_selection(self, selected: Optional[int]) -> None:
        width = max(1, self.content_region.width)
        height = max(1, self.content_region.height)
        key = (selected, width, height, self._offset)
        if key == self._last_key:
            return
        text, self._offset = render_entry_list(
            self._entries,
            selected,
            width=width,
            height=height,
            offset=self._offset,
        )
        self._last_key = (selected, width, height, self._offset)
        self.update(text)
