"""Highlighted-row state over the entry list."""

from __future__ import annotations

from typing import Optional


class Selection:
    """Optional index into a fixed-length, non-empty list."""

    def __init__(self, length: int, index: Optional[int] = None) -> None:
        if length < 1:
            raise ValueError("Selection requires a non-empty list")
        self.length = length
        self.index: Optional[int] = None
        if index is not None:
            self.index = max(0, min(index, length - 1))

    def is_selected(self) -> bool:
        return self.index is not None

    def move_next(self) -> None:
        if self.index is None:
            self.index = 0
            return
        self.index = min(self.index + 1, self.length - 1)

    def move_prev(self) -> None:
        if self.index is None:
            return
        self.index = max(self.index - 1, 0)

    def move_first(self) -> None:
        self.index = 0

    def move_last(self) -> None:
        self.index = self.length - 1

    def unselect(self) -> None:
        self.index = None
