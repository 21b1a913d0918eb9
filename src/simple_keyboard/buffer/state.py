"""Value, cursor and change tracking for the text buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EditPolicy(str, Enum):
    """How insert/delete pick their position."""

    CURSOR = "cursor"  # edit at the tracked cursor
    APPEND = "append"  # legacy: append at end, delete the last character


@dataclass(slots=True)
class TextBufferState:
    """Mutable value + cursor pair owned by a ``TextBuffer``.

    ``cursor_position`` may temporarily hold an out-of-range value (set by a
    caller or left behind by an out-of-band sink edit). Every operation
    clamps it before use.
    """

    value: str = ""
    cursor_position: int = 0
    version: int = 0

    @property
    def length(self) -> int:
        return len(self.value)

    def bump(self) -> int:
        self.version += 1
        return self.version


@dataclass(frozen=True, slots=True)
class BufferSnapshot:
    """Read-only view handed to subscribers after each change."""

    value: str
    cursor_position: int
    version: int
    label: str = ""


__all__ = ["EditPolicy", "TextBufferState", "BufferSnapshot"]
