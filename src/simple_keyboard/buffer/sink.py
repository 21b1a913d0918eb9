"""Sink protocols describing where buffer edits end up."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, runtime_checkable

from .validation import clamp_cursor


@runtime_checkable
class TextSink(Protocol):
    """Minimal destination: read the text, overwrite it wholesale."""

    def current_text(self) -> str:
        ...

    def replace_all(self, text: str) -> None:
        ...


@runtime_checkable
class CursorAwareSink(TextSink, Protocol):
    """Sink that tracks its own cursor and accepts positional edits."""

    cursor_position: int

    def insert_text(self, text: str, at: int) -> None:
        ...

    def delete_text(self, at: int, length: int) -> None:
        ...


def is_cursor_aware(sink: Optional[TextSink]) -> bool:
    return sink is not None and isinstance(sink, CursorAwareSink)


@dataclass
class StringSink:
    """Plain string holder, the equivalent of binding the keyboard to a variable.

    ``on_change`` fires with the new text whenever ``replace_all`` runs.
    """

    text: str = ""
    on_change: Optional[Callable[[str], None]] = None
    writes: int = 0

    def current_text(self) -> str:
        return self.text

    def replace_all(self, text: str) -> None:
        self.text = text
        self.writes += 1
        if self.on_change is not None:
            self.on_change(text)


@dataclass
class TextFieldSink:
    """In-memory text field with its own cursor.

    Used headless and in tests; host adapters (see
    ``simple_keyboard.adapters.textual.sinks``) implement the same surface
    over real widgets.
    """

    text: str = ""
    cursor_position: int = 0
    history: List[str] = field(default_factory=list)

    def current_text(self) -> str:
        return self.text

    def replace_all(self, text: str) -> None:
        self.text = text
        self.cursor_position = len(text)
        self.history.append(f"replace:{text}")

    def insert_text(self, text: str, at: int) -> None:
        at = clamp_cursor(at, len(self.text))
        self.text = self.text[:at] + text + self.text[at:]
        self.history.append(f"insert:{at}:{text}")

    def delete_text(self, at: int, length: int) -> None:
        at = clamp_cursor(at, len(self.text))
        end = clamp_cursor(at + length, len(self.text))
        self.text = self.text[:at] + self.text[end:]
        self.history.append(f"delete:{at}:{end - at}")


__all__ = [
    "TextSink",
    "CursorAwareSink",
    "StringSink",
    "TextFieldSink",
    "is_cursor_aware",
]
