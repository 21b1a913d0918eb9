"""Sink adapter over a Textual ``Input`` widget."""

from __future__ import annotations

from typing import Any

from simple_keyboard.buffer import clamp_cursor


class TextualInputSink:
    """Cursor-aware sink backed by anything shaped like ``textual.widgets.Input``.

    Only ``value`` and ``cursor_position`` are touched, so the widget keeps
    firing its own ``Changed`` messages.
    """

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    @property
    def cursor_position(self) -> int:
        return int(self.widget.cursor_position)

    @cursor_position.setter
    def cursor_position(self, position: int) -> None:
        self.widget.cursor_position = clamp_cursor(position, len(self.current_text()))

    def current_text(self) -> str:
        return str(self.widget.value or "")

    def replace_all(self, text: str) -> None:
        self.widget.value = text
        self.widget.cursor_position = len(text)

    def insert_text(self, text: str, at: int) -> None:
        value = self.current_text()
        at = clamp_cursor(at, len(value))
        self.widget.value = value[:at] + text + value[at:]

    def delete_text(self, at: int, length: int) -> None:
        value = self.current_text()
        at = clamp_cursor(at, len(value))
        end = clamp_cursor(at + length, len(value))
        self.widget.value = value[:at] + value[end:]


__all__ = ["TextualInputSink"]
