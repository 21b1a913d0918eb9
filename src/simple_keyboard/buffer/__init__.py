"""Text buffer, cursor state and sink abstractions."""

from .accents import APOSTROPHE, FRENCH_ACCENTS, accented_form, compose_accent
from .sink import CursorAwareSink, StringSink, TextFieldSink, TextSink, is_cursor_aware
from .state import BufferSnapshot, EditPolicy, TextBufferState
from .text_buffer import BufferListener, TextBuffer, Transaction
from .validation import clamp_cursor

__all__ = [
    "APOSTROPHE",
    "FRENCH_ACCENTS",
    "accented_form",
    "compose_accent",
    "TextSink",
    "CursorAwareSink",
    "StringSink",
    "TextFieldSink",
    "is_cursor_aware",
    "BufferSnapshot",
    "EditPolicy",
    "TextBufferState",
    "TextBuffer",
    "Transaction",
    "BufferListener",
    "clamp_cursor",
]
