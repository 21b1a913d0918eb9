"""Locale accent composition applied to the character before the cursor."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .state import BufferSnapshot
from .text_buffer import TextBuffer

APOSTROPHE = "’"

FRENCH_ACCENTS: Mapping[str, str] = MappingProxyType(
    {
        "a": "à",
        "e": "é",
        "i": "î",
        "u": "û",
        "o": "ô",
        "c": "ç",
    }
)


def accented_form(character: str | None, table: Mapping[str, str] = FRENCH_ACCENTS) -> str:
    """Return the text that replaces ``character`` when the accent key fires."""

    if character is None:
        return APOSTROPHE
    return table.get(character, character + APOSTROPHE)


def compose_accent(
    buffer: TextBuffer, table: Mapping[str, str] = FRENCH_ACCENTS
) -> BufferSnapshot:
    """Replace the preceding character with its accented form.

    Goes through ``delete_backward`` + ``insert_text_at_cursor`` so the
    cursor and the sink stay consistent in both edit policies.
    """

    previous = buffer.character_before_cursor()
    if previous is not None:
        buffer.delete_backward()
    return buffer.insert_text_at_cursor(accented_form(previous, table))


__all__ = ["APOSTROPHE", "FRENCH_ACCENTS", "accented_form", "compose_accent"]
