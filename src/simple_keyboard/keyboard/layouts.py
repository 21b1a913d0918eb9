"""Key tables for each language and for the numbers/symbols grids."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

Rows = Tuple[Tuple[str, ...], ...]


class KeyboardMode(str, Enum):
    """Layout family shown by the keyboard. Exactly one is active."""

    LETTERS = "letters"
    NUMBERS = "numbers"
    SYMBOLS = "symbols"


class Language(str, Enum):
    ENGLISH = "english"
    FRENCH = "french"
    GERMAN = "german"

    def rows(self, *, upper: bool = False) -> Rows:
        rows = _LETTER_ROWS[self]
        if upper:
            return tuple(tuple(key.upper() for key in row) for row in rows)
        return rows

    @property
    def has_accent_key(self) -> bool:
        return self is Language.FRENCH


_LETTER_ROWS: Dict[Language, Rows] = {
    Language.ENGLISH: (
        tuple("qwertyuiop"),
        tuple("asdfghjkl"),
        tuple("zxcvbnm"),
    ),
    Language.FRENCH: (
        tuple("azertyuiop"),
        tuple("qsdfghjklm"),
        tuple("wxcvbn"),
    ),
    Language.GERMAN: (
        tuple("qwertzuiopü"),
        tuple("asdfghjklöä"),
        tuple("yxcvbnm"),
    ),
}

DIGITS: Tuple[str, ...] = tuple("1234567890")
SHIFTED_DIGITS: Tuple[str, ...] = tuple("!\"#$%&/()=")

NUMBERS_GRID: Rows = (
    DIGITS,
    ("-", "/", ":", ";", "(", ")", "$", "&", "@", '"'),
    (".", ",", "?", "!", "'"),
)

SYMBOLS_GRID: Rows = (
    ("[", "]", "{", "}", "#", "%", "^", "*", "+", "="),
    ("_", "\\", "|", "~", "<", ">", "€", "£", "¥", "•"),
    (".", ",", "?", "!", "'"),
)


def numbers_row(*, upper: bool = False) -> Tuple[str, ...]:
    """Digit row shown above the letters when ``show_numbers`` is set."""

    return SHIFTED_DIGITS if upper else DIGITS


def rows_for(
    mode: KeyboardMode,
    language: Language,
    *,
    upper: bool = False,
    show_numbers: bool = False,
) -> Rows:
    if mode is KeyboardMode.NUMBERS:
        return NUMBERS_GRID
    if mode is KeyboardMode.SYMBOLS:
        return SYMBOLS_GRID
    letters = language.rows(upper=upper)
    if show_numbers:
        return (numbers_row(upper=upper),) + letters
    return letters


__all__ = [
    "KeyboardMode",
    "Language",
    "Rows",
    "DIGITS",
    "NUMBERS_GRID",
    "SYMBOLS_GRID",
    "numbers_row",
    "rows_for",
]
