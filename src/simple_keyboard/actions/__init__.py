"""Verbs bound to keyboard keys."""

from .core import (
    emoji_key,
    hide_keyboard,
    switch_to_letters,
    switch_to_numbers,
    switch_to_symbols,
    toggle_shift,
    trigger_action,
)
from .editing import apply_accent, delete_backward, insert_character, insert_space

__all__ = [
    "insert_character",
    "insert_space",
    "delete_backward",
    "apply_accent",
    "toggle_shift",
    "switch_to_letters",
    "switch_to_numbers",
    "switch_to_symbols",
    "trigger_action",
    "emoji_key",
    "hide_keyboard",
]
