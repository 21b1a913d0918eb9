"""Actions that edit the text buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from simple_keyboard.buffer import compose_accent
from simple_keyboard.keyboard.base import KeyboardContext, KeyInput, KeyResult
from simple_keyboard.keyboard.layouts import KeyboardMode

if TYPE_CHECKING:
    from simple_keyboard.keymaps.models import ResolutionMatch


def _cased(context: KeyboardContext, text: str) -> str:
    if context.mode is KeyboardMode.LETTERS and context.shift.upper:
        return text.upper()
    return text


def insert_character(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del match
    context.buffer.insert_text_at_cursor(_cased(context, key.character))
    context.shift.after_character()
    return KeyResult(consumed=True, status="insert")


def insert_space(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del match, key
    context.buffer.insert_text_at_cursor(" ")
    return KeyResult(consumed=True, status="insert")


def delete_backward(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del match, key
    before = context.buffer.state.version
    context.buffer.delete_backward()
    changed = context.buffer.state.version != before
    return KeyResult(consumed=True, status="delete" if changed else "noop")


def apply_accent(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del match, key
    compose_accent(context.buffer)
    return KeyResult(consumed=True, status="accent")


__all__ = ["insert_character", "insert_space", "delete_backward", "apply_accent"]
