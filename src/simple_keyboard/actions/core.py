"""Shift, mode switching and chrome keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

from simple_keyboard.keyboard.base import KeyboardContext, KeyInput, KeyResult
from simple_keyboard.keyboard.layouts import KeyboardMode

if TYPE_CHECKING:
    from simple_keyboard.keymaps.models import ResolutionMatch


def toggle_shift(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del match, key
    state = context.shift.tap()
    return KeyResult(consumed=True, status="shift", message=state.phase.value)


def switch_to_letters(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del context, match, key
    return KeyResult(consumed=True, switch_to=KeyboardMode.LETTERS, status="mode")


def switch_to_numbers(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del context, match, key
    return KeyResult(consumed=True, switch_to=KeyboardMode.NUMBERS, status="mode")


def switch_to_symbols(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del context, match, key
    return KeyResult(consumed=True, switch_to=KeyboardMode.SYMBOLS, status="mode")


def trigger_action(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del match, key
    callback = context.settings.action
    if callback is not None:
        callback()
    context.bus.emit("keyboard.action", context.buffer.value)
    return KeyResult(consumed=True, status="action")


def emoji_key(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    # Placeholder key; hosts may open their own picker on the event.
    del match, key
    context.bus.emit("keyboard.emoji")
    return KeyResult(consumed=True, status="noop")


def hide_keyboard(
    context: KeyboardContext, match: ResolutionMatch, key: KeyInput
) -> KeyResult:
    del match, key
    context.set_visible(False)
    return KeyResult(consumed=True, status="hidden")


__all__ = [
    "toggle_shift",
    "switch_to_letters",
    "switch_to_numbers",
    "switch_to_symbols",
    "trigger_action",
    "emoji_key",
    "hide_keyboard",
]
