"""Built-in keymaps for the letters, numbers and symbols layouts."""

from __future__ import annotations

from typing import Iterable

from simple_keyboard.actions import core as core_actions
from simple_keyboard.actions import editing as editing_actions
from simple_keyboard.keyboard.layouts import KeyboardMode

from .models import CHAR_WILDCARD, ActionRef, Binding, WhenClause
from .registry import KeymapRegistry

# Logical tokens emitted by presentation layers for non-character keys.
SPACE = "SPACE"
DELETE = "DELETE"
SHIFT = "SHIFT"
ACCENT = "ACCENT"
ACTION = "ACTION"
EMOJI = "EMOJI"
HIDE = "HIDE"
MODE_LETTERS = "MODE_LETTERS"
MODE_NUMBERS = "MODE_NUMBERS"
MODE_SYMBOLS = "MODE_SYMBOLS"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="edit.insert_character",
        handler=editing_actions.insert_character,
        description="Insert the pressed character at the cursor",
    ),
    ActionRef(
        id="edit.insert_space",
        handler=editing_actions.insert_space,
        description="Insert a space at the cursor",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=editing_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.accent",
        handler=editing_actions.apply_accent,
        description="Accent the character before the cursor",
    ),
    ActionRef(
        id="core.toggle_shift",
        handler=core_actions.toggle_shift,
        description="Shift tap; double tap toggles caps lock",
    ),
    ActionRef(
        id="core.mode_letters",
        handler=core_actions.switch_to_letters,
        description="Show the letters layout",
    ),
    ActionRef(
        id="core.mode_numbers",
        handler=core_actions.switch_to_numbers,
        description="Show the numbers layout",
    ),
    ActionRef(
        id="core.mode_symbols",
        handler=core_actions.switch_to_symbols,
        description="Show the symbols layout",
    ),
    ActionRef(
        id="core.action",
        handler=core_actions.trigger_action,
        description="Run the host's action callback",
    ),
    ActionRef(
        id="core.emoji",
        handler=core_actions.emoji_key,
        description="Emoji key",
    ),
    ActionRef(
        id="core.hide",
        handler=core_actions.hide_keyboard,
        description="Hide the keyboard",
    ),
)

_ALL_MODES = tuple(KeyboardMode)

# (key, action_id, modes, when)
_DEFAULT_BINDINGS: tuple[
    tuple[str, str, tuple[KeyboardMode, ...], tuple[str, ...]], ...
] = (
    (CHAR_WILDCARD, "edit.insert_character", _ALL_MODES, ()),
    (SPACE, "edit.insert_space", _ALL_MODES, ("space.enabled",)),
    (DELETE, "edit.delete_backward", _ALL_MODES, ()),
    (SHIFT, "core.toggle_shift", (KeyboardMode.LETTERS,), ("shift.enabled",)),
    (ACCENT, "edit.accent", (KeyboardMode.LETTERS,), ("language.french",)),
    (MODE_NUMBERS, "core.mode_numbers", (KeyboardMode.LETTERS, KeyboardMode.SYMBOLS), ()),
    (MODE_SYMBOLS, "core.mode_symbols", (KeyboardMode.NUMBERS,), ()),
    (MODE_LETTERS, "core.mode_letters", (KeyboardMode.NUMBERS, KeyboardMode.SYMBOLS), ()),
    (ACTION, "core.action", _ALL_MODES, ("action.enabled",)),
    (EMOJI, "core.emoji", _ALL_MODES, ()),
    (HIDE, "core.hide", _ALL_MODES, ()),
)


def default_bindings() -> Iterable[Binding]:
    for key, action_id, modes, when in _DEFAULT_BINDINGS:
        for mode in modes:
            yield Binding(
                id=f"{mode.value}.{key.strip('<>').lower()}",
                mode=mode.value,
                key=key,
                action_id=action_id,
                when=tuple(WhenClause.parse(expr) for expr in when),
            )


def load_default_keymaps(registry: KeymapRegistry) -> None:
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=True)
    for binding in default_bindings():
        registry.register_binding(binding, replace=True)


__all__ = [
    "SPACE",
    "DELETE",
    "SHIFT",
    "ACCENT",
    "ACTION",
    "EMOJI",
    "HIDE",
    "MODE_LETTERS",
    "MODE_NUMBERS",
    "MODE_SYMBOLS",
    "DEFAULT_ACTIONS",
    "default_bindings",
    "load_default_keymaps",
]
