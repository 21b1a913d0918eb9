"""Adapter wiring a KeyboardSession into Textual-friendly callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from simple_keyboard.buffer import BufferSnapshot
from simple_keyboard.keyboard import KeyInput, KeyResult, ShiftState
from simple_keyboard.keyboard.layouts import Rows
from simple_keyboard.keymaps import defaults as keys
from simple_keyboard.session import KeyboardSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualKeyboardHooks:
    """Callbacks the adapter invokes to refresh Textual widgets."""

    update_text: Callable[[BufferSnapshot], None]
    update_keys: Callable[[Rows], None] = _noop
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


# Textual key names that map onto keyboard tokens.
_TEXTUAL_KEYS: Dict[str, str] = {
    "backspace": keys.DELETE,
    "space": keys.SPACE,
    "enter": keys.ACTION,
    "escape": keys.HIDE,
}


class TextualKeyboardAdapter:
    """Routes on-screen button presses and physical keys into the session."""

    def __init__(self, session: KeyboardSession, hooks: TextualKeyboardHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_text()
        self._refresh_keys()

    def press(self, token: str, *, text: Optional[str] = None) -> KeyResult:
        """Dispatch an on-screen key (its token, e.g. ``"a"`` or ``"SHIFT"``)."""

        self._log_state("key ->", key=token, text=text)
        result = self.session.handle_key(KeyInput(key=token, text=text))
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            switch_to=result.switch_to.value if result.switch_to else None,
        )
        return result

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[KeyResult]:
        """Translate a physical Textual key event; unknown keys are ignored."""

        token = _TEXTUAL_KEYS.get(key)
        if token is None and character and len(character) == 1 and character.isprintable():
            token = character
        if token is None:
            return None
        return self.press(token)

    def begin_delete_hold(self) -> None:
        self._log_state("repeat ->", action="begin")
        self.session.begin_delete_hold()

    def release_delete_hold(self) -> None:
        self.session.release_delete_hold()
        self._log_state("repeat <-", action="release", ticks=self.session.repeat.ticks)

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        bus.subscribe("buffer.changed", lambda _payload: self._refresh_text())
        bus.subscribe("mode.changed", self._on_layout_change)
        bus.subscribe("shift.changed", self._on_layout_change)
        for event in ("keyboard.action", "keyboard.emoji", "keyboard.visibility"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _on_layout_change(self, payload: object) -> None:
        if isinstance(payload, ShiftState):
            self.hooks.update_status(payload.phase.value)
        self._refresh_keys()

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_text(self) -> None:
        self.hooks.update_text(self.session.buffer.snapshot())

    def _refresh_keys(self) -> None:
        self.hooks.update_keys(self.session.keyboard_rows())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "mode": session.mode.value,
            "shift": session.shift.state.phase.value,
            "cursor": session.buffer.cursor_position,
            "version": session.buffer.state.version,
        }


__all__ = ["TextualKeyboardAdapter", "TextualKeyboardHooks"]
