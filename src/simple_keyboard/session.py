"""Keyboard session: owns the buffer and dispatches key presses to actions."""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional

from simple_keyboard.buffer import BufferSnapshot, TextBuffer, TextSink
from simple_keyboard.keyboard import (
    EventBus,
    IntervalScheduler,
    KeyboardContext,
    KeyboardMode,
    KeyboardSettings,
    KeyInput,
    KeyResult,
    RepeatDeleteTimer,
    ShiftController,
    ShiftState,
    rows_for,
)
from simple_keyboard.keyboard.layouts import Rows
from simple_keyboard.keymaps import KeymapRegistry, load_default_keymaps
from simple_keyboard.runtime import telemetry


class KeyboardSession:
    """One on-screen keyboard bound to at most one text sink.

    Presentation layers call ``handle_key`` with logical tokens and listen on
    ``bus`` for ``buffer.changed``, ``mode.changed``, ``shift.changed``,
    ``keyboard.action``, ``keyboard.emoji`` and ``keyboard.visibility``.
    """

    def __init__(
        self,
        settings: Optional[KeyboardSettings] = None,
        sink: Optional[TextSink] = None,
        *,
        keymap_registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
        scheduler: Optional[IntervalScheduler] = None,
        clock: Callable[[], float] = time.monotonic,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or KeyboardSettings()
        self.logger = telemetry.get_logger("simple_keyboard.session")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="simple_keyboard.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)

        buffer = TextBuffer(sink=sink, policy=self.settings.edit_policy)
        shift = ShiftController(
            self.settings.is_upper_case,
            double_tap_window=self.settings.double_tap_window,
            clock=clock,
        )
        repeat = RepeatDeleteTimer(
            buffer.delete_backward,
            scheduler=scheduler,
            interval=self.settings.repeat_interval,
            delay=self.settings.repeat_delay,
        )
        self.context = KeyboardContext(
            buffer=buffer,
            shift=shift,
            repeat=repeat,
            settings=self.settings,
            bus=bus or EventBus(),
        )
        buffer.subscribe(self._on_buffer_change)
        shift.subscribe(self._on_shift_change)

    @property
    def buffer(self) -> TextBuffer:
        return self.context.buffer

    @property
    def shift(self) -> ShiftController:
        return self.context.shift

    @property
    def repeat(self) -> RepeatDeleteTimer:
        return self.context.repeat

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    @property
    def mode(self) -> KeyboardMode:
        return self.context.mode

    @property
    def visible(self) -> bool:
        return self.context.visible

    @property
    def text(self) -> str:
        return self.buffer.value

    def flags(self) -> Dict[str, bool]:
        settings = self.settings
        return {
            "shift.enabled": self.shift.enabled,
            "language.french": settings.language.has_accent_key,
            "action.enabled": settings.action_button is not None,
            "space.enabled": settings.show_space,
        }

    def keyboard_rows(self) -> Rows:
        """Key labels for the current mode and case."""

        return rows_for(
            self.mode,
            self.settings.language,
            upper=bool(self.shift.upper) and self.shift.enabled,
            show_numbers=self.settings.show_numbers,
        )

    def handle_key(self, key: KeyInput) -> KeyResult:
        with telemetry.span(
            name="session::handle_key",
            component="session",
            metadata={"key": key.key, "mode": self.mode.value},
        ) as handle:
            match = self.keymap_registry.resolve(
                self.mode.value, key.key, context=self.flags()
            )
            if match is None:
                handle.add_metadata("status", "miss")
                return KeyResult(consumed=False, status="miss")
            outcome = match.action(self.context, match, key)

        result = outcome if isinstance(outcome, KeyResult) else KeyResult(consumed=True)
        if result.switch_to is not None:
            self.switch_mode(result.switch_to)
        return result

    def press(self, key: str, text: Optional[str] = None) -> KeyResult:
        return self.handle_key(KeyInput(key=key, text=text))

    def type_text(self, text: str) -> None:
        """Press one character key per character of ``text``."""

        for character in text:
            token = "SPACE" if character == " " else character
            self.handle_key(KeyInput(key=token))

    def switch_mode(self, mode: KeyboardMode | str) -> None:
        target = KeyboardMode(mode)
        if target is self.context.mode:
            return
        self.context.mode = target
        telemetry.record_event("mode.switch", data={"mode": target.value})
        self.bus.emit("mode.changed", target)

    def tap_shift(self) -> ShiftState:
        return self.shift.tap()

    def begin_delete_hold(self) -> None:
        self.repeat.begin()

    def release_delete_hold(self) -> None:
        self.repeat.release()

    def change_text_input(self, sink: TextSink) -> BufferSnapshot:
        self.repeat.release()
        return self.buffer.change_text_input(sink)

    def show(self) -> None:
        self.context.set_visible(True)

    def hide(self) -> None:
        self.context.set_visible(False)

    def _on_buffer_change(self, snapshot: BufferSnapshot) -> None:
        self.bus.emit("buffer.changed", snapshot)

    def _on_shift_change(self, state: ShiftState) -> None:
        self.bus.emit("shift.changed", state)


__all__ = ["KeyboardSession"]
