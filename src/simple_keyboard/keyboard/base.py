"""Key events, dispatch results and the shared context actions run against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional

from simple_keyboard.buffer import TextBuffer

from .layouts import KeyboardMode
from .settings import KeyboardSettings

if TYPE_CHECKING:
    from .repeat import RepeatDeleteTimer
    from .shift import ShiftController


@dataclass(slots=True)
class KeyInput:
    """Logical key press coming from the presentation layer.

    ``key`` is the binding token (``"a"``, ``"SPACE"``, ``"DELETE"``);
    ``text`` is what a character key inserts when it differs from ``key``.
    """

    key: str
    text: Optional[str] = None

    @property
    def character(self) -> str:
        return self.text if self.text is not None else self.key


@dataclass(slots=True)
class KeyResult:
    """Outcome of dispatching one key press."""

    consumed: bool
    switch_to: Optional[KeyboardMode] = None
    status: str = "ok"
    message: Optional[str] = None


class EventBus:
    """Named-event fan-out the presentation layer subscribes to."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(
        self, event: str, callback: Callable[[object], None]
    ) -> Callable[[], None]:
        callbacks = self._subscribers.setdefault(event, [])
        callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


@dataclass(slots=True)
class KeyboardContext:
    """Services every action can reach."""

    buffer: TextBuffer
    shift: "ShiftController"
    repeat: "RepeatDeleteTimer"
    settings: KeyboardSettings
    bus: EventBus
    mode: KeyboardMode = KeyboardMode.LETTERS
    visible: bool = True

    def set_visible(self, visible: bool) -> bool:
        """Show or hide the keyboard; emits only when the state changes."""

        if self.visible is visible:
            return False
        self.visible = visible
        self.bus.emit("keyboard.visibility", visible)
        return True


__all__ = ["KeyInput", "KeyResult", "EventBus", "KeyboardContext"]
