"""Shift / caps-lock state machine."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from simple_keyboard.runtime import telemetry


class ShiftPhase(str, Enum):
    LOWER = "lower"
    UPPER = "upper"
    CAPS_LOCKED = "caps_locked"


@dataclass(frozen=True, slots=True)
class ShiftState:
    """Snapshot of the shift key.

    ``enabled`` is False when the layout has no case switching; the
    ``is_upper_case`` property then reports ``None`` like the settings do.
    """

    enabled: bool
    upper: bool
    caps_locked: bool

    @property
    def is_upper_case(self) -> Optional[bool]:
        return self.upper if self.enabled else None

    @property
    def phase(self) -> ShiftPhase:
        if self.caps_locked:
            return ShiftPhase.CAPS_LOCKED
        return ShiftPhase.UPPER if self.upper else ShiftPhase.LOWER


ShiftListener = Callable[[ShiftState], None]


class ShiftController:
    """Tracks the transient shift flag and the caps-lock latch.

    A second tap within ``double_tap_window`` seconds of the previous one
    toggles caps-lock and consumes the window, so a third tap is a fresh
    single tap.
    """

    def __init__(
        self,
        is_upper_case: Optional[bool] = None,
        *,
        double_tap_window: float = 0.3,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.enabled = is_upper_case is not None
        self.upper = bool(is_upper_case)
        self.caps_locked = False
        self.double_tap_window = double_tap_window
        self._clock = clock
        self._last_tap: Optional[float] = None
        self._listeners: List[ShiftListener] = []

    @property
    def state(self) -> ShiftState:
        return ShiftState(
            enabled=self.enabled, upper=self.upper, caps_locked=self.caps_locked
        )

    @property
    def is_upper_case(self) -> Optional[bool]:
        return self.state.is_upper_case

    def subscribe(self, listener: ShiftListener) -> None:
        self._listeners.append(listener)

    def tap(self) -> ShiftState:
        if not self.enabled:
            return self.state

        now = self._clock()
        last = self._last_tap
        if last is not None and now - last < self.double_tap_window:
            self.caps_locked = not self.caps_locked
            self.upper = self.caps_locked
            self._last_tap = None
            telemetry.record_event(
                "shift.caps_lock", data={"locked": self.caps_locked}
            )
        else:
            if self.caps_locked:
                self.caps_locked = False
                self.upper = False
            else:
                self.upper = not self.upper
            self._last_tap = now
        return self._changed()

    def after_character(self) -> ShiftState:
        """Drop back to lowercase after one character unless caps-locked."""

        if self.enabled and self.upper and not self.caps_locked:
            self.upper = False
            return self._changed()
        return self.state

    def _changed(self) -> ShiftState:
        state = self.state
        for listener in list(self._listeners):
            listener(state)
        return state


__all__ = ["ShiftPhase", "ShiftState", "ShiftController", "ShiftListener"]
