"""Repeat-delete scheduling on Textual's own timers."""

from __future__ import annotations

from typing import Any, Callable, Optional


class _TextualRepeat:
    def __init__(
        self, owner: Any, interval: float, callback: Callable[[], None], delay: float
    ) -> None:
        self._owner = owner
        self._interval = interval
        self._callback = callback
        self._interval_timer: Optional[Any] = None
        self._delay_timer: Optional[Any] = owner.set_timer(delay, self._begin_interval)

    def _begin_interval(self) -> None:
        self._delay_timer = None
        self._interval_timer = self._owner.set_interval(self._interval, self._callback)
        self._callback()

    def stop(self) -> None:
        for timer in (self._delay_timer, self._interval_timer):
            if timer is not None:
                timer.stop()
        self._delay_timer = None
        self._interval_timer = None


class TextualScheduler:
    """``IntervalScheduler`` backed by ``set_timer``/``set_interval`` of a widget or app."""

    def __init__(self, owner: Any) -> None:
        self.owner = owner

    def start(
        self, interval: float, callback: Callable[[], None], *, delay: float = 0.0
    ) -> _TextualRepeat:
        return _TextualRepeat(self.owner, interval, callback, delay)


__all__ = ["TextualScheduler"]
