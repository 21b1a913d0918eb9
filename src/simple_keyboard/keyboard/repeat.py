"""Press-and-hold repeat for the delete key."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

from simple_keyboard.runtime import telemetry


class TimerHandle(Protocol):
    def stop(self) -> None:
        ...


class IntervalScheduler(Protocol):
    """Schedules ``callback`` every ``interval`` seconds after ``delay``."""

    def start(
        self, interval: float, callback: Callable[[], None], *, delay: float = 0.0
    ) -> TimerHandle:
        ...


class _LoopTimer:
    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
        delay: float,
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._stopped = False
        self._handle = loop.call_later(delay, self._fire)

    def _fire(self) -> None:
        if self._stopped:
            return
        self._handle = self._loop.call_later(self._interval, self._fire)
        self._callback()

    def stop(self) -> None:
        self._stopped = True
        self._handle.cancel()


class _IdleTimer:
    def stop(self) -> None:
        return None


class AsyncioScheduler:
    """Runs repeat ticks on the asyncio event loop that owns the keyboard.

    Without an explicit loop the running one is used; when none is running
    the hold is logged and ignored, so a delete tap still works.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def start(
        self, interval: float, callback: Callable[[], None], *, delay: float = 0.0
    ) -> TimerHandle:
        loop = self._loop or _running_loop()
        if loop is None:
            telemetry.record_event(
                "repeat.no_event_loop", level="warning", data={"interval": interval}
            )
            return _IdleTimer()
        return _LoopTimer(loop, interval, callback, delay)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class RepeatDeleteTimer:
    """At most one periodic delete per instance; ``release`` cancels it."""

    def __init__(
        self,
        delete: Callable[[], object],
        *,
        scheduler: Optional[IntervalScheduler] = None,
        interval: float = 0.07,
        delay: float = 0.5,
    ) -> None:
        self._delete = delete
        self.scheduler: IntervalScheduler = scheduler or AsyncioScheduler()
        self.interval = interval
        self.delay = delay
        self.ticks = 0
        self._handle: Optional[TimerHandle] = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def begin(self) -> None:
        self.release()
        self.ticks = 0
        self._handle = self.scheduler.start(self.interval, self._tick, delay=self.delay)

    def release(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.stop()

    def _tick(self) -> None:
        if self._handle is None:
            return
        self.ticks += 1
        self._delete()


__all__ = [
    "TimerHandle",
    "IntervalScheduler",
    "AsyncioScheduler",
    "RepeatDeleteTimer",
]
