from __future__ import annotations

import asyncio
from typing import Callable, List

from simple_keyboard.buffer import TextBuffer
from simple_keyboard.keyboard import AsyncioScheduler, RepeatDeleteTimer


class ManualTimer:
    def __init__(self, interval: float, callback: Callable[[], None], delay: float) -> None:
        self.interval = interval
        self.callback = callback
        self.delay = delay
        self.stopped = False

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self.stopped:
                return
            self.callback()

    def stop(self) -> None:
        self.stopped = True


class ManualScheduler:
    def __init__(self) -> None:
        self.timers: List[ManualTimer] = []

    def start(
        self, interval: float, callback: Callable[[], None], *, delay: float = 0.0
    ) -> ManualTimer:
        timer = ManualTimer(interval, callback, delay)
        self.timers.append(timer)
        return timer


def make_timer(text: str) -> tuple[TextBuffer, RepeatDeleteTimer, ManualScheduler]:
    buffer = TextBuffer.from_text(text)
    scheduler = ManualScheduler()
    timer = RepeatDeleteTimer(
        buffer.delete_backward, scheduler=scheduler, interval=0.07, delay=0.5
    )
    return buffer, timer, scheduler


def test_each_tick_deletes_one_character() -> None:
    buffer, timer, scheduler = make_timer("hello")

    timer.begin()
    scheduler.timers[-1].fire(3)

    assert buffer.value == "he"
    assert timer.ticks == 3
    assert scheduler.timers[-1].interval == 0.07
    assert scheduler.timers[-1].delay == 0.5


def test_ticks_past_empty_buffer_are_noops() -> None:
    buffer, timer, scheduler = make_timer("abc")

    timer.begin()
    scheduler.timers[-1].fire(10)

    assert buffer.value == ""
    assert buffer.cursor_position == 0
    assert timer.ticks == 10


def test_release_cancels_timer() -> None:
    buffer, timer, scheduler = make_timer("hello")
    timer.begin()
    scheduler.timers[-1].fire()

    timer.release()
    scheduler.timers[-1].fire(2)

    assert timer.active is False
    assert buffer.value == "hell"


def test_begin_replaces_running_timer() -> None:
    _buffer, timer, scheduler = make_timer("hello")

    timer.begin()
    timer.begin()

    assert len(scheduler.timers) == 2
    assert scheduler.timers[0].stopped is True
    assert scheduler.timers[1].stopped is False
    assert timer.active is True


def test_release_without_begin_is_harmless() -> None:
    _buffer, timer, _scheduler = make_timer("x")

    timer.release()

    assert timer.active is False


def test_asyncio_scheduler_repeats_until_released() -> None:
    buffer = TextBuffer.from_text("abc")
    timer = RepeatDeleteTimer(
        buffer.delete_backward, scheduler=AsyncioScheduler(), interval=0.005, delay=0.0
    )

    async def hold() -> tuple[int, int]:
        timer.begin()
        await asyncio.sleep(0.2)
        timer.release()
        released_at = timer.ticks
        await asyncio.sleep(0.05)
        return released_at, timer.ticks

    released_at, final = asyncio.run(hold())

    assert buffer.value == ""
    assert released_at >= 3
    assert final == released_at


def test_asyncio_scheduler_without_running_loop_ignores_hold() -> None:
    buffer = TextBuffer.from_text("abc")
    timer = RepeatDeleteTimer(buffer.delete_backward, interval=0.005, delay=0.0)

    timer.begin()
    timer.release()

    assert buffer.value == "abc"
    assert timer.ticks == 0
    assert timer.active is False
