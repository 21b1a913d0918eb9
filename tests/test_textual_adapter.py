from __future__ import annotations

from typing import Callable, List, Optional

from simple_keyboard.adapters.textual import (
    TextualInputSink,
    TextualKeyboardAdapter,
    TextualKeyboardHooks,
    TextualScheduler,
)
from simple_keyboard.buffer import BufferSnapshot
from simple_keyboard.keyboard import KeyboardSettings
from simple_keyboard.keyboard.layouts import NUMBERS_GRID, Rows
from simple_keyboard.session import KeyboardSession


class FakeInput:
    """Stands in for ``textual.widgets.Input``."""

    def __init__(self, value: str = "", cursor_position: int = 0) -> None:
        self.value = value
        self.cursor_position = cursor_position


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeOwner:
    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []
        self.intervals: List[FakeTimer] = []

    def set_timer(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def set_interval(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.intervals.append(timer)
        return timer


def make_session(
    widget: Optional[FakeInput] = None, owner: Optional[FakeOwner] = None
) -> KeyboardSession:
    sink = TextualInputSink(widget) if widget is not None else None
    return KeyboardSession(
        KeyboardSettings(is_upper_case=False),
        sink,
        scheduler=TextualScheduler(owner or FakeOwner()),
    )


def test_adapter_updates_text_and_status() -> None:
    texts: List[str] = []
    statuses: List[str] = []
    hooks = TextualKeyboardHooks(
        update_text=lambda snapshot: texts.append(snapshot.value),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualKeyboardAdapter(make_session(), hooks)

    adapter.press("SHIFT")
    adapter.press("h")
    adapter.press("i")

    assert texts[0] == ""
    assert texts[-1] == "Hi"
    assert "upper" in statuses
    assert "insert" in statuses


def test_adapter_translates_textual_keys() -> None:
    events: List[tuple[str, object | None]] = []
    hooks = TextualKeyboardHooks(
        update_text=lambda snapshot: None,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    session = make_session()
    adapter = TextualKeyboardAdapter(session, hooks)

    adapter.handle_textual_key("o", character="o")
    adapter.handle_textual_key("k", character="k")
    adapter.handle_textual_key("space", character=" ")
    adapter.handle_textual_key("backspace")
    adapter.handle_textual_key("enter")
    ignored = adapter.handle_textual_key("f5")

    assert ignored is None
    assert session.text == "ok"
    assert ("keyboard.action", "ok") in events


def test_adapter_refreshes_keys_on_mode_switch() -> None:
    layouts: List[Rows] = []
    hooks = TextualKeyboardHooks(
        update_text=lambda snapshot: None,
        update_keys=lambda rows: layouts.append(rows),
    )
    adapter = TextualKeyboardAdapter(make_session(), hooks)

    adapter.press("MODE_NUMBERS")

    assert len(layouts) == 2
    assert layouts[-1] == NUMBERS_GRID


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualKeyboardHooks(
        update_text=lambda snapshot: None,
        log=lambda line: logs.append(line),
    )
    adapter = TextualKeyboardAdapter(make_session(), hooks)

    adapter.press("a")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)


def test_input_sink_edits_widget_at_cursor() -> None:
    widget = FakeInput("hllo", cursor_position=1)
    session = make_session(widget)
    snapshots: List[BufferSnapshot] = []
    session.bus.subscribe("buffer.changed", snapshots.append)

    session.press("e")

    assert widget.value == "hello"
    assert widget.cursor_position == 2
    assert snapshots[-1].value == "hello"


def test_input_sink_follows_user_cursor_moves() -> None:
    widget = FakeInput("abc", cursor_position=3)
    session = make_session(widget)

    widget.cursor_position = 0
    session.press("DELETE")
    widget.cursor_position = 2
    session.press("DELETE")

    assert widget.value == "ac"
    assert widget.cursor_position == 1


def test_input_sink_clamps_cursor() -> None:
    widget = FakeInput("ab")
    sink = TextualInputSink(widget)

    sink.cursor_position = 10
    assert widget.cursor_position == 2

    sink.replace_all("xyz")
    assert widget.cursor_position == 3


def test_textual_scheduler_waits_for_delay_then_repeats() -> None:
    owner = FakeOwner()
    widget = FakeInput("hello", cursor_position=5)
    session = make_session(widget, owner)
    adapter = TextualKeyboardAdapter(
        session, TextualKeyboardHooks(update_text=lambda snapshot: None)
    )

    adapter.begin_delete_hold()
    assert owner.timers[-1].delay == session.settings.repeat_delay
    assert widget.value == "hello"

    owner.timers[-1].callback()
    assert widget.value == "hell"
    owner.intervals[-1].callback()
    assert widget.value == "hel"

    adapter.release_delete_hold()

    assert owner.intervals[-1].stopped is True
    assert session.repeat.ticks == 2


def test_release_before_delay_cancels_pending_timer() -> None:
    owner = FakeOwner()
    session = make_session(FakeInput("abc", 3), owner)

    session.begin_delete_hold()
    session.release_delete_hold()

    assert owner.timers[-1].stopped is True
    assert owner.intervals == []
