from __future__ import annotations

from typing import Callable, List

from simple_keyboard.buffer import BufferSnapshot, StringSink, TextFieldSink
from simple_keyboard.keyboard import (
    ActionIcon,
    KeyboardMode,
    KeyboardSettings,
    Language,
    ShiftPhase,
)
from simple_keyboard.keyboard.layouts import DIGITS, NUMBERS_GRID, SYMBOLS_GRID
from simple_keyboard.keymaps import defaults as keys
from simple_keyboard.session import KeyboardSession


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class ManualTimer:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class ManualScheduler:
    def __init__(self) -> None:
        self.timers: List[ManualTimer] = []

    def start(
        self, interval: float, callback: Callable[[], None], *, delay: float = 0.0
    ) -> ManualTimer:
        timer = ManualTimer(callback)
        self.timers.append(timer)
        return timer


def make_session(
    sink=None, *, clock: FakeClock | None = None, **settings: object
) -> KeyboardSession:
    settings.setdefault("is_upper_case", False)
    return KeyboardSession(
        KeyboardSettings(**settings),  # type: ignore[arg-type]
        sink,
        scheduler=ManualScheduler(),
        clock=clock or FakeClock(),
    )


def test_typing_inserts_characters_and_spaces() -> None:
    session = make_session()

    session.type_text("hi there")

    assert session.text == "hi there"
    assert session.buffer.cursor_position == 8


def test_characters_go_in_at_the_cursor() -> None:
    sink = TextFieldSink("held", cursor_position=2)
    session = make_session(sink)

    session.press("x")
    session.press(keys.DELETE)
    session.press(keys.DELETE)

    assert sink.text == "hld"
    assert sink.cursor_position == 1


def test_delete_on_empty_text_reports_noop() -> None:
    session = make_session()

    result = session.press(keys.DELETE)

    assert result.consumed is True
    assert result.status == "noop"
    assert session.text == ""


def test_shift_applies_to_one_character() -> None:
    session = make_session()

    session.press(keys.SHIFT)
    session.type_text("ab")

    assert session.text == "Ab"
    assert session.shift.state.phase is ShiftPhase.LOWER


def test_double_tap_locks_caps() -> None:
    clock = FakeClock()
    session = make_session(clock=clock)

    session.press(keys.SHIFT)
    clock.now += 0.1
    result = session.press(keys.SHIFT)
    session.type_text("ab")

    assert result.message == "caps_locked"
    assert session.text == "AB"


def test_caps_lock_persists_across_mode_switches() -> None:
    clock = FakeClock()
    session = make_session(clock=clock)
    session.press(keys.SHIFT)
    clock.now += 0.1
    session.press(keys.SHIFT)

    session.press(keys.MODE_NUMBERS)
    session.press("1")
    session.press(keys.MODE_LETTERS)
    session.press("a")

    assert session.text == "1A"
    assert session.shift.caps_locked is True


def test_shift_key_is_a_miss_without_case_switching() -> None:
    session = make_session(is_upper_case=None)

    result = session.press(keys.SHIFT)
    session.press("a")

    assert result.consumed is False
    assert result.status == "miss"
    assert session.text == "a"


def test_shift_key_only_exists_on_letters() -> None:
    session = make_session()
    session.switch_mode(KeyboardMode.NUMBERS)

    assert session.press(keys.SHIFT).consumed is False


def test_accent_key_only_for_french() -> None:
    english = make_session()
    french = make_session(language=Language.FRENCH)
    english.type_text("la")
    french.type_text("la")

    assert english.press(keys.ACCENT).consumed is False
    assert french.press(keys.ACCENT).consumed is True
    assert english.text == "la"
    assert french.text == "là"


def test_mode_keys_switch_layouts_and_emit_events() -> None:
    session = make_session()
    modes: List[object] = []
    session.bus.subscribe("mode.changed", modes.append)

    session.press(keys.MODE_NUMBERS)
    assert session.keyboard_rows() == NUMBERS_GRID

    session.press(keys.MODE_SYMBOLS)
    assert session.keyboard_rows() == SYMBOLS_GRID

    session.press(keys.MODE_LETTERS)

    assert modes == [KeyboardMode.NUMBERS, KeyboardMode.SYMBOLS, KeyboardMode.LETTERS]
    assert session.mode is KeyboardMode.LETTERS


def test_switching_to_current_mode_is_silent() -> None:
    session = make_session()
    modes: List[object] = []
    session.bus.subscribe("mode.changed", modes.append)

    session.switch_mode("letters")

    assert modes == []


def test_letter_rows_follow_shift_and_show_numbers() -> None:
    session = make_session(show_numbers=True)

    assert session.keyboard_rows()[0] == DIGITS
    assert session.keyboard_rows()[1][0] == "q"

    session.press(keys.SHIFT)

    assert session.keyboard_rows()[1][0] == "Q"


def test_action_key_runs_callback_and_emits_text() -> None:
    calls: List[str] = []
    session = make_session(action=lambda: calls.append("done"))
    events: List[object] = []
    session.bus.subscribe("keyboard.action", events.append)
    session.type_text("go")

    result = session.press(keys.ACTION)

    assert result.status == "action"
    assert calls == ["done"]
    assert events == ["go"]


def test_action_key_missing_when_hidden() -> None:
    session = make_session(action_button=None)

    assert session.press(keys.ACTION).consumed is False


def test_space_key_missing_when_hidden() -> None:
    session = make_session(show_space=False)

    assert session.press(keys.SPACE).consumed is False
    assert session.text == ""


def test_search_icon_label() -> None:
    session = make_session(action_button=ActionIcon.SEARCH)

    assert session.settings.action_button is not None
    assert session.settings.action_button.label == "Search"


def test_hide_key_and_show() -> None:
    session = make_session()
    visibility: List[object] = []
    session.bus.subscribe("keyboard.visibility", visibility.append)

    session.press(keys.HIDE)
    session.show()
    session.show()

    assert visibility == [False, True]
    assert session.visible is True


def test_emoji_key_is_consumed_without_editing() -> None:
    session = make_session()
    seen: List[object] = []
    session.bus.subscribe("keyboard.emoji", seen.append)

    result = session.press(keys.EMOJI)

    assert result.consumed is True
    assert seen == [None]
    assert session.text == ""


def test_buffer_changes_are_published_on_the_bus() -> None:
    session = make_session()
    snapshots: List[BufferSnapshot] = []
    session.bus.subscribe("buffer.changed", snapshots.append)

    session.type_text("ok")
    session.press(keys.DELETE)

    assert [snap.value for snap in snapshots] == ["o", "ok", "o"]


def test_append_only_settings_ignore_cursor() -> None:
    sink = TextFieldSink("abc", cursor_position=0)
    session = make_session(sink, cursor_tracking=False)

    session.press("d")

    assert sink.text == "abcd"


def test_delete_hold_repeats_through_scheduler() -> None:
    session = make_session()
    session.type_text("hello")

    session.begin_delete_hold()
    timer = session.repeat.scheduler.timers[-1]  # type: ignore[attr-defined]
    timer.callback()
    timer.callback()
    session.release_delete_hold()

    assert session.text == "hel"
    assert timer.stopped is True
    assert session.repeat.active is False


def test_change_text_input_releases_hold_and_switches_sink() -> None:
    first = StringSink("first")
    session = make_session(first)
    session.begin_delete_hold()

    second = TextFieldSink("second", cursor_position=3)
    session.change_text_input(second)
    session.press("X")

    assert session.repeat.active is False
    assert first.text == "first"
    assert second.text == "secXond"


def test_default_session_hold_outside_event_loop() -> None:
    session = KeyboardSession(KeyboardSettings(is_upper_case=False))
    session.type_text("ab")

    session.begin_delete_hold()
    result = session.press(keys.DELETE)
    session.release_delete_hold()

    assert result.status == "delete"
    assert session.text == "a"


def test_hide_key_twice_emits_once() -> None:
    session = make_session()
    visibility: List[object] = []
    session.bus.subscribe("keyboard.visibility", visibility.append)

    session.press(keys.HIDE)
    session.press(keys.HIDE)
    session.hide()

    assert visibility == [False]
    assert session.visible is False
