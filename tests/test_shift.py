from __future__ import annotations

from typing import List

from simple_keyboard.keyboard import ShiftController, ShiftPhase, ShiftState


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_shift(
    is_upper_case: bool | None = False, window: float = 0.3
) -> tuple[ShiftController, FakeClock]:
    clock = FakeClock()
    return ShiftController(is_upper_case, double_tap_window=window, clock=clock), clock


def test_disabled_shift_ignores_taps() -> None:
    shift, _clock = make_shift(None)

    state = shift.tap()

    assert state.enabled is False
    assert state.is_upper_case is None
    assert shift.upper is False


def test_single_taps_toggle_case_without_locking() -> None:
    shift, clock = make_shift()

    assert shift.tap().phase is ShiftPhase.UPPER
    clock.advance(0.5)
    assert shift.tap().phase is ShiftPhase.LOWER
    clock.advance(0.5)
    assert shift.tap().phase is ShiftPhase.UPPER
    assert shift.caps_locked is False


def test_taps_exactly_one_window_apart_are_not_a_double_tap() -> None:
    shift, clock = make_shift()

    shift.tap()
    clock.advance(0.3)
    state = shift.tap()

    assert state.caps_locked is False
    assert state.phase is ShiftPhase.LOWER


def test_double_tap_enters_caps_lock() -> None:
    shift, clock = make_shift()

    shift.tap()
    clock.advance(0.1)
    state = shift.tap()

    assert state.caps_locked is True
    assert state.upper is True
    assert state.phase is ShiftPhase.CAPS_LOCKED


def test_single_tap_while_locked_releases_to_lower() -> None:
    shift, clock = make_shift()
    shift.tap()
    clock.advance(0.1)
    shift.tap()

    clock.advance(1.0)
    state = shift.tap()

    assert state.caps_locked is False
    assert state.upper is False


def test_double_tap_consumes_window() -> None:
    shift, clock = make_shift()
    shift.tap()
    clock.advance(0.1)
    shift.tap()

    clock.advance(0.1)
    state = shift.tap()

    # third tap counts as a single tap on a locked shift
    assert state.caps_locked is False
    assert state.phase is ShiftPhase.LOWER


def test_auto_shift_off_after_character() -> None:
    shift, _clock = make_shift()
    shift.tap()

    state = shift.after_character()

    assert state.phase is ShiftPhase.LOWER


def test_caps_lock_survives_characters() -> None:
    shift, clock = make_shift()
    shift.tap()
    clock.advance(0.05)
    shift.tap()

    shift.after_character()
    state = shift.after_character()

    assert state.phase is ShiftPhase.CAPS_LOCKED
    assert state.upper is True


def test_listeners_see_each_transition() -> None:
    shift, clock = make_shift()
    seen: List[ShiftState] = []
    shift.subscribe(seen.append)

    shift.tap()
    clock.advance(0.1)
    shift.tap()
    shift.after_character()

    assert [state.phase for state in seen] == [
        ShiftPhase.UPPER,
        ShiftPhase.CAPS_LOCKED,
    ]


def test_initial_upper_case() -> None:
    shift, _clock = make_shift(True)

    assert shift.is_upper_case is True
    assert shift.after_character().is_upper_case is False
