"""Keyboard state: layouts, settings, shift, delete repeat."""

from .layouts import KeyboardMode, Language, rows_for
from .settings import ActionIcon, KeyboardSettings
from .base import EventBus, KeyboardContext, KeyInput, KeyResult
from .shift import ShiftController, ShiftPhase, ShiftState
from .repeat import AsyncioScheduler, IntervalScheduler, RepeatDeleteTimer, TimerHandle

__all__ = [
    "KeyboardMode",
    "Language",
    "rows_for",
    "ActionIcon",
    "KeyboardSettings",
    "EventBus",
    "KeyboardContext",
    "KeyInput",
    "KeyResult",
    "ShiftController",
    "ShiftPhase",
    "ShiftState",
    "AsyncioScheduler",
    "IntervalScheduler",
    "RepeatDeleteTimer",
    "TimerHandle",
]
