"""Per-session keyboard configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from simple_keyboard.buffer import EditPolicy
from simple_keyboard.runtime.telemetry import env, env_flag

from .layouts import Language


class ActionIcon(str, Enum):
    """Label of the action key; ``None`` in settings hides the key."""

    DONE = "done"
    SEARCH = "search"
    GO = "go"

    @property
    def label(self) -> str:
        return _ICON_LABELS[self]


_ICON_LABELS = {
    ActionIcon.DONE: "Done!",
    ActionIcon.SEARCH: "Search",
    ActionIcon.GO: "Go!",
}

_SHIFT_VALUES = {"off": None, "lower": False, "upper": True}


@dataclass
class KeyboardSettings:
    """Options a host passes when it creates a keyboard session.

    ``is_upper_case=None`` means the layout has no case switching and the
    shift key is not shown at all.
    """

    language: Language = Language.ENGLISH
    theme: str = "system"
    action_button: Optional[ActionIcon] = ActionIcon.DONE
    show_numbers: bool = False
    show_space: bool = True
    is_upper_case: Optional[bool] = None
    cursor_tracking: bool = True
    double_tap_window: float = 0.3
    repeat_interval: float = 0.07
    repeat_delay: float = 0.5
    action: Optional[Callable[[], None]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.language = Language(self.language)
        if self.action_button is not None:
            self.action_button = ActionIcon(self.action_button)
        if self.double_tap_window <= 0:
            raise ValueError("double_tap_window must be positive")
        if self.repeat_interval <= 0:
            raise ValueError("repeat_interval must be positive")
        if self.repeat_delay < 0:
            raise ValueError("repeat_delay cannot be negative")

    @property
    def edit_policy(self) -> EditPolicy:
        return EditPolicy.CURSOR if self.cursor_tracking else EditPolicy.APPEND

    @classmethod
    def from_env(cls, **overrides: object) -> "KeyboardSettings":
        """Build settings from ``SIMPLE_KEYBOARD_*`` variables.

        Keyword overrides win over the environment.
        """

        values: dict[str, object] = {}
        language = env("LANGUAGE")
        if language:
            values["language"] = Language(language.strip().lower())
        theme = env("THEME")
        if theme:
            values["theme"] = theme
        icon = env("ACTION_BUTTON")
        if icon is not None:
            icon = icon.strip().lower()
            values["action_button"] = None if icon in {"", "none"} else ActionIcon(icon)
        values["show_numbers"] = env_flag("SHOW_NUMBERS", False)
        values["show_space"] = env_flag("SHOW_SPACE", True)
        values["cursor_tracking"] = env_flag("CURSOR_TRACKING", True)
        shift = env("SHIFT")
        if shift is not None:
            key = shift.strip().lower()
            if key not in _SHIFT_VALUES:
                raise ValueError(f"Unknown shift setting '{shift}'.")
            values["is_upper_case"] = _SHIFT_VALUES[key]
        for name, attr in (
            ("DOUBLE_TAP_MS", "double_tap_window"),
            ("REPEAT_INTERVAL_MS", "repeat_interval"),
            ("REPEAT_DELAY_MS", "repeat_delay"),
        ):
            raw = env(name)
            if raw is not None:
                values[attr] = int(raw) / 1000.0
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


__all__ = ["ActionIcon", "KeyboardSettings"]
