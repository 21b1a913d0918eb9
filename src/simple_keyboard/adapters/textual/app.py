"""Executable Textual app that hosts the on-screen keyboard."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.message import Message
    from textual.widgets import Button, Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use simple_keyboard.adapters.textual.app"
    ) from exc

from simple_keyboard.buffer import BufferSnapshot
from simple_keyboard.keyboard import KeyboardMode, KeyboardSettings, Language
from simple_keyboard.keyboard.layouts import Rows
from simple_keyboard.keymaps import defaults as keys
from simple_keyboard.runtime.telemetry import env
from simple_keyboard.session import KeyboardSession

from .controller import TextualKeyboardAdapter, TextualKeyboardHooks
from .scheduler import TextualScheduler
from .sinks import TextualInputSink


class KeyButton(Button):
    """Button that remembers the keyboard token it sends."""

    def __init__(self, label: str, token: str, *, classes: str = "key") -> None:
        super().__init__(label, classes=classes)
        self.token = token


class DeleteKey(KeyButton):
    """Delete key reporting press-and-hold so the session can repeat deletes."""

    class HoldStarted(Message):
        pass

    class HoldEnded(Message):
        pass

    def __init__(self) -> None:
        super().__init__("⌫", keys.DELETE, classes="key chrome")

    def on_mouse_down(self, event: events.MouseDown) -> None:
        del event
        self.post_message(self.HoldStarted())

    def on_mouse_up(self, event: events.MouseUp) -> None:
        del event
        self.post_message(self.HoldEnded())

    def on_leave(self, event: events.Leave) -> None:
        del event
        self.post_message(self.HoldEnded())


class SimpleKeyboardApp(App[None]):
    """A text field driven by an on-screen keyboard."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#field {
		margin: 1 1;
	}

	#keys {
		height: auto;
		border: round $accent;
		padding: 0 1;
	}

	.row {
		height: 3;
		align-horizontal: center;
	}

	.key {
		min-width: 5;
		width: auto;
	}

	.chrome {
		background: $surface-darken-1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[KeyboardSettings] = None) -> None:
        super().__init__()
        self.settings = settings or KeyboardSettings.from_env()
        self.session: KeyboardSession | None = None
        self.adapter: TextualKeyboardAdapter | None = None
        self._field: Input | None = None
        self._keys: Vertical | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._field = Input(placeholder="Type with the keyboard below", id="field")
        yield self._field
        self._keys = Vertical(id="keys")
        yield self._keys
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        assert self._field is not None
        self.session = KeyboardSession(
            self.settings,
            TextualInputSink(self._field),
            scheduler=TextualScheduler(self),
        )
        hooks = TextualKeyboardHooks(
            update_text=self._update_text,
            update_keys=self._update_keys,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        self.adapter = TextualKeyboardAdapter(self.session, hooks)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        if self.adapter and isinstance(button, KeyButton):
            self.adapter.press(button.token)
            event.stop()

    def on_delete_key_hold_started(self, event: DeleteKey.HoldStarted) -> None:
        del event
        if self.adapter:
            self.adapter.begin_delete_hold()

    def on_delete_key_hold_ended(self, event: DeleteKey.HoldEnded) -> None:
        del event
        if self.adapter:
            self.adapter.release_delete_hold()

    def on_key(self, event: events.Key) -> None:
        # Typing into the focused field is handled by the Input itself.
        if not self.adapter or self.focused is self._field:
            return
        if self.adapter.handle_textual_key(event.key, character=event.character):
            event.stop()

    def _update_text(self, snapshot: BufferSnapshot) -> None:
        self._update_status(f"{len(snapshot.value)} chars, cursor {snapshot.cursor_position}")

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)

    def _handle_event(self, name: str, payload: object | None) -> None:
        if name == "keyboard.action":
            self._update_status(f"submitted: {payload!r}")
        elif name == "keyboard.visibility" and self._keys is not None:
            self._keys.display = bool(payload)

    def _update_keys(self, rows: Rows) -> None:
        if self._keys is None or self.session is None:
            return
        self._keys.remove_children()
        self._keys.mount(*self._build_rows(rows), self._bottom_bar())

    def _build_rows(self, rows: Rows) -> List[Horizontal]:
        session = self.session
        assert session is not None
        mode = session.mode
        last = len(rows) - 1
        built: List[Horizontal] = []
        for index, row in enumerate(rows):
            buttons: List[Button] = [KeyButton(label, label) for label in row]
            if index == last:
                buttons = self._decorate_last_row(mode, buttons)
            built.append(Horizontal(*buttons, classes="row"))
        return built

    def _decorate_last_row(self, mode: KeyboardMode, buttons: List[Button]) -> List[Button]:
        session = self.session
        assert session is not None
        prefix: List[Button] = []
        suffix: List[Button] = []
        if mode is KeyboardMode.LETTERS:
            if session.shift.enabled:
                state = session.shift.state
                label = "⇪" if state.caps_locked else ("⬆" if state.upper else "⇧")
                prefix.append(KeyButton(label, keys.SHIFT, classes="key chrome"))
            if session.settings.language.has_accent_key:
                suffix.append(KeyButton("´", keys.ACCENT, classes="key chrome"))
        elif mode is KeyboardMode.NUMBERS:
            prefix.append(KeyButton("#+=", keys.MODE_SYMBOLS, classes="key chrome"))
        else:
            prefix.append(KeyButton("123", keys.MODE_NUMBERS, classes="key chrome"))
        suffix.append(DeleteKey())
        return prefix + buttons + suffix

    def _bottom_bar(self) -> Horizontal:
        session = self.session
        assert session is not None
        settings = session.settings
        if session.mode is KeyboardMode.LETTERS:
            switch = KeyButton("123", keys.MODE_NUMBERS, classes="key chrome")
        else:
            switch = KeyButton("ABC", keys.MODE_LETTERS, classes="key chrome")
        buttons: List[Button] = [switch, KeyButton(":)", keys.EMOJI, classes="key chrome")]
        if settings.show_space:
            buttons.append(KeyButton("space", keys.SPACE))
        if settings.action_button is not None:
            buttons.append(KeyButton(settings.action_button.label, keys.ACTION))
        return Horizontal(*buttons, classes="row")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the on-screen keyboard demo.")
    parser.add_argument(
        "--language",
        choices=[language.value for language in Language],
        help="Letter layout (default: SIMPLE_KEYBOARD_LANGUAGE or english)",
    )
    parser.add_argument("--theme", help="Theme name passed through to the settings")
    parser.add_argument(
        "--no-shift",
        action="store_true",
        help="Hide the shift key (layout without case switching)",
    )
    parser.add_argument(
        "--show-numbers",
        action="store_true",
        help="Show a digit row above the letters",
    )
    parser.add_argument(
        "--append-only",
        action="store_true",
        help="Legacy editing: always append and delete at the end",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    overrides: dict[str, object] = {}
    if args.no_shift:
        overrides["is_upper_case"] = None
    elif env("SHIFT") is None:
        overrides["is_upper_case"] = False
    if args.language:
        overrides["language"] = Language(args.language)
    if args.theme:
        overrides["theme"] = args.theme
    if args.show_numbers:
        overrides["show_numbers"] = True
    if args.append_only:
        overrides["cursor_tracking"] = False
    app = SimpleKeyboardApp(KeyboardSettings.from_env(**overrides))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
