"""Textual host adapter."""

from .controller import TextualKeyboardAdapter, TextualKeyboardHooks
from .scheduler import TextualScheduler
from .sinks import TextualInputSink

__all__ = [
    "TextualKeyboardAdapter",
    "TextualKeyboardHooks",
    "TextualScheduler",
    "TextualInputSink",
]
