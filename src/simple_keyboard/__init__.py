"""UI-agnostic on-screen keyboard engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "keyboard",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
