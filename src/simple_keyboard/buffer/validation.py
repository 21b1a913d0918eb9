"""Cursor clamping shared by the buffer and sink adapters."""

from __future__ import annotations


def clamp_cursor(position: int, length: int) -> int:
    if position < 0:
        return 0
    if position > length:
        return length
    return position
