"""Text buffer owning the value/cursor pair and pushing edits to a sink."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, List, Optional

from simple_keyboard.runtime import telemetry

from .sink import CursorAwareSink, TextSink, is_cursor_aware
from .state import BufferSnapshot, EditPolicy, TextBufferState
from .validation import clamp_cursor

BufferListener = Callable[[BufferSnapshot], None]


class TextBuffer:
    """Authoritative owner of the keyboard's text and cursor.

    Every operation is total: positions are clamped, deleting at the start
    and inserting nothing are silent no-ops. With ``EditPolicy.APPEND`` the
    buffer behaves like the legacy keyboard and always edits at the end.
    """

    def __init__(
        self,
        *,
        sink: Optional[TextSink] = None,
        policy: EditPolicy = EditPolicy.CURSOR,
        name: str = "default",
        state: Optional[TextBufferState] = None,
    ) -> None:
        self.name = name
        self.policy = EditPolicy(policy)
        self.state = state or TextBufferState()
        self._sink: Optional[TextSink] = None
        self._listeners: List[BufferListener] = []
        if sink is not None:
            self._attach(sink)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        cursor: Optional[int] = None,
        policy: EditPolicy = EditPolicy.CURSOR,
        name: str = "default",
    ) -> "TextBuffer":
        position = len(text) if cursor is None else cursor
        return cls(
            policy=policy,
            name=name,
            state=TextBufferState(value=text, cursor_position=position),
        )

    @property
    def value(self) -> str:
        return self.state.value

    @property
    def cursor_position(self) -> int:
        return self.state.cursor_position

    @property
    def sink(self) -> Optional[TextSink]:
        return self._sink

    def snapshot(self, label: str = "") -> BufferSnapshot:
        return BufferSnapshot(
            value=self.state.value,
            cursor_position=self.state.cursor_position,
            version=self.state.version,
            label=label,
        )

    def subscribe(self, listener: BufferListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_cursor(self, position: int) -> None:
        """Store a caller-supplied cursor. It is clamped on next use."""

        self._pull_from_sink()
        self.state.cursor_position = position
        sink = self._cursor_sink()
        if sink is not None:
            sink.cursor_position = clamp_cursor(position, self.state.length)

    def edit_position(self) -> int:
        """Offset the next insert/delete will act on."""

        if self.policy is EditPolicy.APPEND:
            return self.state.length
        return clamp_cursor(self.state.cursor_position, self.state.length)

    def character_before_cursor(self) -> Optional[str]:
        self._pull_from_sink()
        position = self.edit_position()
        if position == 0:
            return None
        return self.state.value[position - 1]

    def insert_text_at_cursor(self, new_text: str) -> BufferSnapshot:
        with Transaction(self, "insert_text") as tx:
            self._pull_from_sink()
            position = self.edit_position()
            value = self.state.value
            updated = value[:position] + new_text + value[position:]

            def push(sink: TextSink) -> None:
                if isinstance(sink, CursorAwareSink):
                    sink.insert_text(new_text, position)
                else:
                    sink.replace_all(updated)

            tx.apply(updated, position + len(new_text), push if new_text else None)
        return tx.result

    def delete_backward(self) -> BufferSnapshot:
        with Transaction(self, "delete_backward") as tx:
            self._pull_from_sink()
            position = self.edit_position()
            if position == 0:
                tx.apply(self.state.value, 0, None)
            else:
                value = self.state.value
                updated = value[: position - 1] + value[position:]

                def push(sink: TextSink) -> None:
                    if isinstance(sink, CursorAwareSink):
                        sink.delete_text(position - 1, 1)
                    else:
                        sink.replace_all(updated)

                tx.apply(updated, position - 1, push)
        return tx.result

    def replace_all(self, text: str) -> BufferSnapshot:
        """Overwrite the whole value; the cursor moves to the end."""

        with Transaction(self, "replace_all") as tx:
            tx.apply(text, len(text), lambda sink: sink.replace_all(text))
        return tx.result

    def change_text_input(self, new_sink: TextSink) -> BufferSnapshot:
        """Swap the active sink and resynchronize from its current text.

        The cursor lands on the sink's own cursor when it is cursor-aware,
        otherwise at the end of the text.
        """

        with Transaction(self, "change_text_input") as tx:
            self._attach(new_sink)
            tx.force_notify()
            tx.apply(self.state.value, self.state.cursor_position, None)
        return tx.result

    def _attach(self, sink: TextSink) -> None:
        self._sink = sink
        text = sink.current_text()
        if isinstance(sink, CursorAwareSink):
            cursor = clamp_cursor(sink.cursor_position, len(text))
        else:
            cursor = len(text)
        self.state.value = text
        self.state.cursor_position = cursor

    def _cursor_sink(self) -> Optional[CursorAwareSink]:
        sink = self._sink
        if is_cursor_aware(sink):
            return sink  # type: ignore[return-value]
        return None

    def _pull_from_sink(self) -> None:
        """Adopt out-of-band edits made directly on a cursor-aware sink."""

        sink = self._cursor_sink()
        if sink is None:
            return
        text = sink.current_text()
        cursor = sink.cursor_position
        current = clamp_cursor(self.state.cursor_position, self.state.length)
        if text != self.state.value or cursor != current:
            self.state.value = text
            self.state.cursor_position = clamp_cursor(cursor, len(text))

    def _publish(self, snapshot: BufferSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)


class Transaction(AbstractContextManager["Transaction"]):
    """One buffer mutation: state update, sink push, listener fan-out."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.changed = False
        self.result: BufferSnapshot = buffer.snapshot(label)
        self._force = False
        self._push: Optional[Callable[[TextSink], None]] = None
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._span: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span = self._span_cm.__enter__()
        return self

    def force_notify(self) -> None:
        self._force = True

    def apply(
        self,
        value: str,
        cursor: int,
        push: Optional[Callable[[TextSink], None]],
    ) -> None:
        state = self.buffer.state
        self.changed = (
            self._force
            or value != state.value
            or cursor != state.cursor_position
        )
        state.value = value
        state.cursor_position = cursor
        self._push = push

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            try:
                self._finish()
            except Exception as error:
                self._close_span(type(error), error, error.__traceback__)
                raise
        self._close_span(exc_type, exc, tb)
        return False

    def _close_span(self, exc_type, exc, tb) -> None:
        span_cm, self._span_cm = self._span_cm, None
        if span_cm is not None:
            span_cm.__exit__(exc_type, exc, tb)

    def _finish(self) -> None:
        buffer = self.buffer
        if not self.changed:
            self.result = buffer.snapshot(self.label)
            if self._span is not None:
                self._span.add_metadata("status", "noop")
            return

        buffer.state.bump()
        sink = buffer.sink
        if sink is not None:
            if self._push is not None:
                self._push(sink)
            cursor_sink = buffer._cursor_sink()
            if cursor_sink is not None:
                cursor_sink.cursor_position = buffer.state.cursor_position

        self.result = buffer.snapshot(self.label)
        if self._span is not None:
            self._span.add_metadata("version", self.result.version)
            self._span.add_metadata("cursor", self.result.cursor_position)
        buffer._publish(self.result)


__all__ = ["TextBuffer", "Transaction", "BufferListener"]
