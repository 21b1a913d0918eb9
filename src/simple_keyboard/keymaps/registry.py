"""Keymap registry storing actions, bindings and resolving key presses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence

from simple_keyboard.runtime.telemetry import span

from .models import CHAR_WILDCARD, ActionRef, Binding, ResolutionMatch


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding conflicts with existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and the per-mode key index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            existing = self._bindings.get(binding.id)
            if existing and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in [*conflicts, *([existing] if existing else [])]:
                self._unindex(stale)
                self._bindings.pop(stale.id, None)

            self._bindings[binding.id] = binding
            self._index(binding)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._unindex(binding)
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for bucket in self._mode_index.get(str(mode), {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._mode_index)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        conflicts: list[Binding] = []
        for match_id in sorted(
            self._mode_index.get(binding.mode, {}).get(binding.key, set())
        ):
            if match_id in ignored:
                continue
            existing = self._bindings[match_id]
            if existing.priority == binding.priority and _contexts_overlap(
                binding, existing
            ):
                conflicts.append(existing)
        return conflicts

    def resolve(
        self,
        mode: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> Optional[ResolutionMatch]:
        """Pick the binding for ``token`` in ``mode``.

        Exact key bindings win; a single printable character with no allowed
        exact binding falls back to the ``<char>`` wildcard.
        """

        flags = context or {}
        mode_key = str(getattr(mode, "value", mode))
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode_key, "token": token},
        ) as handle:
            match = None
            if token != CHAR_WILDCARD:
                match = self._select(mode_key, token, token, flags)
            if match is None and len(token) == 1 and token.isprintable():
                match = self._select(mode_key, CHAR_WILDCARD, token, flags)
            handle.add_metadata("status", "match" if match else "miss")
            if match:
                handle.add_metadata("binding_id", match.binding.id)
            return match

    def _select(
        self, mode: str, key: str, token: str, flags: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = [
            self._bindings[binding_id]
            for binding_id in self._mode_index.get(mode, {}).get(key, ())
        ]
        allowed = [binding for binding in candidates if binding.allows(flags)]
        if not allowed:
            return None
        allowed.sort(key=lambda b: (-b.priority, b.id))
        best = allowed[0]
        return ResolutionMatch(
            binding=best, action=self.get_action(best.action_id), token=token
        )

    def _index(self, binding: Binding) -> None:
        by_key = self._mode_index.setdefault(binding.mode, {})
        by_key.setdefault(binding.key, set()).add(binding.id)

    def _unindex(self, binding: Binding) -> None:
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        ids = mode_bucket.get(binding.key)
        if not ids:
            return
        ids.discard(binding.id)
        if not ids:
            mode_bucket.pop(binding.key, None)
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    if not left.when and not right.when:
        return True
    if not left.when or not right.when:
        return False
    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return dict(left_map) == dict(right_map)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
