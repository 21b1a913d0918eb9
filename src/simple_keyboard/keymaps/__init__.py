"""Declarative key registry and default bindings."""

from .models import CHAR_WILDCARD, ActionRef, Binding, ResolutionMatch, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import load_default_keymaps

__all__ = [
    "CHAR_WILDCARD",
    "ActionRef",
    "Binding",
    "ResolutionMatch",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "load_default_keymaps",
]
