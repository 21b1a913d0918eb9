"""Runtime services shared by the keyboard engine."""

from . import telemetry

__all__ = ["telemetry"]
