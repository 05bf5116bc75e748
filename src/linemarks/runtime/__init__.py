"""Runtime services shared by every layer (telemetry, logging)."""

from . import telemetry

__all__ = ["telemetry"]
