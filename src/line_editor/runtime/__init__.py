"""Runtime services (telemetry) shared by the buffer and the hosts."""

from . import telemetry

__all__ = ["telemetry"]
