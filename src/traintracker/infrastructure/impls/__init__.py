"""Concrete infrastructure implementations."""

from traintracker.infrastructure.impls.system import ManualClock, SystemClock

__all__ = ["ManualClock", "SystemClock"]
