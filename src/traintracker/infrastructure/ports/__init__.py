"""Infrastructure ports (abstract interfaces)."""

from traintracker.infrastructure.ports.system import IClock, IRandomSource

__all__ = ["IClock", "IRandomSource"]
