"""System infrastructure port definitions."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Protocol, runtime_checkable


class IClock(ABC):
    """Abstract interface for clock operations."""

    @abstractmethod
    def now(self) -> datetime:
        """Get current UTC time (timezone-aware)."""
        ...


@runtime_checkable
class IRandomSource(Protocol):
    """
    Source of uniform floats in ``[0, 1)``.

    ``random.Random`` instances and the ``random`` module itself satisfy it.
    """

    def random(self) -> float: ...
