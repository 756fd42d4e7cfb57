"""
Price engine exception hierarchy.

Unknown keys and store misuse get their own types so the HTTP layer can
map them to responses without inspecting messages.
"""

from traintracker.shared.models.enums import Catalog


class PriceEngineError(Exception):
    """Base exception for all price engine errors."""

    def __init__(self, message: str, catalog: Catalog | None = None, key: str | None = None):
        super().__init__(message)
        self.catalog = catalog
        self.key = key


class InstrumentNotFoundError(PriceEngineError):
    """No series exists for the requested catalog/key."""

    def __init__(self, catalog: Catalog, key: str):
        super().__init__(f"No {catalog.value} instrument with key {key!r}", catalog, key)


class SeriesAlreadySeededError(PriceEngineError):
    """A series was seeded twice for the same catalog/key."""

    def __init__(self, catalog: Catalog, key: str):
        super().__init__(f"Series {catalog.value}/{key} is already seeded", catalog, key)
