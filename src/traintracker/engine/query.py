"""
Read-only query surface consumed by the HTTP layer.

Routes are returned with their full capped history and an ``open`` price.
Product batch queries trim each history to a trailing window to keep
responses small.
"""

from typing import Any

from traintracker.engine.catalog import CatalogRegistry
from traintracker.engine.series_store import SeriesStore
from traintracker.engine.summary import summarize
from traintracker.shared.models.enums import Catalog
from traintracker.shared.models.prices import Summary

DEFAULT_PRODUCT_WINDOW = 60


class QueryFacade:
    """Builds summaries on demand from store snapshots. Never mutates state."""

    def __init__(
        self,
        registry: CatalogRegistry,
        store: SeriesStore,
        product_window: int = DEFAULT_PRODUCT_WINDOW,
    ):
        self.registry = registry
        self.store = store
        self.product_window = product_window

    def list_instruments(self, catalog: Catalog) -> list[dict[str, Any]]:
        """Display fields for every instrument of ``catalog``, in catalog order."""
        return [inst.display_fields() for inst in self.registry.instruments(catalog)]

    def get_summary(self, catalog: Catalog, key: str) -> Summary:
        """
        Full-history summary for one instrument.

        ``key`` is taken as received from the URL and normalized per catalog.

        Raises:
            InstrumentNotFoundError: If no such instrument exists
        """
        instrument = self.registry.resolve(catalog, key)
        series = self.store.get(catalog, instrument.key)
        return summarize(series, include_open=catalog is Catalog.ROUTES)

    def get_all_summaries(self, catalog: Catalog) -> dict[str, Summary]:
        """Summaries keyed by instrument key, in catalog order."""
        window = self.product_window if catalog is Catalog.PRODUCTS else None
        include_open = catalog is Catalog.ROUTES
        return {
            key: summarize(
                self.store.get(catalog, key), include_open=include_open, window=window
            )
            for key in self.store.list_keys(catalog)
        }
