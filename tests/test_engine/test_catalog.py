"""Tests for instrument catalogs and history seeding."""

import random
from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from traintracker.engine.catalog import (
    ROUTES,
    TECH_PRODUCTS,
    CatalogRegistry,
    backfill_history,
    normalize_key,
    seed_store,
)
from traintracker.engine.exceptions import InstrumentNotFoundError
from traintracker.engine.series_store import SeriesStore
from traintracker.shared.models.enums import Catalog
from traintracker.shared.models.instruments import InstrumentConfig, split_route_key

NOW = datetime(2024, 1, 15, 10, 0, tzinfo=UTC)


class TestRouteKeys:
    def test_simple_split(self):
        assert split_route_key("PARIS-LYON") == ("PARIS", "LYON")

    def test_hyphenated_destination_is_preserved(self):
        assert split_route_key("PARIS-LA-ROCHELLE") == ("PARIS", "LA-ROCHELLE")

    def test_display_fields(self):
        route = InstrumentConfig(
            key="PARIS-LA-ROCHELLE", catalog=Catalog.ROUTES, base=40, variance=10
        )
        assert route.display_fields() == {
            "id": "PARIS-LA-ROCHELLE",
            "from": "PARIS",
            "to": "LA-ROCHELLE",
        }

    def test_route_without_destination_is_rejected(self):
        with pytest.raises(ValidationError):
            InstrumentConfig(key="PARIS", catalog=Catalog.ROUTES, base=40)

    def test_product_display_fields(self):
        product = InstrumentConfig(key="RTX 4090", catalog=Catalog.PRODUCTS, base=1899)
        assert product.display_fields() == {"id": "RTX 4090", "name": "RTX 4090"}
        assert product.origin is None


class TestNormalizeKey:
    def test_routes_are_uppercased(self):
        assert normalize_key(Catalog.ROUTES, "paris-lyon") == "PARIS-LYON"

    def test_products_are_decoded_not_uppercased(self):
        assert normalize_key(Catalog.PRODUCTS, "RTX%204090") == "RTX 4090"
        assert normalize_key(Catalog.PRODUCTS, "rtx 4090") == "rtx 4090"


class TestCatalogRegistry:
    def test_default_catalogs(self):
        registry = CatalogRegistry.default()
        assert [i.key for i in registry.instruments(Catalog.ROUTES)] == list(ROUTES)
        assert [i.key for i in registry.instruments(Catalog.PRODUCTS)] == list(
            TECH_PRODUCTS
        )
        assert len(registry) == len(ROUTES) + len(TECH_PRODUCTS)

    def test_seed_offsets_are_unique_and_separated(self):
        registry = CatalogRegistry.default()
        routes = [i.seed_offset for i in registry.instruments(Catalog.ROUTES)]
        products = [i.seed_offset for i in registry.instruments(Catalog.PRODUCTS)]
        assert routes == list(range(len(ROUTES)))
        assert products == [100 + i for i in range(len(TECH_PRODUCTS))]

    def test_resolve_is_case_insensitive_for_routes(self):
        registry = CatalogRegistry.default()
        assert registry.resolve(Catalog.ROUTES, "paris-nice").key == "PARIS-NICE"

    def test_resolve_is_case_sensitive_for_products(self):
        registry = CatalogRegistry.default()
        assert registry.resolve(Catalog.PRODUCTS, "RTX%204070%20Ti").key == "RTX 4070 Ti"
        with pytest.raises(InstrumentNotFoundError):
            registry.resolve(Catalog.PRODUCTS, "rtx 4070 ti")

    def test_colliding_seeds_rejected(self):
        with pytest.raises(ValueError):
            CatalogRegistry(
                {
                    Catalog.ROUTES: [
                        InstrumentConfig(key="A-B", catalog=Catalog.ROUTES, base=1)
                    ],
                    Catalog.PRODUCTS: [
                        InstrumentConfig(key="X", catalog=Catalog.PRODUCTS, base=1)
                    ],
                }
            )


class TestSeeding:
    def test_backfill_spacing_and_end(self):
        instrument = CatalogRegistry.default().get(Catalog.ROUTES, "PARIS-LYON")
        history = backfill_history(instrument, NOW, 50, 60, random.Random(1))

        assert len(history) == 50
        assert history[-1].timestamp == NOW
        assert history[0].timestamp == NOW - timedelta(minutes=49)
        assert all(
            b.timestamp - a.timestamp == timedelta(minutes=1)
            for a, b in zip(history, history[1:])
        )

    def test_backfill_shows_drift(self):
        instrument = CatalogRegistry.default().get(Catalog.PRODUCTS, "RTX 4090")
        history = backfill_history(instrument, NOW, 50, 60, random.Random(1))
        assert len({s.price for s in history}) > 1

    def test_seed_store_seeds_every_instrument(self):
        registry = CatalogRegistry.default()
        store = SeriesStore()

        seeded = seed_store(registry, store, NOW, points=50, rng=random.Random(5))

        assert seeded == len(registry)
        for instrument in registry:
            assert len(store.get(instrument.catalog, instrument.key)) == 50
        assert store.list_keys(Catalog.ROUTES) == list(ROUTES)

    def test_seed_store_logs_each_catalog(self):
        registry = CatalogRegistry.default()

        with capture_logs() as logs:
            seed_store(registry, SeriesStore(), NOW, points=10, rng=random.Random(5))

        seeded = {e["catalog"]: e for e in logs if e["event"] == "catalog_seeded"}
        assert seeded["routes"]["instruments"] == len(ROUTES)
        assert seeded["products"]["instruments"] == len(TECH_PRODUCTS)
        assert all(e["points"] == 10 for e in seeded.values())
