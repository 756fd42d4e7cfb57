"""
Static instrument catalogs and initial history seeding.

Two catalogs are tracked:
    - routes: French train routes keyed ``FROM-TO`` (prices in EUR)
    - products: PC hardware keyed by display name (prices in EUR)
"""

from collections.abc import Iterator, Mapping
from datetime import datetime
from urllib.parse import unquote

from traintracker.common.utils.date_utils import backdated
from traintracker.engine.exceptions import InstrumentNotFoundError
from traintracker.engine.generator import generate_price
from traintracker.engine.series_store import SeriesStore
from traintracker.infrastructure.observability import get_engine_logger
from traintracker.infrastructure.ports.system import IRandomSource
from traintracker.shared.models.enums import Catalog
from traintracker.shared.models.instruments import InstrumentConfig, split_route_key
from traintracker.shared.models.prices import Sample

# key -> (base, variance)
ROUTES: dict[str, tuple[float, float]] = {
    "PARIS-LYON": (45, 80),
    "PARIS-MARSEILLE": (55, 100),
    "PARIS-BORDEAUX": (40, 70),
    "PARIS-NANTES": (35, 60),
    "PARIS-LILLE": (25, 50),
    "PARIS-STRASBOURG": (50, 85),
    "PARIS-TOULOUSE": (60, 110),
    "PARIS-NICE": (70, 130),
    "LYON-MARSEILLE": (30, 55),
    "BORDEAUX-TOULOUSE": (20, 35),
    "MARSEILLE-NICE": (20, 35),
}

TECH_PRODUCTS: dict[str, tuple[float, float]] = {
    "RTX 4090": (1899, 150),
    "RTX 4080": (1099, 100),
    "RTX 4070 Ti": (799, 80),
    "RTX 4070": (599, 60),
    "RX 7900 XTX": (999, 90),
    "RX 7900 XT": (799, 75),
    "DDR5 32GB 6000MHz": (149, 30),
    "DDR5 16GB 6000MHz": (89, 20),
    "DDR4 32GB 3200MHz": (69, 15),
    "DDR4 16GB 3200MHz": (39, 10),
}

# Keeps product seeds clear of route seeds
SEED_OFFSETS: dict[Catalog, float] = {Catalog.ROUTES: 0, Catalog.PRODUCTS: 100}

# Per-step phase shift applied while backfilling history
BACKFILL_SEED_STEP = 0.1


def normalize_key(catalog: Catalog, raw: str) -> str:
    """
    Turn a key as received from a URL into its catalog form.

    Routes are matched case-insensitively (uppercased). Product names are
    percent-decoded but otherwise matched exactly.
    """
    if catalog is Catalog.ROUTES:
        return raw.upper()
    return unquote(raw)


class CatalogRegistry:
    """Immutable set of instrument definitions for both catalogs."""

    def __init__(self, instruments: Mapping[Catalog, list[InstrumentConfig]]):
        self._instruments: dict[Catalog, dict[str, InstrumentConfig]] = {}
        for catalog in Catalog:
            entries = instruments.get(catalog, [])
            by_key = {inst.key: inst for inst in entries}
            if len(by_key) != len(entries):
                raise ValueError(f"Duplicate keys in {catalog.value} catalog")
            self._instruments[catalog] = by_key

        seeds = [inst.seed_offset for inst in self]
        if len(set(seeds)) != len(seeds):
            raise ValueError("Instrument seed offsets must be unique across catalogs")

    @classmethod
    def from_tables(
        cls,
        routes: Mapping[str, tuple[float, float]] = ROUTES,
        products: Mapping[str, tuple[float, float]] = TECH_PRODUCTS,
    ) -> "CatalogRegistry":
        """Build a registry from ``key -> (base, variance)`` tables."""
        tables = {Catalog.ROUTES: routes, Catalog.PRODUCTS: products}
        instruments = {
            catalog: [
                InstrumentConfig(
                    key=key,
                    catalog=catalog,
                    base=base,
                    variance=variance,
                    seed_offset=SEED_OFFSETS[catalog] + idx,
                )
                for idx, (key, (base, variance)) in enumerate(table.items())
            ]
            for catalog, table in tables.items()
        }
        return cls(instruments)

    @classmethod
    def default(cls) -> "CatalogRegistry":
        return cls.from_tables()

    def instruments(self, catalog: Catalog) -> list[InstrumentConfig]:
        return list(self._instruments[catalog].values())

    def get(self, catalog: Catalog, key: str) -> InstrumentConfig:
        try:
            return self._instruments[catalog][key]
        except KeyError:
            raise InstrumentNotFoundError(catalog, key) from None

    def resolve(self, catalog: Catalog, raw_key: str) -> InstrumentConfig:
        """Normalize a URL-supplied key and look it up."""
        return self.get(catalog, normalize_key(catalog, raw_key))

    def __iter__(self) -> Iterator[InstrumentConfig]:
        for catalog in Catalog:
            yield from self._instruments[catalog].values()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._instruments.values())


def backfill_history(
    instrument: InstrumentConfig,
    end: datetime,
    points: int,
    spacing_seconds: float,
    rng: IRandomSource | None = None,
) -> list[Sample]:
    """
    Synthesize ``points`` samples ending at ``end``.

    Older samples get a larger phase shift so the series already shows drift.
    """
    timestamps = backdated(end, points, spacing_seconds)
    samples = []
    for offset, timestamp in zip(range(points - 1, -1, -1), timestamps):
        price = generate_price(
            instrument.base,
            instrument.variance,
            instrument.seed_offset + offset * BACKFILL_SEED_STEP,
            at=timestamp,
            rng=rng,
        )
        samples.append(Sample(timestamp=timestamp, price=price))
    return samples


def seed_store(
    registry: CatalogRegistry,
    store: SeriesStore,
    now: datetime,
    points: int = 50,
    spacing_seconds: float = 60.0,
    rng: IRandomSource | None = None,
) -> int:
    """
    Seed one series per instrument.

    Returns:
        Number of series seeded
    """
    for catalog in Catalog:
        instruments = registry.instruments(catalog)
        for instrument in instruments:
            store.seed(
                catalog,
                instrument.key,
                backfill_history(instrument, now, points, spacing_seconds, rng),
            )
        get_engine_logger("catalog", catalog=catalog.value).info(
            "catalog_seeded", instruments=len(instruments), points=points
        )
    return len(registry)


__all__ = [
    "CatalogRegistry",
    "ROUTES",
    "TECH_PRODUCTS",
    "backfill_history",
    "normalize_key",
    "seed_store",
    "split_route_key",
]
