"""
Dependency container for the price engine.

Wires together:
- Catalog registry (instrument definitions)
- Series store (bounded history)
- Scheduler (periodic refresh)
- Query facade (read surface for the HTTP layer)

Everything is constructed explicitly so tests can build an isolated engine
with a manual clock and a seeded randomness source.
"""

from traintracker.config.state import EngineConfig
from traintracker.engine.catalog import CatalogRegistry, seed_store
from traintracker.engine.query import QueryFacade
from traintracker.engine.scheduler import PriceScheduler
from traintracker.engine.series_store import SeriesStore
from traintracker.infrastructure.impls.system import SystemClock
from traintracker.infrastructure.observability import get_engine_logger
from traintracker.infrastructure.ports.system import IClock, IRandomSource


class PriceEngine:
    """
    Owns the engine state for one process.

    Usage:
        engine = PriceEngine.build(settings.engine)
        engine.scheduler.start()
        summary = engine.query.get_summary(Catalog.ROUTES, "paris-lyon")
    """

    def __init__(
        self,
        registry: CatalogRegistry,
        store: SeriesStore,
        scheduler: PriceScheduler,
        query: QueryFacade,
        config: EngineConfig,
    ):
        self.registry = registry
        self.store = store
        self.scheduler = scheduler
        self.query = query
        self.config = config

    @classmethod
    def build(
        cls,
        config: EngineConfig | None = None,
        registry: CatalogRegistry | None = None,
        clock: IClock | None = None,
        rng: IRandomSource | None = None,
    ) -> "PriceEngine":
        """
        Create a fully seeded engine.

        Args:
            config: Engine sizing and cadence (defaults when None)
            registry: Instrument definitions (built-in catalogs when None)
            clock: Time source for seeding and ticks
            rng: Randomness source for price jitter
        """
        if config is None:
            config = EngineConfig()
        if registry is None:
            registry = CatalogRegistry.default()
        clock = clock or SystemClock()

        store = SeriesStore(history_cap=config.history_cap)
        seed_store(
            registry,
            store,
            now=clock.now(),
            points=config.seed_points,
            spacing_seconds=config.seed_spacing_seconds,
            rng=rng,
        )

        scheduler = PriceScheduler(
            registry,
            store,
            clock=clock,
            rng=rng,
            interval_seconds=config.tick_interval_seconds,
        )
        query = QueryFacade(registry, store, product_window=config.product_window)

        get_engine_logger("container").info(
            "engine_built",
            instruments=len(registry),
            history_cap=config.history_cap,
            product_window=config.product_window,
        )
        return cls(registry, store, scheduler, query, config)
