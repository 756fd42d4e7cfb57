"""
Price-series engine: generation, bounded storage, summaries and scheduling.
"""

from traintracker.engine.catalog import CatalogRegistry, normalize_key, seed_store
from traintracker.engine.container import PriceEngine
from traintracker.engine.exceptions import (
    InstrumentNotFoundError,
    PriceEngineError,
    SeriesAlreadySeededError,
)
from traintracker.engine.generator import generate_price
from traintracker.engine.query import QueryFacade
from traintracker.engine.scheduler import PriceScheduler
from traintracker.engine.series_store import SeriesStore
from traintracker.engine.summary import summarize

__all__ = [
    "CatalogRegistry",
    "InstrumentNotFoundError",
    "PriceEngine",
    "PriceEngineError",
    "PriceScheduler",
    "QueryFacade",
    "SeriesAlreadySeededError",
    "SeriesStore",
    "generate_price",
    "normalize_key",
    "seed_store",
    "summarize",
]
