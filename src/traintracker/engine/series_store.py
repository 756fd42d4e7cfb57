"""
Bounded in-memory price series, one per instrument.

Each series is held as an immutable tuple. Writers build the next tuple under
a per-instrument lock and swap it in, so readers always get a complete
snapshot without taking a lock.
"""

import threading
from collections.abc import Iterable

from traintracker.engine.exceptions import (
    InstrumentNotFoundError,
    SeriesAlreadySeededError,
)
from traintracker.infrastructure.observability import get_engine_logger
from traintracker.shared.models.enums import Catalog
from traintracker.shared.models.prices import Sample

DEFAULT_HISTORY_CAP = 200

SeriesKey = tuple[Catalog, str]


class SeriesStore:
    """Capped FIFO history of samples keyed by ``(catalog, key)``."""

    def __init__(self, history_cap: int = DEFAULT_HISTORY_CAP):
        if history_cap < 1:
            raise ValueError("history_cap must be at least 1")
        self.history_cap = history_cap

        self._series: dict[SeriesKey, tuple[Sample, ...]] = {}
        self._locks: dict[SeriesKey, threading.Lock] = {}
        self._keys: dict[Catalog, list[str]] = {catalog: [] for catalog in Catalog}
        self._registry_lock = threading.Lock()
        self.log = get_engine_logger("series-store", history_cap=history_cap)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def seed(self, catalog: Catalog, key: str, points: Iterable[Sample]) -> None:
        """
        Initialize a series with an ordered list of samples.

        Raises:
            SeriesAlreadySeededError: If the series already exists
            ValueError: If ``points`` is empty or not in timestamp order
        """
        snapshot = tuple(points)
        if not snapshot:
            raise ValueError(f"Cannot seed {catalog.value}/{key} with no samples")
        _check_ordered(snapshot)

        series_key = (catalog, key)
        with self._registry_lock:
            if series_key in self._series:
                raise SeriesAlreadySeededError(catalog, key)
            self._locks[series_key] = threading.Lock()
            stored = snapshot[-self.history_cap :]
            self._series[series_key] = stored
            self._keys[catalog].append(key)

        self.log.debug(
            "series_seeded", catalog=catalog.value, key=key, points=len(stored)
        )

    def append(self, catalog: Catalog, key: str, sample: Sample) -> int:
        """
        Append one sample, evicting the oldest ones past the cap.

        Returns:
            Length of the series after the append

        Raises:
            InstrumentNotFoundError: If the series was never seeded
            ValueError: If ``sample`` is older than the newest stored sample
        """
        series_key = (catalog, key)
        lock = self._locks.get(series_key)
        if lock is None:
            raise InstrumentNotFoundError(catalog, key)

        with lock:
            current = self._series[series_key]
            if current and sample.timestamp < current[-1].timestamp:
                raise ValueError(
                    f"Sample at {sample.timestamp.isoformat()} is older than "
                    f"{current[-1].timestamp.isoformat()} for {catalog.value}/{key}"
                )
            updated = (*current, sample)
            if len(updated) > self.history_cap:
                updated = updated[-self.history_cap :]
            self._series[series_key] = updated
            return len(updated)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, catalog: Catalog, key: str) -> tuple[Sample, ...]:
        """
        Return an immutable snapshot of one series.

        Raises:
            InstrumentNotFoundError: If the series does not exist
        """
        try:
            return self._series[(catalog, key)]
        except KeyError:
            raise InstrumentNotFoundError(catalog, key) from None

    def list_keys(self, catalog: Catalog) -> list[str]:
        """Keys of one catalog, in seeding order."""
        return list(self._keys[catalog])

    def __contains__(self, item: object) -> bool:
        return item in self._series

    def __len__(self) -> int:
        return len(self._series)


def _check_ordered(samples: tuple[Sample, ...]) -> None:
    for previous, current in zip(samples, samples[1:]):
        if current.timestamp < previous.timestamp:
            raise ValueError("Samples must be in ascending timestamp order")
