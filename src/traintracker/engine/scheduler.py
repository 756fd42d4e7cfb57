"""
Periodic price refresh.

A single asyncio task wakes on every interval boundary (the top of each
minute by default) and appends one new sample per instrument. Ticks are
serialized: one that overruns its slot delays the next instead of
overlapping it.
"""

import asyncio
import contextlib
import threading
from datetime import datetime

from traintracker.common.utils.date_utils import next_boundary
from traintracker.engine.catalog import CatalogRegistry
from traintracker.engine.generator import generate_price
from traintracker.engine.series_store import SeriesStore
from traintracker.infrastructure.impls.system import SystemClock
from traintracker.infrastructure.observability import get_scheduler_logger
from traintracker.infrastructure.ports.system import IClock, IRandomSource
from traintracker.shared.models.prices import Sample


class PriceScheduler:
    """Drives refresh ticks over every instrument of a registry."""

    def __init__(
        self,
        registry: CatalogRegistry,
        store: SeriesStore,
        clock: IClock | None = None,
        rng: IRandomSource | None = None,
        interval_seconds: float = 60.0,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.registry = registry
        self.store = store
        self.clock = clock or SystemClock()
        self.rng = rng
        self.interval_seconds = interval_seconds

        self._tick_lock = threading.Lock()
        self._task: asyncio.Task | None = None
        self._tick_count = 0
        self._last_tick_at: datetime | None = None
        self.log = get_scheduler_logger(interval_seconds=interval_seconds)

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------
    def tick(self, now: datetime | None = None) -> int:
        """
        Append one freshly generated sample to every series.

        Args:
            now: Tick time; defaults to the scheduler clock

        Returns:
            Number of samples appended
        """
        with self._tick_lock:
            now = now or self.clock.now()
            appended = 0
            for instrument in self.registry:
                price = generate_price(
                    instrument.base,
                    instrument.variance,
                    instrument.seed_offset,
                    at=now,
                    rng=self.rng,
                )
                self.store.append(
                    instrument.catalog,
                    instrument.key,
                    Sample(timestamp=now, price=price),
                )
                appended += 1

            self._tick_count += 1
            self._last_tick_at = now

        self.log.info(
            "prices_updated",
            tick_at=now.isoformat(),
            samples=appended,
            tick_count=self._tick_count,
        )
        return appended

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def last_tick_at(self) -> datetime | None:
        return self._last_tick_at

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """
        Launch the periodic loop on the running event loop.

        Returns:
            The loop task, usable as a cancellation handle
        """
        if self.running:
            raise RuntimeError("Scheduler is already running")
        self._task = asyncio.create_task(self._run(), name="price-scheduler")
        self.log.info("scheduler_started")
        return self._task

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        self.log.info("scheduler_stopped", tick_count=self._tick_count)

    def seconds_until_next_tick(self) -> float:
        now = self.clock.now()
        boundary = next_boundary(now, self.interval_seconds)
        return max((boundary - now).total_seconds(), 0.0)

    async def _run(self) -> None:
        while True:
            target = next_boundary(self.clock.now(), self.interval_seconds)
            # sleep may wake early; never tick before the boundary
            while (delay := (target - self.clock.now()).total_seconds()) > 0:
                await asyncio.sleep(delay)
            try:
                self.tick()
            except Exception:
                self.log.exception("tick_failed")
