"""
Shared fixtures: a frozen clock, a seeded randomness source and a small,
fully seeded engine with the background scheduler disabled.
"""

import random
from datetime import UTC, datetime

import pytest

from traintracker.config.state import ConfigState, EngineConfig, ServerConfig
from traintracker.engine.container import PriceEngine
from traintracker.infrastructure.impls.system import ManualClock

START = datetime(2024, 1, 15, 10, 0, tzinfo=UTC)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(START)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(scheduler_enabled=False)


@pytest.fixture
def engine(engine_config, clock, rng) -> PriceEngine:
    return PriceEngine.build(engine_config, clock=clock, rng=rng)


@pytest.fixture
def settings(engine_config, tmp_path) -> ConfigState:
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html>TrainTracker</html>", encoding="utf-8")
    return ConfigState(
        engine=engine_config,
        server=ServerConfig(static_dir=str(static_dir)),
    )


@pytest.fixture
def run_ticks(engine, clock):
    """Callable running N refreshes, each one interval after the previous."""

    def _run(ticks: int) -> None:
        for _ in range(ticks):
            engine.scheduler.tick(clock.advance(engine.config.tick_interval_seconds))

    return _run
