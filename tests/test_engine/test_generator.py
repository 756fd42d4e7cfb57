"""Tests for synthetic price generation."""

import random
from datetime import UTC, datetime, timedelta

import pytest

from traintracker.engine.generator import FLOOR_RATIO, generate_price, noise_at

AT = datetime(2024, 1, 15, 10, 0, tzinfo=UTC)


class FixedRandom:
    """Randomness source that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class TestGeneratePrice:
    def test_zero_variance_returns_base(self):
        """Variance 0 collapses the noise whatever the seed or time."""
        for seed in (0, 1.5, 100, -7):
            for minutes in range(0, 300, 37):
                at = AT + timedelta(minutes=minutes)
                assert generate_price(45.678, 0, seed, at=at) == round(45.678, 2)

    def test_floor_holds_for_large_variance(self):
        rng = random.Random(1)
        base = 10.0
        floor = round(base * FLOOR_RATIO, 2)
        for seed in range(50):
            for minutes in range(0, 600, 13):
                at = AT + timedelta(minutes=minutes)
                assert generate_price(base, 1000, seed, at=at, rng=rng) >= floor

    def test_floor_is_hit_when_noise_is_negative(self):
        # Pick a moment where the drift is clearly negative
        rng = FixedRandom(0.0)
        at = next(
            AT + timedelta(seconds=s)
            for s in range(0, 3600)
            if noise_at(0, (AT + timedelta(seconds=s)).timestamp() * 1000, rng) < -0.3
        )
        assert generate_price(100, 1000, 0, at=at, rng=rng) == 40.0

    def test_rounded_to_two_decimals(self):
        rng = random.Random(3)
        for seed in range(20):
            price = generate_price(1899, 150, seed, at=AT, rng=rng)
            assert price == round(price, 2)

    def test_same_inputs_same_output(self):
        """With an injected randomness source the generator is deterministic."""
        first = generate_price(599, 60, 3, at=AT, rng=random.Random(9))
        second = generate_price(599, 60, 3, at=AT, rng=random.Random(9))
        assert first == second

    def test_noise_stays_within_weights(self):
        bound = 0.30 + 0.20 + 0.15 + 0.35 / 2
        for value in (0.0, 0.5, 0.999):
            rng = FixedRandom(value)
            for minutes in range(0, 200, 7):
                at_ms = (AT + timedelta(minutes=minutes)).timestamp() * 1000
                assert abs(noise_at(2.0, at_ms, rng)) <= bound

    def test_distinct_seeds_decorrelate(self):
        rng = FixedRandom(0.5)
        prices = {generate_price(1000, 100, seed, at=AT, rng=rng) for seed in range(5)}
        assert len(prices) > 1

    def test_defaults_to_wall_clock(self):
        assert generate_price(50, 0) == 50.0

    @pytest.mark.parametrize("base,variance", [(0, 10), (-5, 10), (10, -1)])
    def test_rejects_invalid_shape(self, base, variance):
        with pytest.raises(ValueError):
            generate_price(base, variance, at=AT)
