"""
Synthetic price generation.

Prices drift smoothly through three sine waves of wall-clock time and carry
a uniform jitter on top. The result never drops below 40% of the base price.
"""

import math
import random
from datetime import datetime

from traintracker.common.utils.date_utils import to_unix_ms, utc_now
from traintracker.infrastructure.ports.system import IRandomSource

FLOOR_RATIO = 0.4

# (weight, period in ms, seed multiplier)
WAVES: tuple[tuple[float, float, float], ...] = (
    (0.30, 100_000, 1),
    (0.20, 50_000, 2),
    (0.15, 20_000, 3),
)
JITTER_WEIGHT = 0.35


def noise_at(seed: float, at_ms: float, rng: IRandomSource) -> float:
    """Weighted drift plus jitter, roughly in ``[-0.825, 0.825]``."""
    drift = sum(
        weight * math.sin(at_ms / period + seed * multiplier)
        for weight, period, multiplier in WAVES
    )
    return drift + (rng.random() - 0.5) * JITTER_WEIGHT


def generate_price(
    base: float,
    variance: float,
    seed: float = 0.0,
    at: datetime | None = None,
    rng: IRandomSource | None = None,
) -> float:
    """
    Generate one noisy price around ``base``.

    Args:
        base: Centre price, must be positive
        variance: Noise amplitude, ``0`` returns ``base`` unchanged
        seed: Phase offset; distinct per instrument so series do not move together
        at: Point in time to price (defaults to now)
        rng: Randomness source for the jitter term (defaults to the ``random`` module)

    Returns:
        Price rounded to 2 decimals and floored at ``0.4 * base``
    """
    if base <= 0:
        raise ValueError(f"base must be positive, got {base}")
    if variance < 0:
        raise ValueError(f"variance must be non-negative, got {variance}")

    at_ms = to_unix_ms(at or utc_now())
    noise = noise_at(seed, at_ms, rng if rng is not None else random)

    price = base + noise * variance
    return round(max(price, base * FLOOR_RATIO), 2)
