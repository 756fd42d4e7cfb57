"""Derived statistics over a series snapshot."""

from collections.abc import Sequence

from traintracker.shared.models.prices import PricePoint, Sample, Summary


def change_percent(change: float, previous: float) -> float:
    """Percentage move relative to ``previous``; ``0.0`` when ``previous`` is zero."""
    if previous == 0:
        return 0.0
    return round(change / previous * 100, 2)


def summarize(
    series: Sequence[Sample],
    include_open: bool = True,
    window: int | None = None,
) -> Summary:
    """
    Build a Summary from a non-empty series.

    Statistics always cover the whole snapshot. ``window`` only trims the
    returned history to the newest samples.

    Args:
        series: Samples in ascending timestamp order
        include_open: Set ``open`` to the first price
        window: Keep only the last N samples in ``history``

    Raises:
        ValueError: If ``series`` is empty or ``window`` is not positive
    """
    if not series:
        raise ValueError("Cannot summarize an empty series")
    if window is not None and window < 1:
        raise ValueError("window must be positive")

    prices = [sample.price for sample in series]
    current = prices[-1]
    previous = prices[-2] if len(prices) > 1 else current
    change = round(current - previous, 2)

    visible = series[-window:] if window is not None else series

    return Summary(
        history=[PricePoint.from_sample(sample) for sample in visible],
        current=current,
        previous=previous,
        change=change,
        change_percent=change_percent(change, previous),
        high=max(prices),
        low=min(prices),
        open_price=prices[0] if include_open else None,
    )
