"""Shared domain models."""

from traintracker.shared.models.enums import Catalog
from traintracker.shared.models.instruments import InstrumentConfig, split_route_key
from traintracker.shared.models.prices import PricePoint, Sample, Summary

__all__ = [
    # Enums
    "Catalog",
    # Instruments
    "InstrumentConfig",
    "split_route_key",
    # Prices
    "PricePoint",
    "Sample",
    "Summary",
]
