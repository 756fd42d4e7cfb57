"""
Shared enumerations for the price tracker.
"""

import enum


class Catalog(str, enum.Enum):
    """Instrument group. Each catalog has its own key scheme and query shape."""

    ROUTES = "routes"
    PRODUCTS = "products"

    @property
    def not_found_message(self) -> str:
        """Error body returned by the HTTP layer for an unknown key."""
        if self is Catalog.ROUTES:
            return "Route not found"
        return "Product not found"
