# traintracker/shared/models/instruments.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from traintracker.shared.models.enums import Catalog


def split_route_key(key: str) -> tuple[str, str]:
    """
    Split a ``FROM-TO`` route key on its first hyphen.

    The remainder is kept whole so hyphenated destinations survive:
    ``PARIS-LA-ROCHELLE`` -> ``("PARIS", "LA-ROCHELLE")``.
    """
    origin, _, destination = key.partition("-")
    return origin, destination


class InstrumentConfig(BaseModel):
    """
    Static definition of one tracked instrument.

    One InstrumentConfig maps to exactly one price series.
    """

    model_config = ConfigDict(frozen=True)

    # ========== IDENTITY ==========
    key: str = Field(..., min_length=1, description="Catalog-unique identifier")
    catalog: Catalog

    # ========== PRICE SHAPE ==========
    base: float = Field(..., gt=0, description="Centre price around which noise drifts")
    variance: float = Field(default=0.0, ge=0, description="Noise amplitude")
    seed_offset: float = Field(
        default=0.0, description="Phase offset decorrelating instruments"
    )

    # ==================== VALIDATORS ====================

    @model_validator(mode="after")
    def check_route_key(self):
        """Route keys must carry both endpoints"""
        if self.catalog is Catalog.ROUTES:
            origin, destination = split_route_key(self.key)
            if not origin or not destination:
                raise ValueError(f"Route key must look like FROM-TO, got {self.key!r}")
        return self

    # ==================== PROPERTIES ====================

    @property
    def origin(self) -> str | None:
        if self.catalog is not Catalog.ROUTES:
            return None
        return split_route_key(self.key)[0]

    @property
    def destination(self) -> str | None:
        if self.catalog is not Catalog.ROUTES:
            return None
        return split_route_key(self.key)[1]

    def display_fields(self) -> dict[str, Any]:
        """Listing payload: ``{id, from, to}`` for routes, ``{id, name}`` for products"""
        if self.catalog is Catalog.ROUTES:
            return {"id": self.key, "from": self.origin, "to": self.destination}
        return {"id": self.key, "name": self.key}
