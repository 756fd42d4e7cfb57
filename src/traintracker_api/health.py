from typing import Any

from fastapi import APIRouter, HTTPException, Request

from traintracker import __version__
from traintracker.common.utils.date_utils import to_iso_z
from traintracker.engine.container import PriceEngine
from traintracker.infrastructure.observability import get_api_logger
from traintracker.shared.models.enums import Catalog

router = APIRouter()


def check_store(engine: PriceEngine) -> bool:
    """Every instrument has a series."""
    seeded = all(
        (inst.catalog, inst.key) in engine.store for inst in engine.registry
    )
    if not seeded:
        get_api_logger("health").error(
            "store_check_failed", series=len(engine.store)
        )
    return seeded


def check_scheduler(engine: PriceEngine) -> bool:
    """Scheduler loop is alive when it is supposed to be."""
    if not engine.config.scheduler_enabled:
        return True
    if not engine.scheduler.running:
        get_api_logger("health").error("scheduler_check_failed")
        return False
    return True


@router.get("/health")
def health_check(request: Request) -> dict[str, Any]:
    """Comprehensive health check endpoint."""
    engine: PriceEngine = request.app.state.engine
    last_tick = engine.scheduler.last_tick_at
    health_status = {
        "status": "healthy",
        "services": {
            "store": check_store(engine),
            "scheduler": check_scheduler(engine),
        },
        "ticks": engine.scheduler.tick_count,
        "last_tick": to_iso_z(last_tick) if last_tick else None,
        "version": __version__,
    }

    # If any service is unhealthy, return 503
    if not all(health_status["services"].values()):
        health_status["status"] = "unhealthy"
        raise HTTPException(status_code=503, detail=health_status)

    return health_status


@router.get("/ready")
def readiness_check(request: Request) -> dict[str, Any]:
    """Readiness check: instruments loaded per catalog."""
    engine: PriceEngine = request.app.state.engine
    return {
        "status": "ready",
        "instruments": {
            catalog.value: len(engine.store.list_keys(catalog)) for catalog in Catalog
        },
    }
