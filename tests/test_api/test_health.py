"""HTTP tests for liveness/readiness endpoints."""

from fastapi.testclient import TestClient

from traintracker.config.state import EngineConfig
from traintracker.engine.container import PriceEngine
from traintracker_api.main import create_app


def test_health_with_scheduler_disabled(settings, engine, run_ticks):
    run_ticks(2)
    with TestClient(create_app(settings, engine)) as client:
        response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["services"] == {"store": True, "scheduler": True}
    assert body["ticks"] == 2
    assert body["last_tick"] == "2024-01-15T10:02:00.000Z"


def test_health_reports_running_scheduler(settings, clock, rng):
    settings.engine = EngineConfig(scheduler_enabled=True)
    engine = PriceEngine.build(settings.engine, clock=clock, rng=rng)

    with TestClient(create_app(settings, engine)) as client:
        response = client.get("/health")
        assert response.status_code == 200
        assert engine.scheduler.running

    assert not engine.scheduler.running


def test_health_fails_when_scheduler_is_down(settings, clock, rng):
    settings.engine = EngineConfig(scheduler_enabled=True)
    engine = PriceEngine.build(settings.engine, clock=clock, rng=rng)

    # No context manager: lifespan never runs, so the scheduler never starts
    client = TestClient(create_app(settings, engine))
    response = client.get("/health")

    assert response.status_code == 503
    detail = response.json()["detail"]
    assert detail["status"] == "unhealthy"
    assert detail["services"]["scheduler"] is False


def test_ready(settings, engine):
    with TestClient(create_app(settings, engine)) as client:
        body = client.get("/ready").json()
    assert body == {"status": "ready", "instruments": {"routes": 11, "products": 10}}
