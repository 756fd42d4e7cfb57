from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from traintracker import __version__
from traintracker.config.state import ConfigState, get_config
from traintracker.engine.container import PriceEngine
from traintracker.engine.exceptions import InstrumentNotFoundError
from traintracker.infrastructure.observability import get_api_logger, setup_logging
from traintracker_api.health import router as health_router
from traintracker_api.routes import prices_router


def create_app(
    settings: ConfigState | None = None, engine: PriceEngine | None = None
) -> FastAPI:
    """
    Build the HTTP app around a price engine.

    Args:
        settings: Loaded configuration (read from disk/env when None)
        engine: Pre-built engine; a fresh seeded one is built when None
    """
    settings = settings or get_config()
    engine = engine or PriceEngine.build(settings.engine)
    logger = get_api_logger()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.engine.scheduler_enabled:
            engine.scheduler.start()
        try:
            yield
        finally:
            await engine.scheduler.stop()

    app = FastAPI(title="TrainTracker API", version=__version__, lifespan=lifespan)
    app.state.engine = engine
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InstrumentNotFoundError)
    async def instrument_not_found(
        request: Request, exc: InstrumentNotFoundError
    ) -> JSONResponse:
        logger.info(
            "instrument_not_found",
            catalog=exc.catalog.value,
            key=exc.key,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=404, content={"error": exc.catalog.not_found_message}
        )

    app.include_router(health_router, prefix="")  # /health directly
    app.include_router(prices_router)

    static_root = Path(settings.server.static_dir).resolve()

    # Registered last so it only sees paths nothing else matched
    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        candidate = (static_root / full_path).resolve()
        if (
            full_path
            and candidate.is_relative_to(static_root)
            and candidate.is_file()
        ):
            return FileResponse(candidate)

        index = static_root / "index.html"
        if not index.is_file():
            logger.error("frontend_missing", static_dir=str(static_root))
            return JSONResponse(
                status_code=500, content={"error": "Frontend not available"}
            )
        return FileResponse(index)

    return app


def run() -> None:
    """Console entry point: load config, configure logging, serve."""
    import uvicorn

    settings = get_config()
    setup_logging(
        level=settings.logging.level,
        json_logs=settings.logging.json_logs,
        include_timestamp=settings.logging.include_timestamp,
    )
    app = create_app(settings)
    get_api_logger().info(
        "server_starting", host=settings.server.host, port=settings.server.port
    )
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    run()
