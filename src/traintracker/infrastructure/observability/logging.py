"""
Structured logging infrastructure for traintracker.
Provides consistent, machine-readable logs across the engine and the API.

Log Structure:
    {
        "app": "traintracker",         # Application identifier
        "layer": "engine",             # Architectural layer
        "component": "series-store",   # Specific component
        "module": "...",               # Python module (optional)
        "catalog": "routes",           # Domain context
        "event": "prices_updated",     # What happened
        ...
    }

Architectural Layers:
    - infrastructure: Cross-cutting (config, clock)
    - engine: Price generation, series storage, summaries
    - scheduler: Periodic refresh ticks
    - api: HTTP layer
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

# Define valid architectural layers
Layer = Literal["infrastructure", "engine", "scheduler", "api"]


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the application identifier to every log entry."""
    event_dict["app"] = "traintracker"
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add severity level for cloud logging compatibility.
    Maps Python log levels to standard severity levels.
    """
    level = event_dict.get("level")
    if level:
        severity_map = {
            "debug": "DEBUG",
            "info": "INFO",
            "warning": "WARNING",
            "error": "ERROR",
            "critical": "CRITICAL",
        }
        event_dict["severity"] = severity_map.get(level, "INFO")
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from traintracker.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        # Production: JSON for log aggregation
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Development: Pretty console output
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance with architectural context.

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer (infrastructure, engine, scheduler, api)
        component: Specific component within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Usage:
        >>> log = get_logger(__name__, layer="engine", component="series-store")
        >>> log.info("series_seeded", key="PARIS-LYON", points=50)
    """
    logger = structlog.get_logger(name)

    context = {}

    if layer:
        context["layer"] = layer

    if component:
        context["component"] = component

    if name:
        context["module"] = name

    context.update(initial_context)

    if context:
        logger = logger.bind(**context)

    return logger


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def get_infrastructure_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for infrastructure layer (config, clock).

    Usage:
        >>> log = get_infrastructure_logger("config-loader")
        >>> log.info("config_loaded", env="dev")
    """
    return get_logger(
        "infrastructure",
        layer="infrastructure",
        component=component,
        **context,
    )


def get_engine_logger(
    component: str,
    catalog: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the price engine.

    Args:
        component: Component name (e.g., "series-store", "catalog", "query")
        catalog: Catalog name (e.g., "routes", "products") - optional
        **context: Additional context

    Usage:
        >>> log = get_engine_logger("series-store", catalog="routes")
        >>> log.debug("sample_appended", key="PARIS-LYON")
    """
    ctx = {}
    if catalog:
        ctx["catalog"] = catalog
    ctx.update(context)

    return get_logger(
        "engine",
        layer="engine",
        component=component,
        **ctx,
    )


def get_scheduler_logger(
    component: str = "price-scheduler",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the refresh scheduler.

    Usage:
        >>> log = get_scheduler_logger()
        >>> log.info("prices_updated", samples=21)
    """
    return get_logger(
        "scheduler",
        layer="scheduler",
        component=component,
        **context,
    )


def get_api_logger(
    component: str = "fastapi",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for API layer.

    Usage:
        >>> log = get_api_logger()
        >>> log.info("request_received", method="GET", path="/api/routes")
    """
    return get_logger(
        "api",
        layer="api",
        component=component,
        **context,
    )
