"""
Observability layer: structured logging shared by the engine, the scheduler and the API.
"""

from .logging import (
    get_api_logger,
    get_engine_logger,
    # Layer-specific logger factories
    get_infrastructure_logger,
    # Base logger factory
    get_logger,
    get_scheduler_logger,
    # Setup
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_infrastructure_logger",
    "get_engine_logger",
    "get_scheduler_logger",
    "get_api_logger",
]
