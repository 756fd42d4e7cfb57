"""Application configuration."""

from traintracker.config.state import (
    ConfigLoader,
    ConfigState,
    EngineConfig,
    LoggingConfig,
    ServerConfig,
    get_config,
)

__all__ = [
    "ConfigLoader",
    "ConfigState",
    "EngineConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_config",
]
