"""
Unified configuration state management.

This module provides a single source of truth for application configuration,
combining YAML files with environment overrides, type validation,
and sensible defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="allow")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    static_dir: str = Field(default="public")


class EngineConfig(BaseModel):
    """Price engine sizing and cadence."""

    model_config = ConfigDict(extra="allow")

    history_cap: int = Field(default=200, ge=1)
    seed_points: int = Field(default=50, ge=1)
    seed_spacing_seconds: float = Field(default=60.0, gt=0)
    tick_interval_seconds: float = Field(default=60.0, gt=0)
    product_window: int = Field(default=60, ge=1)
    scheduler_enabled: bool = Field(default=True)

    @model_validator(mode="after")
    def check_seed_fits_cap(self):
        """Seeded history must fit in the capped series."""
        if self.seed_points > self.history_cap:
            raise ValueError(
                f"seed_points ({self.seed_points}) exceeds history_cap ({self.history_cap})"
            )
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="allow")

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)
    include_timestamp: bool = Field(default=True)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for all app config.
    """

    model_config = ConfigDict(extra="allow")

    server: ServerConfig = Field(default_factory=ServerConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Environment metadata
    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


_TRUTHY = {"1", "true", "yes", "on"}


class ConfigLoader:
    """
    Load and validate configuration from YAML files.

    Merges:
      1. Defaults (hardcoded on the models)
      2. YAML files from config_dir
      3. Environment-specific YAML (env/<env>.yaml)
      4. Environment variable overrides
    """

    def __init__(self, config_dir: str = "./config", env: str | None = None):
        self.config_dir = Path(config_dir)
        self._yaml_cache: dict[Path, Any] = {}
        self.env = env or os.getenv("TRAINTRACKER_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load YAML file with caching."""
        if path in self._yaml_cache:
            return self._yaml_cache[path]

        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        self._yaml_cache[path] = data
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        if port := os.getenv("PORT"):
            config.setdefault("server", {})["port"] = int(port)

        if host := os.getenv("HOST"):
            config.setdefault("server", {})["host"] = host

        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        if log_json := os.getenv("LOG_JSON"):
            config.setdefault("logging", {})["json_logs"] = (
                log_json.strip().lower() in _TRUTHY
            )

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Returns:
            ConfigState: Validated configuration object

        Raises:
            ValidationError: If configuration is invalid
        """
        logger.info(f"Loading configuration from {self.config_dir} (env: {self.env})")

        config: dict[str, Any] = {}

        # 1. Top-level YAML files
        for config_file in ["server.yaml", "engine.yaml", "logging.yaml"]:
            file_config = self._load_yaml(self.config_dir / config_file)
            config = self._merge_dicts(config, file_config)

        # 2. Environment-specific overrides
        env_config = self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        config = self._merge_dicts(config, env_config)

        # 3. Environment variable overrides
        config = self._apply_env_overrides(config)

        state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        logger.info(
            f"Configuration loaded: port={state.server.port}, "
            f"history_cap={state.engine.history_cap}, "
            f"tick_interval={state.engine.tick_interval_seconds}s"
        )
        return state


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================


def get_config(config_dir: str | None = None) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to $TRAINTRACKER_CONFIG_DIR or ./config

    Returns:
        ConfigState: Validated configuration object
    """
    if config_dir is None:
        config_dir = os.getenv("TRAINTRACKER_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            logger.warning(f"Config directory not found at {config_dir}, using defaults")

    loader = ConfigLoader(config_dir=config_dir)
    return loader.load()


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "EngineConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_config",
]
