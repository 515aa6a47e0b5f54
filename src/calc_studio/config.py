"""
Configuration management for Calc Studio.

Handles loading configuration from environment variables, YAML files,
and provides sensible defaults for all settings.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
import yaml
from dotenv import dotenv_values
from pydantic_settings import BaseSettings, SettingsConfigDict


# Path of a YAML settings file, exported by `calc --config` for child processes
CONFIG_FILE_ENV = "CALC_CONFIG_FILE"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    app_name: str = "Calc Studio"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Demo page settings
    greeting_name: str = "World"

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Build settings from a YAML file; environment and .env values still win."""
        values = load_yaml_config(path)
        return cls(**_yaml_defaults(cls, values))


def _yaml_defaults(cls: type[BaseSettings], values: dict[str, Any]) -> dict[str, Any]:
    # Init kwargs outrank env vars and .env in pydantic-settings, so drop keys either sets
    prefix = cls.model_config.get("env_prefix", "")
    overridden = {key.upper() for key in os.environ}
    env_file = cls.model_config.get("env_file")
    if env_file and Path(env_file).is_file():
        overridden.update(
            key.upper()
            for key in dotenv_values(env_file, encoding=cls.model_config.get("env_file_encoding"))
        )
    return {
        key: value
        for key, value in values.items()
        if key in cls.model_fields and f"{prefix}{key}".upper() not in overridden
    }


def load_yaml_config(path: Path) -> dict:
    """Load configuration from a YAML file."""
    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Configure structlog filtering and rendering."""
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _settings_from_env() -> Settings:
    path = os.environ.get(CONFIG_FILE_ENV)
    return Settings.from_yaml(Path(path)) if path else Settings()


# Global settings instance
settings = _settings_from_env()


def get_settings() -> Settings:
    """Return the active settings (FastAPI dependency)."""
    return settings


def load_settings(path: Path | None = None) -> Settings:
    """
    Replace the active settings.

    Without a path, the YAML file named by CALC_CONFIG_FILE is used if set.
    """
    global settings
    settings = Settings.from_yaml(path) if path else _settings_from_env()
    return settings
