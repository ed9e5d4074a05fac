"""
easytiming: Central Config Loader (Pydantic Settings)

Centralizes the defaults timers fall back to when the caller does not
choose: which sink, which logger, and how logging itself is set up.

Usage:

from easytiming.config import settings

settings.DEFAULT_SINK      # "console" or "log"
settings.LOGGER_NAME       # logger used by log sinks without an explicit logger
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from easytiming.utils.exceptions import ConfigError


PACKAGE_DIR = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_DIR / "configs"


class Settings(BaseSettings):
    """
    Central configuration using Pydantic Settings (v2).
    Overrides order:
    1. Environment variables (EASYTIMING_*)
    2. .env file (optional)
    3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="EASYTIMING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -----------------------------
    # Sinks
    # -----------------------------
    DEFAULT_SINK: Literal["console", "log"] = Field(
        "console", description="Sink used when a timer is built without one"
    )
    WRITER_TERMINATOR: str = Field("", description="Appended after each report written to a writer sink")

    # -----------------------------
    # Logging
    # -----------------------------
    LOGGER_NAME: str = "easytiming.timing"
    LOG_LEVEL: str = "DEBUG"
    LOGGING_YAML: str = str(CONFIG_DIR / "logging.yaml")
    LOG_DIR: str = ""  # empty: no file handler

    # ------------------------------------------------------------------
    # YAML Loader Utilities
    # ------------------------------------------------------------------

    def load_yaml(self, path: str) -> Dict[str, Any]:
        """Load a YAML mapping (logging config)."""
        if not Path(path).exists():
            raise ConfigError("ET-CFG-0001", f"YAML not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError("ET-CFG-0001", f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("ET-CFG-0001", f"YAML root must be a mapping: {path}")
        return data


# Create global settings instance
settings = Settings()

__all__ = ["settings", "Settings"]
