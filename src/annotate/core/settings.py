"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local, .env.dev/.env.test/.env.prod

The CLI `--file` option takes precedence over `ANNOTATE_FILE` when both are given.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_STORE_NAME = ".annotations.json"


def _default_store_path() -> Path:
    """Return the default store location inside the user's home directory."""
    return Path.home() / DEFAULT_STORE_NAME


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `ANNOTATE_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`. Defaults to WARNING so
        that log lines do not interleave with the interactive list.
    store_path : Path
        Location of the persisted annotations file; maps from `ANNOTATE_FILE`.
    """

    environment: EnvName = Field(default="dev", alias="ANNOTATE_ENV")
    log_level: LogLevelName = Field(default="WARNING", alias="LOG_LEVEL")
    store_path: Path = Field(default_factory=_default_store_path, alias="ANNOTATE_FILE")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("store_path")
    @classmethod
    def _expand_user(cls, v: Path) -> Path:
        """Allow `~/notes.json` style values in the environment."""
        return v.expanduser()

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.WARNING)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("ANNOTATE_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "annotate") -> logging.Logger:
    """Return a process-global logger configured to the current log level.

    Handlers write to stderr so that they never mix with the list rendered on
    stdout. The level is re-applied on every call so a cache-cleared
    `load_settings()` is honoured by loggers created afterwards.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
