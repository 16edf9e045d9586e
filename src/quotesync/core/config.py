"""
quotesync configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_HOME = Path.home() / ".quotesync"


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_enabled: bool = True
    console_enabled: bool = True
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: DEFAULT_HOME / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class StorageConfig(BaseModel):
    """Configuration for the durable and session stores."""

    data_directory: Path = Field(default_factory=lambda: DEFAULT_HOME / "data")
    quotes_key: str = "quotes"
    filter_key: str = "lastCategoryFilter"
    last_quote_key: str = "lastQuote"

    @field_validator("data_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class SyncConfig(BaseModel):
    """Configuration for remote reconciliation."""

    enabled: bool = True
    remote_url: str = "https://jsonplaceholder.typicode.com/posts?_limit=5"
    interval_seconds: float = Field(default=60.0, ge=1.0)
    max_attempts: int = Field(default=3, ge=1, le=10)
    base_delay_seconds: float = Field(default=1.0, gt=0)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    category_label: str = Field(default="Server Sync", min_length=1)


class QuoteSyncConfig(BaseModel):
    """Main quotesync configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> QuoteSyncConfig:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = DEFAULT_HOME / "config.json"

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_HOME / "config.json"

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create all required directories."""
        if self.logging.file_enabled:
            self.logging.log_directory.mkdir(parents=True, exist_ok=True)
        self.storage.data_directory.mkdir(parents=True, exist_ok=True)


def load_config(config_path: Path | None = None) -> QuoteSyncConfig:
    """Load or create configuration."""
    config = QuoteSyncConfig.load(config_path)
    config.ensure_directories()
    return config
