"""
Tests for quotesync.core.config module.
"""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from quotesync.core.config import (
    LoggingConfig,
    QuoteSyncConfig,
    StorageConfig,
    SyncConfig,
    load_config,
)


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_values(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file_enabled is True
        assert config.console_enabled is True
        assert config.json_format is False

    def test_custom_values(self) -> None:
        config = LoggingConfig(level="DEBUG", json_format=True)
        assert config.level == "DEBUG"
        assert config.json_format is True

    def test_path_expansion(self) -> None:
        config = LoggingConfig(log_directory="~/logs")
        assert "~" not in str(config.log_directory)


class TestStorageConfig:
    """Tests for StorageConfig."""

    def test_default_keys(self) -> None:
        config = StorageConfig()
        assert config.quotes_key == "quotes"
        assert config.filter_key == "lastCategoryFilter"
        assert config.last_quote_key == "lastQuote"

    def test_path_expansion(self) -> None:
        config = StorageConfig(data_directory="~/quotes")
        assert "~" not in str(config.data_directory)


class TestSyncConfig:
    """Tests for SyncConfig."""

    def test_default_values(self) -> None:
        config = SyncConfig()
        assert config.enabled is True
        assert config.interval_seconds == 60
        assert config.max_attempts == 3
        assert config.base_delay_seconds == 1.0
        assert config.category_label == "Server Sync"
        assert config.remote_url.startswith("https://jsonplaceholder.typicode.com/posts")

    def test_max_attempts_bounds(self) -> None:
        assert SyncConfig(max_attempts=1).max_attempts == 1
        assert SyncConfig(max_attempts=10).max_attempts == 10
        with pytest.raises(ValidationError):
            SyncConfig(max_attempts=0)

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SyncConfig(interval_seconds=0)


class TestQuoteSyncConfig:
    """Tests for QuoteSyncConfig."""

    def test_default_config(self) -> None:
        config = QuoteSyncConfig()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.storage, StorageConfig)
        assert isinstance(config.sync, SyncConfig)

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"

            original = QuoteSyncConfig(
                sync=SyncConfig(max_attempts=5, category_label="User {userId}"),
            )
            original.save(config_path)

            loaded = QuoteSyncConfig.load(config_path)

            assert loaded.sync.max_attempts == 5
            assert loaded.sync.category_label == "User {userId}"

    def test_load_nonexistent(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = QuoteSyncConfig.load(Path(tmpdir) / "nonexistent.json")
            assert config.sync.max_attempts == 3

    def test_ensure_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = QuoteSyncConfig(
                logging=LoggingConfig(log_directory=Path(tmpdir) / "logs"),
                storage=StorageConfig(data_directory=Path(tmpdir) / "data"),
            )
            config.ensure_directories()

            assert config.logging.log_directory.exists()
            assert config.storage.data_directory.exists()

    def test_load_config_creates_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            QuoteSyncConfig(
                logging=LoggingConfig(log_directory=Path(tmpdir) / "logs"),
                storage=StorageConfig(data_directory=Path(tmpdir) / "data"),
            ).save(config_path)

            config = load_config(config_path)

            assert config.storage.data_directory.exists()
