"""
Pytest configuration and fixtures for quotesync tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class ScriptedSource:
    """Quote source replaying a script of results; exceptions are raised."""

    def __init__(self, *steps: object) -> None:
        self.steps = list(steps)
        self.calls = 0

    async def fetch(self) -> list:
        self.calls += 1
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]
        if isinstance(step, BaseException):
            raise step
        return list(step)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config(temp_dir: Path) -> "QuoteSyncConfig":
    """Create a sample configuration for testing."""
    from quotesync.core.config import QuoteSyncConfig

    config = QuoteSyncConfig()
    config.logging.log_directory = temp_dir / "logs"
    config.logging.console_enabled = False
    config.storage.data_directory = temp_dir / "data"
    config.ensure_directories()
    return config


@pytest.fixture
def memory_store() -> "MemoryStore":
    from quotesync.storage.store import MemoryStore

    return MemoryStore()


@pytest.fixture
def repository(memory_store: "MemoryStore") -> "QuoteRepository":
    """Repository hydrated with the default collection."""
    from quotesync.core.repository import QuoteRepository

    repo = QuoteRepository(memory_store)
    repo.load()
    return repo


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
