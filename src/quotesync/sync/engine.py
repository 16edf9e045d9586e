"""
quotesync sync engine.

Fetches the remote collection with retry and exponential backoff, merges it
additively into the repository and reports the outcome of each cycle.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Protocol

from quotesync.core.errors import FetchError, StorageError
from quotesync.core.logging import OperationLogger, get_logger
from quotesync.core.models import Quote
from quotesync.core.repository import QuoteRepository

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class QuoteSource(Protocol):
    async def fetch(self) -> list[Quote]: ...


class SyncState(Enum):
    """Engine state; every cycle ends back in IDLE."""

    IDLE = auto()
    SYNCING = auto()


class SyncOutcome(Enum):
    """Result of a sync call."""

    SUCCESS = auto()
    NO_NEW_DATA = auto()
    FAILURE = auto()
    SKIPPED = auto()


@dataclass
class SyncSummary:
    outcome: SyncOutcome
    added_count: int = 0
    reason: str | None = None
    attempts: int = 0
    started_at: datetime = field(default_factory=datetime.now)
    ended_at: datetime | None = None

    @property
    def message(self) -> str:
        if self.outcome is SyncOutcome.SUCCESS:
            return f"Sync complete! Merged {self.added_count} new quotes from server."
        if self.outcome is SyncOutcome.NO_NEW_DATA:
            return "Sync complete! No new quotes found on server."
        if self.outcome is SyncOutcome.SKIPPED:
            return "Sync already in progress."
        return f"Sync failed: {self.reason}"

    def to_dict(self) -> dict[str, object]:
        return {
            "outcome": self.outcome.name,
            "added_count": self.added_count,
            "reason": self.reason,
            "attempts": self.attempts,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "message": self.message,
        }


class SyncEngine:
    """
    Single-flight reconciliation of a remote quote source into a repository.

    At most one sync runs at a time; a call made while another is in flight
    returns a SKIPPED summary without fetching. Local quotes always win:
    remote quotes are only appended when their trimmed text is new.
    """

    def __init__(
        self,
        repository: QuoteRepository,
        source: QuoteSource,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Sleep = asyncio.sleep,
        on_complete: Callable[[SyncSummary], None] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.repository = repository
        self.source = source
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.sleep = sleep
        self.on_complete = on_complete
        self.state = SyncState.IDLE
        self.last_summary: SyncSummary | None = None

    @property
    def is_syncing(self) -> bool:
        return self.state is SyncState.SYNCING

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the given failed attempt (1-based)."""
        return self.base_delay * (2 ** (attempt - 1))

    async def sync(self) -> SyncSummary:
        """Run one sync cycle."""
        if self.is_syncing:
            logger.info("Sync already in progress, ignoring trigger")
            return SyncSummary(outcome=SyncOutcome.SKIPPED, ended_at=datetime.now())

        self.state = SyncState.SYNCING
        summary = SyncSummary(outcome=SyncOutcome.FAILURE)
        try:
            with OperationLogger("sync", logger) as op:
                await self._run(summary)
                op.update(outcome=summary.outcome.name, added=summary.added_count)
        finally:
            summary.ended_at = datetime.now()
            self.state = SyncState.IDLE
            self.last_summary = summary

        if self.on_complete is not None:
            try:
                self.on_complete(summary)
            except Exception:
                logger.exception("Sync completion callback failed", outcome=summary.outcome.name)
        return summary

    async def _run(self, summary: SyncSummary) -> None:
        try:
            remote = await self._fetch_with_retry(summary)
        except FetchError as exc:
            summary.outcome = SyncOutcome.FAILURE
            summary.reason = exc.message
            logger.warning(
                "Failed to fetch server quotes",
                error=exc.message,
                status_code=exc.status_code,
                attempts=summary.attempts,
            )
            return

        added = self.repository.merge(remote)
        summary.added_count = len(added)
        if not added:
            summary.outcome = SyncOutcome.NO_NEW_DATA
            return

        try:
            self.repository.save()
        except StorageError as exc:
            summary.outcome = SyncOutcome.FAILURE
            summary.reason = f"Could not save merged quotes: {exc}"
            logger.error("Failed to persist merged quotes", error=str(exc))
            return
        summary.outcome = SyncOutcome.SUCCESS

    async def _fetch_with_retry(self, summary: SyncSummary) -> list[Quote]:
        attempt = 1
        while True:
            summary.attempts = attempt
            try:
                return await self.source.fetch()
            except FetchError as exc:
                if not exc.transient or attempt >= self.max_attempts:
                    raise
                delay = self.backoff_delay(attempt)
                logger.info(
                    "Transient fetch failure, retrying",
                    attempt=attempt,
                    delay_seconds=delay,
                    error=exc.message,
                )
                await self.sleep(delay)
            attempt += 1
