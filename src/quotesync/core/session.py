"""
quotesync Session Management.

Wires the repository, codec, stores and sync engine together and exposes
one method per user action: show another quote, add a quote, pick a
category, import, export and sync.
"""

from __future__ import annotations

import json
import random
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any

from quotesync.core import codec
from quotesync.core.config import QuoteSyncConfig, load_config
from quotesync.core.errors import (
    DecodeError,
    QuoteValidationError,
    StorageError,
)
from quotesync.core.logging import get_logger, setup_logging
from quotesync.core.models import ALL_CATEGORIES, Quote
from quotesync.core.repository import QuoteRepository
from quotesync.storage.store import FileStore, KeyValueStore, MemoryStore
from quotesync.sync.engine import QuoteSource, SyncEngine, SyncSummary
from quotesync.sync.scheduler import PeriodicSync
from quotesync.sync.source import HttpTransport, RemoteQuoteSource

logger = get_logger(__name__)


@dataclass
class ActionResult:
    """Outcome of a user action, ready to show as feedback."""

    success: bool
    message: str
    count: int = 0


class Session:
    """
    A quotesync session.

    The durable store outlives the session; the session store holds the last
    viewed quote and is cleared on ``close()``.
    """

    def __init__(
        self,
        config: QuoteSyncConfig | None = None,
        durable_store: KeyValueStore | None = None,
        session_store: KeyValueStore | None = None,
        source: QuoteSource | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.id = str(uuid.uuid4())
        self.config = config or load_config()
        self.rng = rng or random.Random()

        setup_logging(self.config.logging)

        storage = self.config.storage
        if durable_store is None:
            durable_store = FileStore(storage.data_directory)
        if session_store is None:
            session_store = MemoryStore()
        self.durable_store = durable_store
        self.session_store = session_store

        self.repository = QuoteRepository(self.durable_store, key=storage.quotes_key)
        self.repository.load()

        self._transport: HttpTransport | None = None
        if source is None:
            self._transport = HttpTransport(timeout=self.config.sync.request_timeout_seconds)
            source = RemoteQuoteSource(
                self._transport,
                self.config.sync.remote_url,
                category_label=self.config.sync.category_label,
            )
        self.engine = SyncEngine(
            self.repository,
            source,
            max_attempts=self.config.sync.max_attempts,
            base_delay=self.config.sync.base_delay_seconds,
        )
        self.scheduler = PeriodicSync(self.engine, self.config.sync.interval_seconds)

        self._filter = self._restore_filter()

        logger.info(
            "Session started",
            session_id=self.id,
            quotes=len(self.repository),
            category_filter=self._filter,
        )

    def _restore_filter(self) -> str:
        raw = self.durable_store.get(self.config.storage.filter_key)
        if not raw:
            return ALL_CATEGORIES
        try:
            value = raw.decode("utf-8").strip()
        except UnicodeDecodeError:
            return ALL_CATEGORIES
        return value or ALL_CATEGORIES

    # Filtering

    @property
    def current_filter(self) -> str:
        return self._filter

    def categories(self) -> list[str]:
        """Get the distinct categories, sorted for display."""
        return sorted(self.repository.categories())

    def filtered_quotes(self) -> list[Quote]:
        return self.repository.list_by_category(self._filter)

    def select_category(self, category: str) -> ActionResult:
        """Set and persist the category filter."""
        category = (category or "").strip() or ALL_CATEGORIES
        if category != ALL_CATEGORIES and category not in self.repository.categories():
            return ActionResult(False, f"Unknown category: {category}")

        self._filter = category
        try:
            self.durable_store.set(self.config.storage.filter_key, category.encode("utf-8"))
        except StorageError as exc:
            logger.error("Failed to persist category filter", error=str(exc))
        count = len(self.filtered_quotes())
        return ActionResult(True, f"Showing {count} quotes for: {category}", count=count)

    # Display

    def show_random_quote(self) -> Quote | None:
        """Pick a random quote from the current filter and remember it for this session."""
        candidates = self.filtered_quotes()
        key = self.config.storage.last_quote_key
        if not candidates:
            self.session_store.delete(key)
            return None

        quote = self.rng.choice(candidates)
        self.session_store.set(key, json.dumps(quote.to_dict()).encode("utf-8"))
        return quote

    def last_viewed_quote(self) -> Quote | None:
        key = self.config.storage.last_quote_key
        raw = self.session_store.get(key)
        if raw is None:
            return None
        try:
            data: Any = json.loads(raw)
            return Quote.from_dict(data)
        except (ValueError, TypeError, QuoteValidationError) as exc:
            logger.warning("Discarding unreadable last viewed quote", error=str(exc))
            self.session_store.delete(key)
            return None

    # Editing

    def add_quote(self, text: str, category: str) -> ActionResult:
        try:
            quote = self.repository.add(text, category)
        except QuoteValidationError as exc:
            return ActionResult(False, str(exc))

        try:
            self.repository.save()
        except StorageError as exc:
            logger.error("Failed to save quotes", error=str(exc))
            return ActionResult(False, "Quote added but could not be saved.", count=1)

        logger.info("Quote added", category=quote.category)
        return ActionResult(True, "Quote added successfully and saved!", count=1)

    # Import / export

    def import_quotes(self, data: bytes | str) -> ActionResult:
        """Import a JSON document; the whole import is rejected on any invalid element."""
        try:
            incoming = codec.decode(data)
        except DecodeError as exc:
            logger.warning("Import rejected", error=str(exc))
            return ActionResult(False, f"Could not import quotes: {exc}")

        added = self.repository.merge(incoming)
        if added:
            try:
                self.repository.save()
            except StorageError as exc:
                logger.error("Failed to save imported quotes", error=str(exc))
                return ActionResult(False, "Quotes imported but could not be saved.", count=len(added))

        skipped = len(incoming) - len(added)
        logger.info("Quotes imported", added=len(added), skipped=skipped)
        return ActionResult(
            True,
            f"Successfully imported {len(added)} quotes ({skipped} duplicates skipped).",
            count=len(added),
        )

    def export_quotes(self) -> bytes:
        return codec.encode(self.repository.quotes)

    def export_filename(self, today: date | None = None) -> str:
        return codec.export_filename(today)

    # Sync

    async def sync(self) -> SyncSummary:
        """Manual sync; ignored while another sync is in flight."""
        return await self.scheduler.trigger()

    async def start(self) -> None:
        """Start periodic syncing; the first sync runs immediately."""
        if self.config.sync.enabled:
            self.scheduler.start()

    async def close(self) -> None:
        """Stop syncing, release the HTTP client and end the session scope."""
        await self.scheduler.stop()
        if self._transport is not None:
            await self._transport.close()
        self.session_store.delete(self.config.storage.last_quote_key)
        logger.info("Session closed", session_id=self.id, quotes=len(self.repository))

    async def __aenter__(self) -> Session:
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
