"""
quotesync quote repository.

Owns the in-memory quote collection and its persistence in a key-value store.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from quotesync.core import codec
from quotesync.core.errors import DecodeError, QuoteValidationError, StorageError
from quotesync.core.logging import get_logger
from quotesync.core.models import ALL_CATEGORIES, DEFAULT_QUOTES, Quote
from quotesync.storage.store import KeyValueStore

logger = get_logger(__name__)


class QuoteRepository:
    """
    Ordered collection of quotes backed by a key-value store.

    The collection is hydrated once with ``load()`` and mutated only
    through ``add()`` and ``merge()``; callers decide when to ``save()``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = "quotes",
        defaults: Sequence[Quote] = DEFAULT_QUOTES,
    ) -> None:
        self.store = store
        self.key = key
        self.defaults = tuple(defaults)
        self._quotes: list[Quote] = []

    @property
    def quotes(self) -> tuple[Quote, ...]:
        return tuple(self._quotes)

    def __len__(self) -> int:
        return len(self._quotes)

    def __iter__(self) -> Iterator[Quote]:
        return iter(tuple(self._quotes))

    def load(self) -> list[Quote]:
        """Hydrate from the store, falling back to the default collection."""
        try:
            raw = self.store.get(self.key)
        except StorageError as exc:
            logger.warning("Stored quotes unreadable, using defaults", error=str(exc))
            self._quotes = list(self.defaults)
            return list(self._quotes)

        if raw is None:
            self._quotes = list(self.defaults)
            logger.info("No stored quotes, seeding defaults", count=len(self._quotes))
            try:
                self.save()
            except StorageError as exc:
                logger.warning("Could not write default quotes", error=str(exc))
            return list(self._quotes)

        try:
            self._quotes = codec.decode(raw)
        except DecodeError as exc:
            logger.warning("Stored quotes unreadable, using defaults", error=str(exc))
            self._quotes = list(self.defaults)
        else:
            logger.info("Quotes loaded", count=len(self._quotes))
        return list(self._quotes)

    def save(self) -> None:
        """Overwrite the stored collection with the in-memory one."""
        self.store.set(self.key, codec.encode(self._quotes))
        logger.debug("Quotes saved", count=len(self._quotes))

    def add(self, text: str, category: str) -> Quote:
        """
        Append a new quote.

        Raises:
            QuoteValidationError: If text or category is empty after trimming.
                The collection is left unchanged.
        """
        text = (text or "").strip()
        category = (category or "").strip()
        if not text or not category:
            raise QuoteValidationError("Please fill both quote text and category.")

        quote = Quote(text=text, category=category)
        self._quotes.append(quote)
        return quote

    def list_by_category(self, category: str | None) -> list[Quote]:
        """Get quotes in a category, or every quote for ``"All"``."""
        if not category or category == ALL_CATEGORIES:
            return list(self._quotes)
        return [quote for quote in self._quotes if quote.category == category]

    def categories(self) -> set[str]:
        return {quote.category for quote in self._quotes}

    def merge(self, incoming: Iterable[Quote]) -> list[Quote]:
        """
        Append incoming quotes whose trimmed text is not already present.

        Existing quotes are never replaced. Duplicates inside ``incoming``
        are dropped too; the first occurrence wins.

        Returns:
            The quotes that were appended, in order
        """
        seen = {quote.key for quote in self._quotes}
        added: list[Quote] = []
        for quote in incoming:
            if quote.key in seen:
                continue
            self._quotes.append(quote)
            seen.add(quote.key)
            added.append(quote)
        return added
