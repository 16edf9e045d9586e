"""
Tests for quotesync.core.repository module.
"""

import json

import pytest

from quotesync.core import codec
from quotesync.core.errors import QuoteValidationError, StorageError
from quotesync.core.models import ALL_CATEGORIES, DEFAULT_QUOTES, Quote
from quotesync.core.repository import QuoteRepository
from quotesync.storage.store import MemoryStore


class TestLoad:
    """Tests for hydrating the repository."""

    def test_empty_store_seeds_defaults(self) -> None:
        store = MemoryStore()
        repo = QuoteRepository(store)

        assert repo.load() == list(DEFAULT_QUOTES)
        # Defaults are written back
        assert codec.decode(store.get("quotes")) == list(DEFAULT_QUOTES)

    def test_load_stored_collection(self) -> None:
        stored = [Quote("A", "X"), Quote("B", "Y")]
        store = MemoryStore({"quotes": codec.encode(stored)})
        repo = QuoteRepository(store)

        assert repo.load() == stored
        assert repo.quotes == tuple(stored)

    def test_stored_empty_array_is_kept(self) -> None:
        repo = QuoteRepository(MemoryStore({"quotes": b"[]"}))
        assert repo.load() == []

    @pytest.mark.parametrize(
        "raw",
        [b"{broken", b'{"text": "A"}', b'[{"text": "", "category": "X"}]'],
    )
    def test_corrupt_store_falls_back_to_defaults(self, raw: bytes) -> None:
        store = MemoryStore({"quotes": raw})
        repo = QuoteRepository(store)

        assert repo.load() == list(DEFAULT_QUOTES)
        # Corrupt data is not overwritten on load
        assert store.get("quotes") == raw

    def test_custom_key_and_defaults(self) -> None:
        store = MemoryStore()
        repo = QuoteRepository(store, key="mine", defaults=[Quote("Only", "One")])
        repo.load()
        assert json.loads(store.get("mine")) == [{"text": "Only", "category": "One"}]


class TestSave:
    """Tests for saving."""

    def test_save_overwrites(self, repository: QuoteRepository, memory_store: MemoryStore) -> None:
        repository.add("New", "Fresh")
        repository.save()
        repository.save()

        saved = codec.decode(memory_store.get("quotes"))
        assert saved == list(DEFAULT_QUOTES) + [Quote("New", "Fresh")]


class TestAdd:
    """Tests for add."""

    def test_add_appends_trimmed(self, repository: QuoteRepository) -> None:
        quote = repository.add("  Keep going.  ", " Grit ")
        assert quote == Quote("Keep going.", "Grit")
        assert repository.quotes[-1] == quote
        assert len(repository) == len(DEFAULT_QUOTES) + 1

    @pytest.mark.parametrize("text, category", [("", "X"), ("A", ""), ("  ", "  "), (None, "X")])
    def test_add_invalid_leaves_collection_unchanged(
        self, repository: QuoteRepository, text: str, category: str
    ) -> None:
        before = repository.quotes
        with pytest.raises(QuoteValidationError):
            repository.add(text, category)
        assert repository.quotes == before

    def test_add_allows_duplicates(self, repository: QuoteRepository) -> None:
        repository.add("Same", "X")
        repository.add("Same", "X")
        assert [q.text for q in repository].count("Same") == 2


class TestFiltering:
    """Tests for list_by_category and categories."""

    def test_all_returns_everything_in_order(self, repository: QuoteRepository) -> None:
        assert repository.list_by_category(ALL_CATEGORIES) == list(DEFAULT_QUOTES)

    def test_empty_filter_returns_everything(self, repository: QuoteRepository) -> None:
        assert repository.list_by_category("") == list(DEFAULT_QUOTES)
        assert repository.list_by_category(None) == list(DEFAULT_QUOTES)

    def test_filter_by_category(self, repository: QuoteRepository) -> None:
        repository.add("Second wisdom", "Wisdom")
        result = repository.list_by_category("Wisdom")
        assert [q.text for q in result] == [
            "The mind is everything. What you think you become.",
            "Second wisdom",
        ]

    def test_nonexistent_category_is_empty(self, repository: QuoteRepository) -> None:
        assert repository.list_by_category("Nonexistent") == []

    def test_categories(self, repository: QuoteRepository) -> None:
        repository.add("Another", "Wisdom")
        assert repository.categories() == {"Inspiration", "Motivation", "Wisdom", "Dreams", "Action"}


class TestMerge:
    """Tests for merge."""

    def test_local_wins(self) -> None:
        repo = QuoteRepository(MemoryStore({"quotes": codec.encode([Quote("A", "X")])}))
        repo.load()

        added = repo.merge([Quote("A", "Y"), Quote("B", "Z")])

        assert added == [Quote("B", "Z")]
        assert repo.quotes == (Quote("A", "X"), Quote("B", "Z"))

    def test_intra_batch_duplicates(self) -> None:
        repo = QuoteRepository(MemoryStore({"quotes": b"[]"}))
        repo.load()

        added = repo.merge([Quote("B", "Z"), Quote("B", "W")])

        assert added == [Quote("B", "Z")]
        assert repo.quotes == (Quote("B", "Z"),)

    def test_dedup_uses_trimmed_text(self) -> None:
        repo = QuoteRepository(MemoryStore({"quotes": codec.encode([Quote("A", "X")])}))
        repo.load()
        assert repo.merge([Quote("  A ", "Y")]) == []

    def test_merge_is_idempotent(self, repository: QuoteRepository) -> None:
        incoming = [Quote("New one", "Server Sync"), Quote("New two", "Server Sync")]
        assert len(repository.merge(incoming)) == 2
        assert repository.merge(incoming) == []

    def test_merge_does_not_save(self, memory_store: MemoryStore, repository: QuoteRepository) -> None:
        before = memory_store.get("quotes")
        repository.merge([Quote("Unsaved", "X")])
        assert memory_store.get("quotes") == before


class ReadOnlyStore(MemoryStore):
    def set(self, key: str, value: bytes) -> None:
        raise StorageError("read-only")


class UnreadableStore(MemoryStore):
    def get(self, key: str) -> bytes | None:
        raise StorageError("permission denied")


class TestLoadStorageFailures:
    """load() falls back to the defaults whatever the store does."""

    def test_seeding_write_failure_still_returns_defaults(self) -> None:
        repo = QuoteRepository(ReadOnlyStore())
        assert repo.load() == list(DEFAULT_QUOTES)
        assert repo.quotes == DEFAULT_QUOTES

    def test_read_failure_returns_defaults(self) -> None:
        repo = QuoteRepository(UnreadableStore())
        assert repo.load() == list(DEFAULT_QUOTES)
