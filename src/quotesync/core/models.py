"""
quotesync data models.

Defines the quote record and the built-in default collection.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from quotesync.core.errors import QuoteValidationError

ALL_CATEGORIES = "All"


@dataclass(frozen=True)
class Quote:
    """A single quote. Values are kept as given; the dedup key is the trimmed text."""

    text: str
    category: str

    def __post_init__(self) -> None:
        for name in ("text", "category"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise QuoteValidationError(f"Quote {name} must be a non-empty string")

    @property
    def key(self) -> str:
        return self.text.strip()

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "category": self.category}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Quote:
        """Create a Quote from a mapping with ``text`` and ``category`` keys."""
        missing = [name for name in ("text", "category") if name not in data]
        if missing:
            raise QuoteValidationError(f"Quote is missing field(s): {', '.join(missing)}")
        return cls(text=data["text"], category=data["category"])


DEFAULT_QUOTES: tuple[Quote, ...] = (
    Quote("The only way to do great work is to love what you do.", "Inspiration"),
    Quote("Strive not to be a success, but rather to be of value.", "Motivation"),
    Quote("The mind is everything. What you think you become.", "Wisdom"),
    Quote(
        "The future belongs to those who believe in the beauty of their dreams.",
        "Dreams",
    ),
    Quote("The best way to predict the future is to create it.", "Action"),
)
