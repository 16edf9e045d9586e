"""
quotesync import/export codec.

Serializes a quote collection to a pretty-printed JSON array and parses it
back, rejecting the whole document on any invalid element.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date

from quotesync.core.errors import (
    InvalidShapeError,
    MalformedDocumentError,
    QuoteValidationError,
)
from quotesync.core.models import Quote


def encode(collection: Iterable[Quote]) -> bytes:
    """Encode quotes as a UTF-8 JSON array of ``{text, category}`` objects."""
    payload = [quote.to_dict() for quote in collection]
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def decode(data: bytes | str) -> list[Quote]:
    """
    Decode a JSON array of quote objects.

    Args:
        data: Raw document bytes or text

    Returns:
        The decoded quotes in document order

    Raises:
        MalformedDocumentError: If the data is not valid UTF-8 JSON
        InvalidShapeError: If the top-level value is not an array, or any
            element lacks a non-empty ``text`` or ``category``
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(f"Document is not valid UTF-8: {exc}") from exc

    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(f"Document is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise InvalidShapeError(
            f"Expected a JSON array of quotes, got {type(payload).__name__}"
        )

    quotes: list[Quote] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise InvalidShapeError(f"Element {index} is not an object")
        try:
            quotes.append(Quote.from_dict(item))
        except QuoteValidationError as exc:
            raise InvalidShapeError(f"Element {index}: {exc}") from exc
    return quotes


def export_filename(today: date | None = None) -> str:
    """Get the download name for an export made on ``today``."""
    today = today or date.today()
    return f"quotes_export_{today.isoformat()}.json"
