"""
quotesync Core - quote collection, codec and session.

Contains the quote model, the repository, the import/export codec,
configuration, logging and the session facade.
"""

from quotesync.core.config import QuoteSyncConfig
from quotesync.core.errors import (
    DecodeError,
    FetchError,
    InvalidShapeError,
    MalformedDocumentError,
    PermanentFetchError,
    QuoteSyncError,
    QuoteValidationError,
    StorageError,
    TransientFetchError,
)
from quotesync.core.logging import get_logger, setup_logging
from quotesync.core.models import ALL_CATEGORIES, DEFAULT_QUOTES, Quote
from quotesync.core.repository import QuoteRepository
from quotesync.core.session import ActionResult, Session

__all__ = [
    "ALL_CATEGORIES",
    "ActionResult",
    "DEFAULT_QUOTES",
    "DecodeError",
    "FetchError",
    "InvalidShapeError",
    "MalformedDocumentError",
    "PermanentFetchError",
    "Quote",
    "QuoteRepository",
    "QuoteSyncConfig",
    "QuoteSyncError",
    "QuoteValidationError",
    "Session",
    "StorageError",
    "TransientFetchError",
    "get_logger",
    "setup_logging",
]
