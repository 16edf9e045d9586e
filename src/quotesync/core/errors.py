"""
quotesync error taxonomy.

Every failure in quotesync degrades to a reported status; these exceptions
are raised at the seams and converted to results by the session and the
sync engine.
"""

from __future__ import annotations


class QuoteSyncError(Exception):
    """Base class for all quotesync errors."""


class QuoteValidationError(QuoteSyncError):
    """A quote is missing its text or category."""


class DecodeError(QuoteSyncError):
    """An imported document could not be turned into a quote collection."""


class MalformedDocumentError(DecodeError):
    """The document is not valid UTF-8 JSON."""


class InvalidShapeError(DecodeError):
    """The document is JSON but not an array of valid quote objects."""


class FetchError(QuoteSyncError):
    """
    Fetching the remote collection failed.

    Attributes:
        message: Error message
        status_code: HTTP status code if the server answered
    """

    transient = False

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TransientFetchError(FetchError):
    """Retriable failure: transport error, throttling or server error."""

    transient = True


class PermanentFetchError(FetchError):
    """Non-retriable failure: client error status or malformed response."""


class StorageError(QuoteSyncError):
    """The key-value store could not complete an operation."""
