"""
quotesync - Quote store with remote reconciliation.

Keeps a categorized quote collection in a key-value store, imports and
exports it as JSON, and periodically merges quotes from a remote endpoint.
"""

__version__ = "1.0.0"
__author__ = "quotesync Team"

from quotesync.core.config import QuoteSyncConfig
from quotesync.core.models import Quote
from quotesync.core.session import Session

__all__ = ["Quote", "QuoteSyncConfig", "Session", "__version__"]
