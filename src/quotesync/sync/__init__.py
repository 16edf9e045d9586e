"""
quotesync sync module.

Provides remote fetching, additive dedup-by-text merging and the periodic
sync trigger.
"""

from quotesync.sync.engine import (
    SyncEngine,
    SyncOutcome,
    SyncState,
    SyncSummary,
)
from quotesync.sync.scheduler import PeriodicSync
from quotesync.sync.source import HttpTransport, RemoteQuoteSource, RemoteResponse

__all__ = [
    "HttpTransport",
    "PeriodicSync",
    "RemoteQuoteSource",
    "RemoteResponse",
    "SyncEngine",
    "SyncOutcome",
    "SyncState",
    "SyncSummary",
]
