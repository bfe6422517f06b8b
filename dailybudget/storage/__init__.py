"""Mini README: Persistence and sync collaborators for period ledgers.

``local_store`` defines the ``LedgerStore`` contract with in-memory and JSON
file implementations. ``remote_sync`` pushes and pulls the same serialised
shape to a remote key-value endpoint on a best-effort basis.
"""

from .local_store import InMemoryLedgerStore, JsonFileLedgerStore, LedgerStore
from .remote_sync import MIN_SYNC_KEY_LENGTH, RemoteSyncClient

__all__ = [
    "InMemoryLedgerStore",
    "JsonFileLedgerStore",
    "LedgerStore",
    "MIN_SYNC_KEY_LENGTH",
    "RemoteSyncClient",
]
