"""
Abstract storage interface for grid snapshots.

The SnapshotStore protocol defines the contract every persistence backend must
satisfy: a blocking key/value store holding serialized grids as text.
Concrete implementations include MemoryStore (in-process), JsonFileStore
(local files) and SheetsStore (Google Sheets via gspread).
"""

from typing import Optional, Protocol


class SnapshotStore(Protocol):
    """Protocol for snapshot persistence backends.

    Backends store opaque JSON payloads under string keys. Transport failures
    are raised as PersistenceError.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the payload stored under key, or None if there is none."""
        ...

    def set(self, key: str, payload: str) -> None:
        """Store payload under key, replacing any previous value."""
        ...
