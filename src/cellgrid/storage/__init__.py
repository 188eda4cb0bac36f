"""
Storage module for cellgrid.

This module provides persistence backends for grid snapshots. ``MemoryStore``
keeps snapshots in-process, ``JsonFileStore`` writes local JSON files, and
``SheetsStore`` keeps them in a Google Sheets spreadsheet via gspread.
"""

from cellgrid.storage.base import SnapshotStore
from cellgrid.storage.file_store import JsonFileStore
from cellgrid.storage.memory import MemoryStore
from cellgrid.storage.sheets_store import SheetsStore

__all__ = [
    "SnapshotStore",
    "JsonFileStore",
    "MemoryStore",
    "SheetsStore",
]
