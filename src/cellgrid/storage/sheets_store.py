"""
Google Sheets snapshot store.

Stores each snapshot payload in cell A1 of a worksheet titled by the key,
inside one backing spreadsheet. All gspread API failures are wrapped in
PersistenceError.
"""

from __future__ import annotations

import logging

import gspread
from gspread.exceptions import APIError, SpreadsheetNotFound, WorksheetNotFound

from cellgrid.exceptions import PersistenceError

logger = logging.getLogger(__name__)

# Google Sheets per-cell character limit
MAX_CELL_CHARS = 50_000


class SheetsStore:
    """SnapshotStore backed by a Google Sheets spreadsheet.

    Attributes:
        spreadsheet: The gspread spreadsheet holding one worksheet per key
    """

    def __init__(self, spreadsheet: gspread.Spreadsheet) -> None:
        """
        Initialize the store with an open spreadsheet.

        Args:
            spreadsheet: A spreadsheet opened through an authenticated gspread
                client, e.g. ``gspread.service_account().open("cellgrid")``
        """
        self.spreadsheet = spreadsheet

    @classmethod
    def open(cls, gc: gspread.Client, title: str) -> "SheetsStore":
        """
        Open the spreadsheet called title, creating it if it does not exist.

        Args:
            gc: An authenticated gspread client
            title: Title of the backing spreadsheet

        Raises:
            PersistenceError: If the API call fails
        """
        try:
            try:
                spreadsheet = gc.open(title)
            except SpreadsheetNotFound:
                logger.info("Creating backing spreadsheet '%s'", title)
                spreadsheet = gc.create(title)
        except APIError as e:
            raise PersistenceError(f"Failed to open spreadsheet '{title}': {e}") from e
        return cls(spreadsheet)

    def get(self, key: str) -> str | None:
        """
        Read the payload stored under key.

        Returns:
            The payload, or None when no worksheet or value exists for key

        Raises:
            PersistenceError: If the API call fails
        """
        try:
            worksheet = self.spreadsheet.worksheet(key)
            value = worksheet.acell("A1").value
        except WorksheetNotFound:
            return None
        except APIError as e:
            raise PersistenceError(f"Failed to read snapshot '{key}': {e}") from e
        return value or None

    def set(self, key: str, payload: str) -> None:
        """
        Store payload under key, creating the worksheet on first use.

        Raises:
            PersistenceError: If the payload is too large or the API call fails
        """
        if len(payload) > MAX_CELL_CHARS:
            raise PersistenceError(
                f"Snapshot '{key}' is {len(payload)} characters; "
                f"Google Sheets cells hold at most {MAX_CELL_CHARS}"
            )
        try:
            try:
                worksheet = self.spreadsheet.worksheet(key)
            except WorksheetNotFound:
                worksheet = self.spreadsheet.add_worksheet(title=key, rows=1, cols=1)
            worksheet.update([[payload]], range_name="A1", raw=True)
        except APIError as e:
            raise PersistenceError(f"Failed to write snapshot '{key}': {e}") from e

    def __repr__(self) -> str:
        return f"SheetsStore(spreadsheet={getattr(self.spreadsheet, 'title', None)!r})"
