"""Shared pytest configuration and fixtures for cellgrid tests."""

import pytest

from cellgrid.config import reset_config
from cellgrid.editor import SpreadsheetEditor
from cellgrid.spreadsheet.model import Grid
from cellgrid.storage.memory import MemoryStore


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Drop the cached config and any CELLGRID_* overrides around each test."""
    for var in ("ROWS", "COLS", "STORAGE_KEY", "STORAGE_DIR", "HISTORY_LIMIT", "LOG_LEVEL"):
        monkeypatch.delenv(f"CELLGRID_{var}", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def grid() -> Grid:
    return Grid(rows=20, cols=10)


@pytest.fixture
def column_grid(grid) -> Grid:
    """Grid with A1=1, A2=2, A3=3."""
    grid.set_cell_literal(0, 0, "1")
    grid.set_cell_literal(1, 0, "2")
    grid.set_cell_literal(2, 0, "3")
    return grid


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def editor(store) -> SpreadsheetEditor:
    return SpreadsheetEditor(store=store)
