"""
Grid state module.

This module provides the grid data model, the A1 reference parser, the
selection state machine, and the undo/redo history.
"""

from cellgrid.spreadsheet.model import (
    Cell,
    CellRef,
    Grid,
    GridSnapshot,
    Range,
    column_index,
    column_letter,
)
from cellgrid.spreadsheet.references import (
    find_range,
    parse_a1_range,
    parse_cell_ref,
    parse_range,
    parse_range_ref,
)
from cellgrid.spreadsheet.selection import DragState, SelectionModel
from cellgrid.spreadsheet.history import HistoryManager

__all__ = [
    "Cell",
    "CellRef",
    "Grid",
    "GridSnapshot",
    "Range",
    "column_index",
    "column_letter",
    "find_range",
    "parse_a1_range",
    "parse_cell_ref",
    "parse_range",
    "parse_range_ref",
    "DragState",
    "SelectionModel",
    "HistoryManager",
]
