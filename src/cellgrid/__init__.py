"""
cellgrid - Grid state and formula evaluation core for a small spreadsheet editor.

This package provides the model behind an interactive grid editor: a fixed-size
grid of cells holding literals or range formulas, a drag/multi-select model,
linear undo/redo over grid snapshots, and save/load through pluggable stores.

Usage:
    >>> from cellgrid import SpreadsheetEditor
    >>> editor = SpreadsheetEditor()
    >>> editor.set_cell_literal(0, 0, "1")
    >>> editor.set_cell_literal(1, 0, "2")
    >>> editor.select_cell(2, 0)
    >>> editor.set_formula_bar_text("=SUM(A1:A2)")
    >>> editor.apply_formula_bar().value
    '3'

Key components:
- Grid / Cell: the rectangular cell store
- parse_cell_ref / parse_range: A1 reference parsing
- FormulaEvaluator / FunctionRegistry: range aggregate formulas (SUM, AVERAGE, ...)
- SelectionModel: active cell and drag selection
- HistoryManager: undo/redo stacks
- SnapshotStore backends: MemoryStore, JsonFileStore, SheetsStore
"""

from .editor import SpreadsheetEditor
from .formula import (
    ERROR,
    INVALID,
    EvaluationResult,
    FormulaEvaluator,
    FunctionRegistry,
    evaluate,
)
from .spreadsheet import (
    Cell,
    CellRef,
    DragState,
    Grid,
    HistoryManager,
    Range,
    SelectionModel,
    parse_cell_ref,
    parse_range,
)
from .storage import JsonFileStore, MemoryStore, SheetsStore, SnapshotStore
from .exceptions import *

# Version
__version__ = "0.1.0"

__all__ = [
    'SpreadsheetEditor',
    'Cell',
    'CellRef',
    'DragState',
    'Grid',
    'HistoryManager',
    'Range',
    'SelectionModel',
    'parse_cell_ref',
    'parse_range',
    'ERROR',
    'INVALID',
    'EvaluationResult',
    'FormulaEvaluator',
    'FunctionRegistry',
    'evaluate',
    'JsonFileStore',
    'MemoryStore',
    'SheetsStore',
    'SnapshotStore',
    'EvaluationError',
    'ParseError',
    'UnsupportedFormulaError',
    'HistoryEmptyError',
    'PersistenceError',
]
