"""
Spreadsheet editor: the user-facing operations surface.

The editor owns the grid, the selection, the formula bar text, the undo/redo
history, and a snapshot store. Each operation runs to completion before the
next one starts; grid mutations record the pre-mutation snapshot synchronously,
so history and grid can never disagree.

Formulas are evaluated once, when applied. Changing a cell that a formula
reads does not update the formula's value; call recalculate() to refresh every
formula cell explicitly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from cellgrid.config import get_config
from cellgrid.exceptions import HistoryEmptyError, PersistenceError
from cellgrid.formula.evaluator import FormulaEvaluator
from cellgrid.formula.functions import FunctionRegistry
from cellgrid.spreadsheet.history import HistoryManager
from cellgrid.spreadsheet.model import Cell, CellRef, Grid
from cellgrid.spreadsheet.selection import SelectionModel
from cellgrid.storage.memory import MemoryStore
from cellgrid.utils.frames import to_frame
from cellgrid.utils.serialization import from_json, to_json

if TYPE_CHECKING:
    import pandas as pd

    from cellgrid.storage.base import SnapshotStore

logger = logging.getLogger(__name__)


class SpreadsheetEditor:
    """Grid, selection, formula bar, and history behind one set of operations.

    Usage::

        editor = SpreadsheetEditor()
        editor.set_cell_literal(0, 0, "1")
        editor.set_cell_literal(1, 0, "2")
        editor.select_cell(2, 0)
        editor.set_formula_bar_text("=SUM(A1:A2)")
        editor.apply_formula_bar()
        editor.grid.get_cell(2, 0).value  # "3"
        editor.undo()

    Attributes:
        grid: The live grid (restored in place by undo/redo/load)
        selection: Active cell and drag selection
        history: Undo/redo stacks
        store: Snapshot store used by save() and load()
        storage_key: Key the grid is saved under
        formula_bar: Current formula bar text
    """

    def __init__(
        self,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        store: Optional[SnapshotStore] = None,
        registry: Optional[FunctionRegistry] = None,
        history_limit: Optional[int] = None,
        storage_key: Optional[str] = None,
    ) -> None:
        """Initialize an editor with an empty grid.

        Args:
            rows: Grid rows (default: GridConfig.rows)
            cols: Grid columns (default: GridConfig.cols)
            store: Snapshot store (default: a fresh MemoryStore)
            registry: Function registry (default: SUM and AVERAGE)
            history_limit: Maximum undo depth (default: GridConfig.history_limit)
            storage_key: Key used by save/load (default: GridConfig.storage_key)
        """
        config = get_config()
        self.grid = Grid(
            rows=rows if rows is not None else config.rows,
            cols=cols if cols is not None else config.cols,
        )
        self.selection = SelectionModel()
        self.history = HistoryManager(
            limit=history_limit if history_limit is not None else config.history_limit
        )
        self.store = store if store is not None else MemoryStore()
        self.storage_key = storage_key or config.storage_key
        self.evaluator = FormulaEvaluator(self.grid, registry)
        self.formula_bar = ""

    @property
    def registry(self) -> FunctionRegistry:
        return self.evaluator.registry

    # Selection

    def select_cell(self, row: int, col: int) -> None:
        """Click a cell: make it active, show its formula (or value), drop the drag selection."""
        cell = self.grid.get_cell(row, col)
        self.selection.click(CellRef(row, col))
        self.formula_bar = cell.display_source

    def start_drag(self, row: int, col: int) -> None:
        self.grid.get_cell(row, col)
        self.selection.mouse_down(CellRef(row, col))

    def extend_drag(self, row: int, col: int) -> bool:
        self.grid.get_cell(row, col)
        return self.selection.mouse_over(CellRef(row, col))

    def end_drag(self) -> None:
        self.selection.mouse_up()

    def resume_drag(self) -> bool:
        return self.selection.resume_drag()

    # Grid mutation

    def set_cell_literal(self, row: int, col: int, text: str) -> Cell:
        """Type literal text into a cell.

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        self.grid.get_cell(row, col)
        before = self.grid.snapshot()
        cell = self.grid.set_cell_literal(row, col, text)
        self.history.record_mutation(before)
        return cell

    def set_formula_bar_text(self, text: str) -> None:
        self.formula_bar = text

    def apply_formula_bar(self) -> Optional[Cell]:
        """Write the formula bar text into the active cell.

        Text starting with '=' is evaluated and stored with its formula; any
        other text is stored as a literal.

        Returns:
            The written cell, or None when no cell is selected
        """
        target = self.selection.selected_cell
        if target is None:
            return None

        text = self.formula_bar
        if text.startswith("="):
            result = self.evaluator.evaluate(text)
            cell = Cell(value=result.display, formula=text)
        else:
            cell = Cell(value=text, formula="")

        before = self.grid.snapshot()
        self.grid.set_cell(target.row, target.col, cell)
        self.history.record_mutation(before)
        return cell

    def recalculate(self) -> List[CellRef]:
        """Re-evaluate every formula cell in row-major order.

        Later formulas see the refreshed values of earlier ones. Records a
        single history entry when anything changed.

        Returns:
            The cells whose value changed
        """
        before = self.grid.snapshot()
        changed: List[CellRef] = []
        for ref, cell in self.grid.formula_cells():
            display = self.evaluator.evaluate(cell.formula).display
            if display != cell.value:
                self.grid.set_cell(ref.row, ref.col, Cell(value=display, formula=cell.formula))
                changed.append(ref)

        if changed:
            self.history.record_mutation(before)
            logger.debug("Recalculated %d formula cell(s)", len(changed))
        return changed

    # History

    def undo(self) -> bool:
        """Restore the grid as it was before the last mutation.

        Returns:
            False when there was nothing to undo
        """
        try:
            previous = self.history.undo(self.grid.snapshot())
        except HistoryEmptyError:
            logger.debug("undo ignored: history is empty")
            return False
        self.grid.restore(previous)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone mutation.

        Returns:
            False when there was nothing to redo
        """
        try:
            following = self.history.redo(self.grid.snapshot())
        except HistoryEmptyError:
            logger.debug("redo ignored: history is empty")
            return False
        self.grid.restore(following)
        return True

    # Persistence

    def save(self) -> None:
        """Persist the grid under storage_key.

        Raises:
            PersistenceError: If the store fails
        """
        self.store.set(self.storage_key, to_json(self.grid))
        logger.info("Saved grid under key '%s'", self.storage_key)

    def load(self) -> bool:
        """Replace the grid with the snapshot stored under storage_key.

        History is left untouched.

        Returns:
            False when nothing (or an empty string) is stored under the key;
            the grid is unchanged

        Raises:
            PersistenceError: If the store fails, the payload is malformed, or
                the stored grid has different dimensions; the grid is unchanged
        """
        payload = self.store.get(self.storage_key)
        if not payload:
            logger.info("Nothing stored under key '%s'", self.storage_key)
            return False

        try:
            loaded = from_json(payload)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Stored snapshot '{self.storage_key}' is invalid: {e}") from e

        if (loaded.rows, loaded.cols) != (self.grid.rows, self.grid.cols):
            raise PersistenceError(
                f"Stored snapshot '{self.storage_key}' is {loaded.rows}x{loaded.cols}, "
                f"expected {self.grid.rows}x{self.grid.cols}"
            )

        self.grid.restore(loaded.snapshot())
        logger.info("Loaded grid from key '%s'", self.storage_key)
        return True

    def to_frame(self, formulas: bool = False) -> "pd.DataFrame":
        """Return the grid as a pandas DataFrame (see cellgrid.utils.frames.to_frame)."""
        return to_frame(self.grid, formulas=formulas)
