"""
Selection state machine.

Tracks the active cell and the cells gathered during a drag gesture. The model
is pure state: it never reads or writes the grid, and pointer events are fed
in as plain coordinates by whatever UI layer sits on top.

States:
    IDLE      no drag in progress
    DRAGGING  a mouse-down started a drag; the anchor cell is fixed

The drag gesture is additive (lasso-style): cells are appended in the order
they are entered and are only removed by starting a new drag or clicking.
"""

from enum import Enum
from typing import List, Optional

from cellgrid.spreadsheet.model import CellRef


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class SelectionModel:
    """Active cell plus the ordered, duplicate-free multi-selection.

    Attributes:
        selected_cell: The anchor/active cell, or None before the first click
        multi_select: Cells entered during the current drag, in entry order
        state: Current DragState
    """

    def __init__(self) -> None:
        self.selected_cell: Optional[CellRef] = None
        self.multi_select: List[CellRef] = []
        self.state = DragState.IDLE

    @property
    def is_dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def click(self, cell: CellRef) -> None:
        """Plain click: select a single cell and drop any multi-selection."""
        self.selected_cell = cell
        self.multi_select = []

    def mouse_down(self, cell: CellRef) -> None:
        """Start a drag anchored at cell."""
        self.selected_cell = cell
        self.multi_select = [cell]
        self.state = DragState.DRAGGING

    def mouse_over(self, cell: CellRef) -> bool:
        """Extend the current drag with cell.

        Returns:
            True if cell was appended; False while idle or if already selected
        """
        if not self.is_dragging or cell in self.multi_select:
            return False
        self.multi_select.append(cell)
        return True

    def mouse_up(self) -> None:
        """Finish the drag; the gathered cells stay selected."""
        self.state = DragState.IDLE

    def resume_drag(self) -> bool:
        """Continue dragging from the active cell's drag handle.

        Unlike mouse_down(), the existing multi-selection is kept.

        Returns:
            False if there is no active cell to drag from
        """
        if self.selected_cell is None:
            return False
        self.state = DragState.DRAGGING
        return True

    def clear(self) -> None:
        self.selected_cell = None
        self.multi_select = []
        self.state = DragState.IDLE

    def is_selected(self, cell: CellRef) -> bool:
        return self.selected_cell == cell

    def is_multi_selected(self, cell: CellRef) -> bool:
        return cell in self.multi_select

    def __repr__(self) -> str:
        return (
            f"SelectionModel(selected_cell={self.selected_cell!r}, "
            f"multi_select={self.multi_select!r}, state={self.state.value!r})"
        )
