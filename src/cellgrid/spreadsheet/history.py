"""
Undo/redo history.

The HistoryManager owns two stacks of immutable grid snapshots. It is owned by
the same object that owns the Grid (the editor) and is passed around
explicitly, never accessed as a module-level singleton.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from cellgrid.exceptions import HistoryEmptyError
from cellgrid.spreadsheet.model import GridSnapshot

logger = logging.getLogger(__name__)


class HistoryManager:
    """Linear undo/redo over full-grid snapshots.

    Every mutation records the pre-mutation snapshot and discards the redo
    branch. There is no redo tree.

    Attributes:
        limit: Maximum undo depth; None keeps every entry. When the limit is
               reached the oldest snapshot is discarded.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("History limit must be a positive integer or None")
        self.limit = limit
        self._undo_stack: List[GridSnapshot] = []
        self._redo_stack: List[GridSnapshot] = []

    def record_mutation(self, before: GridSnapshot) -> None:
        """Record the grid as it was before a mutation.

        Args:
            before: Snapshot taken immediately before the grid was changed
        """
        self._undo_stack.append(before)
        self._redo_stack.clear()
        if self.limit is not None and len(self._undo_stack) > self.limit:
            del self._undo_stack[0]

    def undo(self, current: GridSnapshot) -> GridSnapshot:
        """Step back one mutation.

        Args:
            current: Snapshot of the live grid, pushed onto the redo stack

        Returns:
            The snapshot to restore as the live grid

        Raises:
            HistoryEmptyError: If there is nothing to undo
        """
        if not self._undo_stack:
            raise HistoryEmptyError("Nothing to undo")
        previous = self._undo_stack.pop()
        self._redo_stack.append(current)
        logger.debug("undo: %d undo / %d redo entries left", len(self._undo_stack), len(self._redo_stack))
        return previous

    def redo(self, current: GridSnapshot) -> GridSnapshot:
        """Re-apply the most recently undone mutation.

        Args:
            current: Snapshot of the live grid, pushed onto the undo stack

        Returns:
            The snapshot to restore as the live grid

        Raises:
            HistoryEmptyError: If there is nothing to redo
        """
        if not self._redo_stack:
            raise HistoryEmptyError("Nothing to redo")
        following = self._redo_stack.pop()
        self._undo_stack.append(current)
        logger.debug("redo: %d undo / %d redo entries left", len(self._undo_stack), len(self._redo_stack))
        return following

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    def __repr__(self) -> str:
        return f"HistoryManager(undo={self.undo_depth}, redo={self.redo_depth}, limit={self.limit})"
