"""
Grid model classes.

This module provides the data model behind the editor:
- Cell: A single grid position (displayed value plus original formula text)
- CellRef: A zero-indexed (row, col) coordinate
- Range: An inclusive rectangle of cells (e.g., A1:B3)
- Grid: The fixed-size rectangular store of cells
- GridSnapshot: An immutable deep copy of a grid's contents
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

# Single-letter columns only: A..Z
MAX_COLS = 26


def column_letter(col: int) -> str:
    """Convert a column index (0-indexed) to its letter.

    Args:
        col: Column number (0 = A, 25 = Z)

    Returns:
        The column letter

    Raises:
        ValueError: If the column is outside A..Z
    """
    if not 0 <= col < MAX_COLS:
        raise ValueError(f"Column index out of range: {col}")
    return chr(ord("A") + col)


def column_index(letter: str) -> int:
    """Convert a column letter to its index (0-indexed).

    Args:
        letter: A single uppercase letter (A..Z)

    Returns:
        Column number (A = 0, Z = 25)

    Raises:
        ValueError: If letter is not a single uppercase ASCII letter
    """
    if len(letter) != 1 or not "A" <= letter <= "Z":
        raise ValueError(f"Invalid column letter: {letter!r}")
    return ord(letter) - ord("A")


@dataclass(frozen=True)
class Cell:
    """One grid position.

    Attributes:
        value: Displayed content; a literal or the last computed result, always text
        formula: Original formula text (starting with '=') or "" for literals
    """
    value: str = ""
    formula: str = ""

    @property
    def is_formula(self) -> bool:
        return bool(self.formula)

    @property
    def display_source(self) -> str:
        """Text shown in the formula bar when this cell is selected."""
        return self.formula or self.value


@dataclass(frozen=True, order=True)
class CellRef:
    """A zero-indexed cell coordinate.

    Rows are stored 0-indexed but shown 1-indexed, so CellRef(0, 0) is "A1".

    Attributes:
        row: Row number (0-indexed)
        col: Column number (0-indexed)
    """
    row: int
    col: int

    def to_a1(self) -> str:
        return f"{column_letter(self.col)}{self.row + 1}"

    def __str__(self) -> str:
        return self.to_a1()


class Range:
    """An inclusive rectangle of cells.

    Attributes:
        start: Top-left corner
        end: Bottom-right corner
    """

    def __init__(self, start: CellRef, end: CellRef) -> None:
        """Initialize a Range.

        Args:
            start: Top-left corner (0-indexed)
            end: Bottom-right corner (0-indexed, inclusive)

        Raises:
            ValueError: If end precedes start on either axis
        """
        if end.row < start.row or end.col < start.col:
            raise ValueError("End coordinates must be >= start coordinates")
        self.start = start
        self.end = end

    @property
    def rows(self) -> int:
        return self.end.row - self.start.row + 1

    @property
    def cols(self) -> int:
        return self.end.col - self.start.col + 1

    def cells(self) -> List[CellRef]:
        """Enumerate every cell in row-major order.

        Returns:
            Coordinates with rows low to high in the outer loop and columns
            low to high in the inner loop
        """
        return [
            CellRef(row, col)
            for row in range(self.start.row, self.end.row + 1)
            for col in range(self.start.col, self.end.col + 1)
        ]

    def to_a1(self) -> str:
        return f"{self.start.to_a1()}:{self.end.to_a1()}"

    def __len__(self) -> int:
        return self.rows * self.cols

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, CellRef):
            return False
        return (
            self.start.row <= ref.row <= self.end.row
            and self.start.col <= ref.col <= self.end.col
        )

    def __repr__(self) -> str:
        return f"Range({self.to_a1()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self.start == other.start and self.end == other.end


# Immutable deep copy of a grid: rows of cells
GridSnapshot = Tuple[Tuple[Cell, ...], ...]


class Grid:
    """A fixed-size rectangular store of cells.

    The grid is created fully populated with empty cells and is never resized.
    All mutation goes through set_cell_literal() and set_cell() so that the
    history can snapshot consistently.

    Attributes:
        rows: Number of rows
        cols: Number of columns (at most 26)
    """

    def __init__(self, rows: int = 20, cols: int = 10) -> None:
        """Initialize an empty Grid.

        Args:
            rows: Number of rows (positive integer)
            cols: Number of columns (1..26)

        Raises:
            ValueError: If dimensions are not positive or exceed 26 columns
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("Grid dimensions must be positive integers")
        if cols > MAX_COLS:
            raise ValueError(f"Grid supports at most {MAX_COLS} columns (A..Z)")

        self.rows = rows
        self.cols = cols
        self._cells: List[List[Cell]] = [[Cell() for _ in range(cols)] for _ in range(rows)]

    @classmethod
    def from_snapshot(cls, snapshot: GridSnapshot) -> "Grid":
        """Build a new Grid from a snapshot.

        Raises:
            ValueError: If the snapshot is empty or ragged
        """
        if not snapshot or not snapshot[0]:
            raise ValueError("Snapshot must contain at least one cell")
        grid = cls(rows=len(snapshot), cols=len(snapshot[0]))
        grid.restore(snapshot)
        return grid

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} grid"
            )

    def get_cell(self, row: int, col: int) -> Cell:
        """Return the stored cell at (row, col).

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        self._check_bounds(row, col)
        return self._cells[row][col]

    def set_cell_literal(self, row: int, col: int, text: str) -> Cell:
        """Store literal text at (row, col), clearing any formula.

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        return self.set_cell(row, col, Cell(value=text, formula=""))

    def set_cell(self, row: int, col: int, cell: Cell) -> Cell:
        """Store a cell record at (row, col).

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        self._check_bounds(row, col)
        self._cells[row][col] = cell
        return cell

    def snapshot(self) -> GridSnapshot:
        """Return an immutable deep copy of the grid contents."""
        return tuple(tuple(row) for row in self._cells)

    def restore(self, snapshot: GridSnapshot) -> None:
        """Replace the grid contents with a snapshot.

        Raises:
            ValueError: If the snapshot dimensions differ from the grid
        """
        if len(snapshot) != self.rows or any(len(row) != self.cols for row in snapshot):
            raise ValueError(
                f"Snapshot does not match the {self.rows}x{self.cols} grid"
            )
        self._cells = [list(row) for row in snapshot]

    def clone(self) -> "Grid":
        """Return a deep, independent copy of this grid."""
        return Grid.from_snapshot(self.snapshot())

    def iter_cells(self) -> Iterator[Tuple[CellRef, Cell]]:
        """Yield (CellRef, Cell) pairs in row-major order."""
        for r, row in enumerate(self._cells):
            for c, cell in enumerate(row):
                yield CellRef(r, c), cell

    def formula_cells(self) -> List[Tuple[CellRef, Cell]]:
        return [(ref, cell) for ref, cell in self.iter_cells() if cell.is_formula]

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.snapshot() == other.snapshot()
