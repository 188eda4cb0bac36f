"""
pandas interop for grids.

Exposes a grid as a DataFrame labelled the way the editor shows it: columns
"A", "B", ... and 1-indexed row numbers.
"""

import pandas as pd

from ..spreadsheet.model import Grid, column_letter


def to_frame(grid: Grid, formulas: bool = False) -> pd.DataFrame:
    """Convert a grid to a DataFrame of strings.

    Args:
        grid: The grid to convert
        formulas: If True, show a cell's formula text instead of its value
                  wherever a formula is present

    Returns:
        DataFrame with column letters as columns and 1-indexed rows
    """
    data = [
        [cell.display_source if formulas else cell.value for cell in row]
        for row in grid.snapshot()
    ]
    return pd.DataFrame(
        data,
        columns=[column_letter(c) for c in range(grid.cols)],
        index=pd.RangeIndex(start=1, stop=grid.rows + 1, name="row"),
    )


def from_frame(df: pd.DataFrame, rows: int = 20, cols: int = 10) -> Grid:
    """Build a grid whose top-left block holds the DataFrame's values as literals.

    Missing values (NaN, None) become empty cells; everything else is stored
    as its string form. Header and index labels are not copied.

    Raises:
        ValueError: If the DataFrame does not fit in a rows x cols grid
    """
    if df.shape[0] > rows or df.shape[1] > cols:
        raise ValueError(
            f"DataFrame of shape {df.shape} does not fit a {rows}x{cols} grid"
        )

    grid = Grid(rows=rows, cols=cols)
    for r, values in enumerate(df.itertuples(index=False, name=None)):
        for c, value in enumerate(values):
            grid.set_cell_literal(r, c, "" if pd.isna(value) else str(value))
    return grid
