"""
Grid snapshot serialization utilities.

Provides JSON serialization and deserialization for grids. The serialized form
is an ordered list of rows, each an ordered list of cells, each cell a
``{"value": str, "formula": str}`` object. Round trip contract:
``deserialize(serialize(grid)) == grid``.
"""

import json
from typing import Any, Dict, List

from ..spreadsheet.model import Cell, Grid


def serialize(grid: Grid) -> List[List[Dict[str, str]]]:
    """Serialize a grid to a JSON-serializable list of rows.

    Args:
        grid: The grid to serialize

    Returns:
        List of rows, each a list of ``{"value", "formula"}`` dicts

    Raises:
        TypeError: If grid is not a Grid instance

    Example:
        >>> grid = Grid(rows=1, cols=2)
        >>> grid.set_cell_literal(0, 0, "7")
        >>> serialize(grid)
        [[{'value': '7', 'formula': ''}, {'value': '', 'formula': ''}]]
    """
    if not isinstance(grid, Grid):
        raise TypeError(f"Expected Grid, got {type(grid)}")

    return [
        [{"value": cell.value, "formula": cell.formula} for cell in row]
        for row in grid.snapshot()
    ]


def _cell_from_dict(data: Any, row: int, col: int) -> Cell:
    if not isinstance(data, dict):
        raise ValueError(f"Cell ({row}, {col}) must be an object, got {type(data).__name__}")
    if "value" not in data:
        raise ValueError(f"Cell ({row}, {col}) is missing the 'value' field")

    value = data["value"]
    formula = data.get("formula", "")
    if not isinstance(value, str) or not isinstance(formula, str):
        raise ValueError(f"Cell ({row}, {col}) fields must be strings")
    return Cell(value=value, formula=formula)


def deserialize(data: Any) -> Grid:
    """Deserialize a grid from a list of rows.

    Args:
        data: List of rows as produced by serialize()

    Returns:
        Reconstructed Grid instance

    Raises:
        TypeError: If data is not a list
        ValueError: If data is empty, ragged, or contains malformed cells
    """
    if not isinstance(data, list):
        raise TypeError(f"Expected list, got {type(data)}")
    if not data:
        raise ValueError("Serialized grid must have at least one row")

    width = None
    rows = []
    for r, row in enumerate(data):
        if not isinstance(row, list) or not row:
            raise ValueError(f"Row {r} must be a non-empty list")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise ValueError(f"Row {r} has {len(row)} cells, expected {width}")
        rows.append(tuple(_cell_from_dict(cell, r, c) for c, cell in enumerate(row)))

    return Grid.from_snapshot(tuple(rows))


def to_json(grid: Grid, **kwargs) -> str:
    """Serialize a grid to a JSON string.

    Args:
        grid: The grid to serialize
        **kwargs: Additional arguments to pass to json.dumps (e.g., indent=2)

    Returns:
        JSON string representation of the grid
    """
    return json.dumps(serialize(grid), **kwargs)


def from_json(json_str: str) -> Grid:
    """Deserialize a grid from a JSON string.

    Args:
        json_str: JSON string containing a serialized grid

    Returns:
        Reconstructed Grid instance

    Raises:
        TypeError: If json_str is not a string
        ValueError: If JSON is invalid or the grid structure is invalid
    """
    if not isinstance(json_str, str):
        raise TypeError(f"Expected str, got {type(json_str)}")

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    return deserialize(data)
