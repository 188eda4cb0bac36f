"""
A1-style reference parsing.

Converts "A1"-style cell references and "A1:B3"-style ranges into zero-indexed
coordinates. Only single uppercase column letters (A..Z) and positive row
numbers are accepted; anything else raises ParseError rather than producing
nonsensical coordinates.
"""

import re
from typing import List, Optional

from cellgrid.exceptions import ParseError
from cellgrid.spreadsheet.model import CellRef, Range, column_index

_CELL_REF_RE = re.compile(r"([A-Z])([0-9]+)")

# Range anywhere inside a formula: exactly one letter per side
_RANGE_SEARCH_RE = re.compile(r"([A-Z][0-9]+):([A-Z][0-9]+)")


def parse_cell_ref(text: str) -> CellRef:
    """Parse a single cell reference.

    Args:
        text: Reference such as "A1" or "C5" (1-indexed rows)

    Returns:
        CellRef with 0-indexed coordinates ("C5" -> CellRef(4, 2))

    Raises:
        ParseError: If text is not one uppercase letter followed by a positive integer
    """
    if not isinstance(text, str):
        raise ParseError(f"Cell reference must be a string, got {type(text).__name__}")

    match = _CELL_REF_RE.fullmatch(text)
    if not match:
        raise ParseError(f"Invalid cell reference: {text!r}")

    letter, row_str = match.groups()
    row_1indexed = int(row_str)
    if row_1indexed < 1:
        raise ParseError(f"Row numbers start at 1: {text!r}")

    return CellRef(row=row_1indexed - 1, col=column_index(letter))


def parse_range_ref(start_ref: str, end_ref: str) -> Range:
    """Parse the two corners of a range into a Range.

    Raises:
        ParseError: If either corner is malformed or the range is reversed
    """
    start = parse_cell_ref(start_ref)
    end = parse_cell_ref(end_ref)
    if end.row < start.row or end.col < start.col:
        raise ParseError(f"Reversed range: {start_ref}:{end_ref}")
    return Range(start, end)


def parse_range(start_ref: str, end_ref: str) -> List[CellRef]:
    """Enumerate every cell of an inclusive range in row-major order.

    Example:
        >>> parse_range("A1", "B2")
        [CellRef(row=0, col=0), CellRef(row=0, col=1), CellRef(row=1, col=0), CellRef(row=1, col=1)]

    Raises:
        ParseError: If either corner is malformed or the range is reversed
    """
    return parse_range_ref(start_ref, end_ref).cells()


def parse_a1_range(notation: str) -> Range:
    """Parse "A1:B3" notation into a Range.

    Raises:
        ParseError: If notation is not exactly two references joined by ':'
    """
    parts = notation.split(":")
    if len(parts) != 2:
        raise ParseError(f"Invalid range notation: {notation!r}")
    return parse_range_ref(parts[0], parts[1])


def find_range(formula: str) -> Optional[Range]:
    """Find the first range reference anywhere in a formula.

    Args:
        formula: Formula text such as "=SUM(A1:A3)"

    Returns:
        The parsed Range, or None if the text contains no range

    Raises:
        ParseError: If a range is found but is reversed or has row 0
    """
    match = _RANGE_SEARCH_RE.search(formula)
    if match is None:
        return None
    return parse_range_ref(match.group(1), match.group(2))
