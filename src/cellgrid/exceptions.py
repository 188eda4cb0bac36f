"""
Exception classes for cellgrid.

These exceptions are used throughout the cellgrid package to signal error conditions
while parsing references, evaluating formulas, walking the edit history, and
persisting grid snapshots.
"""


class EvaluationError(Exception):
    """Raised when a formula cannot be evaluated.

    This is the recovery barrier for formula evaluation: the evaluator catches
    every EvaluationError (including the subclasses below) and turns it into an
    error marker in the target cell instead of aborting the edit. Examples:
        - A range that reaches outside the grid
        - AVERAGE over zero values
        - Any unexpected failure inside a reducer
    """
    pass


class ParseError(EvaluationError):
    """Raised when a cell or range reference is malformed.

    References are a single uppercase column letter followed by a positive row
    number ("A1", "C12"). Examples of rejected input:
        - Lowercase or multi-letter columns ("a1", "AA1")
        - Missing or zero row numbers ("A", "A0")
        - Reversed ranges ("B2:A1")
    """
    pass


class UnsupportedFormulaError(EvaluationError):
    """Raised when a formula has no usable range or names an unknown function.

    Displayed as "INVALID" in the target cell.
    """
    pass


class HistoryEmptyError(Exception):
    """Raised when undo or redo is requested with an empty stack.

    The editor treats this as a silent no-op; it is never surfaced to the user.
    """
    pass


class PersistenceError(Exception):
    """Raised when saving or loading a grid snapshot fails.

    Wraps transport failures from the storage backends and malformed payloads
    found on load. The in-memory grid is never modified when this is raised.
    Common causes include:
        - Unreadable or unwritable snapshot files
        - Google Sheets API failures (via gspread)
        - Stored payloads that are not valid grid snapshots
        - Stored grids whose dimensions differ from the live grid
    """
    pass
