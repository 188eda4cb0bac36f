"""FormulaEvaluator: single-range aggregate formulas over a Grid.

A formula is evaluated once, when it is applied; results are not recomputed
when referenced cells change later (see SpreadsheetEditor.recalculate()).

Evaluation steps:

1. Text that does not start with ``=`` is returned unchanged.
2. The first ``<Letter><Digits>:<Letter><Digits>`` range in the text is
   located. No range means the formula is unsupported (``INVALID``).
3. The range is resolved to row-major coordinates and each cell value is
   read as a number (non-numeric and empty cells count as 0).
4. The function is chosen by case-sensitive prefix (``=SUM``, ``=AVERAGE``,
   or any registered reducer). An unknown function is ``INVALID``.

Failures never escape ``evaluate()``: they come back as an
``EvaluationResult`` whose ``display`` is ``INVALID`` or ``ERROR``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Union

from cellgrid.exceptions import EvaluationError, UnsupportedFormulaError
from cellgrid.formula.functions import FunctionRegistry, coerce_number
from cellgrid.spreadsheet.model import Grid, Range
from cellgrid.spreadsheet.references import find_range

logger = logging.getLogger(__name__)

INVALID = "INVALID"
ERROR = "ERROR"


def format_number(number: float) -> str:
    """Render a number the way a spreadsheet cell displays it.

    Integral values drop the fraction ("6", not "6.0"), fixed notation is used
    for decimal exponents between -7 and 21, and scientific notation outside
    that window ("1e+21", "1e-7").
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"

    sign = "-" if number < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(number))).as_tuple()
    full = "".join(str(d) for d in digit_tuple)
    digits = full.rstrip("0")
    exponent += len(full) - len(digits)

    k = len(digits)
    n = k + exponent  # position of the decimal point relative to the digits
    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"

    e = n - 1
    exp_text = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return f"{sign}{digits}{exp_text}"
    return f"{sign}{digits[0]}.{digits[1:]}{exp_text}"


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one formula.

    Attributes:
        value: Computed number, the unchanged text for non-formulas, or None on failure
        error: The failure, or None on success
    """
    value: Union[float, str, None]
    error: Optional[EvaluationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        """Text stored as the cell value."""
        if self.error is not None:
            if isinstance(self.error, UnsupportedFormulaError):
                return INVALID
            return ERROR
        if isinstance(self.value, str):
            return self.value
        return format_number(self.value)


class FormulaEvaluator:
    """Evaluates range aggregate formulas against a grid.

    Usage::

        evaluator = FormulaEvaluator(grid)
        result = evaluator.evaluate("=SUM(A1:A3)")
        result.display  # "6"
    """

    def __init__(self, grid: Grid, registry: Optional[FunctionRegistry] = None) -> None:
        self.grid = grid
        self.registry = registry if registry is not None else FunctionRegistry()

    def evaluate(self, formula: str) -> EvaluationResult:
        """Evaluate formula text, capturing any failure in the result."""
        if not formula.startswith("="):
            return EvaluationResult(value=formula)
        try:
            return EvaluationResult(value=self.compute(formula))
        except EvaluationError as e:
            logger.warning("Formula evaluation error for %r: %s", formula, e)
            return EvaluationResult(value=None, error=e)

    def compute(self, formula: str) -> float:
        """Evaluate a formula, raising on failure.

        Raises:
            UnsupportedFormulaError: If there is no range or the function is unknown
            ParseError: If the range is reversed or refers to row 0
            EvaluationError: If the range leaves the grid or the reducer raises anything
        """
        rng = find_range(formula)
        if rng is None:
            raise UnsupportedFormulaError(f"No range reference in {formula!r}")

        values = self.range_values(rng)

        matched = self.registry.match(formula)
        if matched is None:
            raise UnsupportedFormulaError(f"Unknown function in {formula!r}")
        name, reducer = matched

        try:
            return float(reducer(values))
        except EvaluationError:
            raise
        except Exception as e:
            # Registered reducers are arbitrary callables
            raise EvaluationError(f"{name} failed: {e!r}") from e

    def range_values(self, rng: Range) -> List[float]:
        """Read every cell of rng as a number, in row-major order.

        Raises:
            EvaluationError: If any part of the range is outside the grid
        """
        values: List[float] = []
        for ref in rng.cells():
            try:
                cell = self.grid.get_cell(ref.row, ref.col)
            except IndexError as e:
                raise EvaluationError(f"{ref.to_a1()} is outside the grid") from e
            values.append(coerce_number(cell.value))
        return values


def evaluate(formula: str, grid: Grid, registry: Optional[FunctionRegistry] = None) -> str:
    """Evaluate formula against grid and return the text to display."""
    return FormulaEvaluator(grid, registry).evaluate(formula).display
