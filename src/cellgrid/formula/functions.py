"""Range aggregate functions and lenient numeric coercion."""

from __future__ import annotations

import functools
import math
import operator
import re
from typing import Callable, Sequence

from cellgrid.exceptions import EvaluationError

Reducer = Callable[[Sequence[float]], float]

# Longest leading decimal literal, the way a lenient float parse reads it
_LEADING_NUMBER_RE = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)


def coerce_number(text: str) -> float:
    """Read a cell value as a number, defaulting to 0.

    Leading whitespace is skipped and the longest numeric prefix is used, so
    "12abc" reads as 12. Empty text, text with no numeric prefix, NaN and
    negative zero all read as 0.
    """
    match = _LEADING_NUMBER_RE.match(text)
    if match is None:
        return 0.0
    number = float(match.group(1))
    if math.isnan(number) or number == 0:
        return 0.0
    return number


def _sum(values: Sequence[float]) -> float:
    # Left fold from 0, no compensated summation
    return functools.reduce(operator.add, values, 0.0)


def _average(values: Sequence[float]) -> float:
    if not values:
        raise EvaluationError("AVERAGE: division by zero (no values)")
    return _sum(values) / len(values)


_BUILTINS: dict[str, Reducer] = {
    "SUM": _sum,
    "AVERAGE": _average,
}


class FunctionRegistry:
    """Registry of range reducers keyed by function name.

    Starts with SUM and AVERAGE and can be extended with custom reducers.
    Formulas are dispatched by case-sensitive prefix ("=SUM..."), with the
    longest registered name winning so that e.g. SUMSQ is not shadowed by SUM.
    """

    def __init__(self) -> None:
        self._functions: dict[str, Reducer] = dict(_BUILTINS)

    def register(self, name: str, func: Reducer) -> None:
        if not name or not name.isalnum():
            raise ValueError(f"Invalid function name: {name!r}")
        self._functions[name.upper()] = func

    def get(self, name: str) -> Reducer | None:
        return self._functions.get(name.upper())

    def has(self, name: str) -> bool:
        return name.upper() in self._functions

    def match(self, formula: str) -> tuple[str, Reducer] | None:
        """Find the reducer whose "=NAME" prefix starts the formula."""
        for name in sorted(self._functions, key=len, reverse=True):
            if formula.startswith(f"={name}"):
                return name, self._functions[name]
        return None

    @property
    def supported_functions(self) -> frozenset[str]:
        return frozenset(self._functions.keys())


def default_registry() -> FunctionRegistry:
    return FunctionRegistry()
