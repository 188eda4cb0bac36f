"""cellgrid.formula - Range aggregate formula evaluation."""

from cellgrid.formula.evaluator import (
    ERROR,
    INVALID,
    EvaluationResult,
    FormulaEvaluator,
    evaluate,
    format_number,
)
from cellgrid.formula.functions import FunctionRegistry, coerce_number, default_registry

__all__ = [
    "ERROR",
    "INVALID",
    "EvaluationResult",
    "FormulaEvaluator",
    "FunctionRegistry",
    "coerce_number",
    "default_registry",
    "evaluate",
    "format_number",
]
