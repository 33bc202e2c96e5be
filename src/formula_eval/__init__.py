"""Evaluate small host-embedded formulas against variables and functions."""

from .evaluator import evaluate
from .parser import ParseError, parse
from .runtime import (
    UNDEFINED,
    ArityError,
    EvaluationState,
    ExpressionError,
    NonNumericNegation,
    NullPropertyAccess,
    UndefinedFunction,
    UndefinedVariable,
    UnknownOperator,
    UnsupportedNodeType,
    UnsupportedPostfix,
    create_state,
    set_function,
)
from .runner import run
from .stdlib import stdlib_functions
from .tree import from_mapping

__all__ = [
    "UNDEFINED",
    "ArityError",
    "EvaluationState",
    "ExpressionError",
    "NonNumericNegation",
    "NullPropertyAccess",
    "ParseError",
    "UndefinedFunction",
    "UndefinedVariable",
    "UnknownOperator",
    "UnsupportedNodeType",
    "UnsupportedPostfix",
    "create_state",
    "evaluate",
    "from_mapping",
    "parse",
    "run",
    "set_function",
    "stdlib_functions",
]
