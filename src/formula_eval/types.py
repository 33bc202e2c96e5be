from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Tuple
from typing_extensions import TypeAlias, TypeGuard

# ---------- Value Model ----------

class Undefined:
    """Absence sentinel: what a missing member key resolves to."""
    _instance: 'Undefined | None' = None

    def __new__(cls) -> 'Undefined':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"

UNDEFINED = Undefined()

# number | string | boolean | null | undefined | opaque host object
Value: TypeAlias = Any
HostFunction: TypeAlias = Callable[..., Value]
Context: TypeAlias = Mapping[str, Value]
Functions: TypeAlias = Mapping[str, HostFunction]

def is_number(value: Value) -> TypeGuard[int | float]:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def is_nullish(value: Value) -> bool:
    return value is None or value is UNDEFINED

def value_kind(value: Value) -> str:
    match value:
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case None:
            return "null"
        case Undefined():
            return "undefined"
        case _:
            return "object"

def is_sequence(value: Value) -> TypeGuard[Sequence[Value]]:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))

# ---------- Exceptions ----------

class ExpressionError(Exception):
    """Base of every error the evaluator raises for a malformed expression."""
    message: str

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__

    def rewrapped(self) -> 'ExpressionError':
        # subclasses may take other constructor arguments
        err = type(self).__new__(type(self))
        ExpressionError.__init__(err, f"Evaluation error: {getattr(self, 'message', str(self))}")
        return err

class UndefinedVariable(ExpressionError):
    pass

class NullPropertyAccess(ExpressionError):
    pass

class UndefinedFunction(ExpressionError):
    pass

class NonNumericNegation(ExpressionError):
    pass

class UnsupportedPostfix(ExpressionError):
    pass

class UnknownOperator(ExpressionError):
    pass

class UnsupportedNodeType(ExpressionError):
    pass

class ArityError(ExpressionError):
    pass

ERROR_KINDS: Tuple[type, ...] = (
    UndefinedVariable,
    NullPropertyAccess,
    UndefinedFunction,
    NonNumericNegation,
    UnsupportedPostfix,
    UnknownOperator,
    UnsupportedNodeType,
    ArityError,
)
