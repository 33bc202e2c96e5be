from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .types import (
    UNDEFINED, Undefined, Value, HostFunction, Context, Functions,
    ExpressionError, UndefinedVariable, NullPropertyAccess, UndefinedFunction,
    NonNumericNegation, UnsupportedPostfix, UnknownOperator, UnsupportedNodeType,
    ArityError, ERROR_KINDS,
    is_number, is_nullish, is_sequence, value_kind,
)

def _frozen(mapping: Optional[Mapping[str, object]]) -> Mapping[str, object]:
    return MappingProxyType(dict(mapping or {}))

@dataclass(frozen=True)
class EvaluationState:
    """Variables and callable functions visible to one or more evaluations.

    Both mappings are read-only snapshots; updates return a new state so a
    state can be shared across threads and reused across calls.
    """
    context: Context = field(default_factory=lambda: _frozen(None))
    functions: Functions = field(default_factory=lambda: _frozen(None))

    def __post_init__(self) -> None:
        if not isinstance(self.context, MappingProxyType):
            object.__setattr__(self, "context", _frozen(self.context))

        if not isinstance(self.functions, MappingProxyType):
            object.__setattr__(self, "functions", _frozen(self.functions))

    def with_function(self, name: str, fn: HostFunction) -> 'EvaluationState':
        functions = dict(self.functions)
        functions[name] = fn
        return EvaluationState(self.context, _frozen(functions))

    def with_context(self, overrides: Context) -> 'EvaluationState':
        context = dict(self.context)
        context.update(overrides)
        return EvaluationState(_frozen(context), self.functions)

    def lookup_variable(self, name: str) -> Value:
        if name not in self.context:
            raise UndefinedVariable(f"Undefined variable: {name}")

        return self.context[name]

    def lookup_function(self, name: str) -> HostFunction:
        fn = self.functions.get(name)
        if fn is None:
            raise UndefinedFunction(f"Undefined function: {name}")

        return fn

def create_state(context: Optional[Context]=None, functions: Optional[Functions]=None) -> EvaluationState:
    return EvaluationState(_frozen(context), _frozen(functions))

def set_function(state: EvaluationState, name: str, fn: HostFunction) -> EvaluationState:
    return state.with_function(name, fn)

__all__ = [
    "EvaluationState",
    "create_state",
    "set_function",
    "UNDEFINED",
    "Undefined",
    "Value",
    "HostFunction",
    "Context",
    "Functions",
    "ExpressionError",
    "UndefinedVariable",
    "NullPropertyAccess",
    "UndefinedFunction",
    "NonNumericNegation",
    "UnsupportedPostfix",
    "UnknownOperator",
    "UnsupportedNodeType",
    "ArityError",
    "ERROR_KINDS",
    "is_number",
    "is_nullish",
    "is_sequence",
    "value_kind",
]
