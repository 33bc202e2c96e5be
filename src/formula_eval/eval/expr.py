from __future__ import annotations

import math
import operator
from typing import Callable, Dict

from ..runtime import EvaluationState, NonNumericNegation, UnknownOperator, UnsupportedPostfix, Value, is_number
from ..tree import BinaryExpression, ConditionalExpression, Node, UnaryExpression
from .helpers import is_truthy, strict_equals, to_display_string, to_float, to_number

EvalFunc = Callable[[Node, EvaluationState], Value]

def _add(lhs: Value, rhs: Value) -> Value:
    if is_number(lhs) and is_number(rhs):
        return to_float(lhs) + to_float(rhs)

    return to_display_string(lhs) + to_display_string(rhs)

def _divide(lhs: float, rhs: float) -> float:
    if rhs == 0:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)

    return lhs / rhs

def _remainder(lhs: float, rhs: float) -> float:
    # sign follows the dividend
    if math.isnan(lhs) or math.isnan(rhs) or math.isinf(lhs) or rhs == 0:
        return math.nan

    if math.isinf(rhs) or lhs == 0:
        return lhs

    return math.fmod(lhs, rhs)

_NUMERIC_OPS: Dict[str, Callable[[float, float], Value]] = {
    '-': operator.sub,
    '*': operator.mul,
    '/': _divide,
    '%': _remainder,
    '>': operator.gt,
    '>=': operator.ge,
    '<': operator.lt,
    '<=': operator.le,
}

def apply_binary_operator(op: str, lhs: Value, rhs: Value) -> Value:
    numeric = _NUMERIC_OPS.get(op)
    if numeric is not None:
        return numeric(to_number(lhs), to_number(rhs))

    match op:
        case '+':
            return _add(lhs, rhs)
        case '===':
            return strict_equals(lhs, rhs)
        case '!==':
            return not strict_equals(lhs, rhs)
        case '&&':
            return is_truthy(lhs) and is_truthy(rhs)
        case '||':
            return is_truthy(lhs) or is_truthy(rhs)
        case _:
            raise UnknownOperator(f"Unknown operator: {op}")

def eval_binary(node: BinaryExpression, state: EvaluationState, eval_func: EvalFunc) -> Value:
    # both sides always run, && and || included
    lhs = eval_func(node.left, state)
    rhs = eval_func(node.right, state)

    return apply_binary_operator(node.operator, lhs, rhs)

def eval_unary(node: UnaryExpression, state: EvaluationState, eval_func: EvalFunc) -> Value:
    arg = eval_func(node.argument, state)

    if not node.prefix:
        raise UnsupportedPostfix(f"Postfix operators are not supported: {node.operator}")

    match node.operator:
        case '!':
            return not is_truthy(arg)
        case '-':
            if not is_number(arg):
                raise NonNumericNegation(f"Cannot apply unary - to non-number: {to_display_string(arg)}")
            return -to_float(arg)
        case _:
            raise UnknownOperator(f"Unknown operator: {node.operator}")

def eval_ternary(node: ConditionalExpression, state: EvaluationState, eval_func: EvalFunc) -> Value:
    if is_truthy(eval_func(node.test, state)):
        return eval_func(node.consequent, state)

    return eval_func(node.alternate, state)
