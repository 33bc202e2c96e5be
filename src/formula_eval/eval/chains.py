from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Callable, List

from ..runtime import UNDEFINED, EvaluationState, NullPropertyAccess, Value, is_nullish, is_number, is_sequence
from ..tree import CallExpression, Identifier, MemberExpression, Node
from .helpers import format_number, to_display_string

EvalFunc = Callable[[Node, EvaluationState], Value]

logger = logging.getLogger(__name__)

def _integral_index(key: Value) -> int | None:
    if is_number(key):
        if isinstance(key, int):
            return key
        if key.is_integer():
            return int(key)
        return None

    if isinstance(key, str) and key.isascii() and key.isdigit():
        return int(key)

    return None

def _mapping_key(recv: Mapping, key: Value) -> Value:
    if is_number(key):
        idx = _integral_index(key)
        candidates = [key] if idx is None else [key, idx]
        candidates.append(format_number(key))

        for cand in candidates:
            if cand in recv:
                return recv[cand]
        return UNDEFINED

    if not isinstance(key, str):
        key = to_display_string(key)

    return recv.get(key, UNDEFINED)

def get_property(recv: Value, key: Value) -> Value:
    """Permissive lookup: a key the receiver lacks yields UNDEFINED."""
    if is_nullish(recv):
        raise NullPropertyAccess("Cannot access property of null or undefined")

    if isinstance(recv, Mapping):
        return _mapping_key(recv, key)

    if isinstance(recv, str) or is_sequence(recv):
        if key == "length":
            return float(len(recv))

        idx = _integral_index(key)
        if idx is None or not 0 <= idx < len(recv):
            return UNDEFINED
        return recv[idx]

    if isinstance(key, str) and key and not key.startswith("_"):
        return getattr(recv, key, UNDEFINED)

    return UNDEFINED

def eval_member(node: MemberExpression, state: EvaluationState, eval_func: EvalFunc) -> Value:
    recv = eval_func(node.object, state)
    if is_nullish(recv):
        raise NullPropertyAccess("Cannot access property of null or undefined")

    if node.computed:
        key = eval_func(node.property, state)
    elif isinstance(node.property, Identifier):
        key = node.property.name
    else:
        # static key given as a literal
        key = getattr(node.property, "value", None)

    return get_property(recv, key)

def eval_args(arguments: tuple, state: EvaluationState, eval_func: EvalFunc) -> List[Value]:
    return [eval_func(arg, state) for arg in arguments]

def eval_call(node: CallExpression, state: EvaluationState, eval_func: EvalFunc) -> Value:
    name = node.callee.name
    fn = state.lookup_function(name)
    args = eval_args(node.arguments, state, eval_func)

    logger.debug("calling %s with %d argument(s)", name, len(args))
    return fn(*args)
