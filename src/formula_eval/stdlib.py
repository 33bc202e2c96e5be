"""Optional host functions that formulas can call as ``@name(...)``."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Callable, Dict, Optional

from .runtime import ArityError, HostFunction, Value, is_nullish, is_sequence
from .eval.helpers import to_display_string, to_number

_STDLIB: Dict[str, HostFunction] = {}

def register_stdlib(name: str, *, arity: Optional[int] = None, min_arity: int = 0):
    def dec(fn: Callable[..., Value]):
        def checked(*args: Value) -> Value:
            if arity is not None and len(args) != arity:
                raise ArityError(f"{name} expects {arity} argument(s); got {len(args)}")
            if len(args) < min_arity:
                raise ArityError(f"{name} expects at least {min_arity} argument(s); got {len(args)}")
            return fn(*args)

        checked.__name__ = fn.__name__
        checked.__doc__ = fn.__doc__
        _STDLIB[name] = checked
        return fn

    return dec

def stdlib_functions() -> Dict[str, HostFunction]:
    return dict(_STDLIB)

def _flatten(args: tuple) -> list:
    out = []

    for arg in args:
        if is_sequence(arg):
            out.extend(arg)
        else:
            out.append(arg)

    return out

@register_stdlib("sum")
def std_sum(*args: Value) -> float:
    """Numeric sum; array arguments are spread."""
    return math.fsum(to_number(v) for v in _flatten(args))

@register_stdlib("min", min_arity=1)
def std_min(*args: Value) -> float:
    nums = [to_number(v) for v in _flatten(args)]
    if any(math.isnan(n) for n in nums):
        return math.nan
    return min(nums) if nums else math.inf

@register_stdlib("max", min_arity=1)
def std_max(*args: Value) -> float:
    nums = [to_number(v) for v in _flatten(args)]
    if any(math.isnan(n) for n in nums):
        return math.nan
    return max(nums) if nums else -math.inf

@register_stdlib("abs", arity=1)
def std_abs(value: Value) -> float:
    return abs(to_number(value))

@register_stdlib("round", arity=1)
def std_round(value: Value) -> float:
    # half rounds toward +infinity
    num = to_number(value)
    if math.isnan(num) or math.isinf(num):
        return num
    floor = math.floor(num)
    return float(floor + 1 if num - floor >= 0.5 else floor)

@register_stdlib("floor", arity=1)
def std_floor(value: Value) -> float:
    num = to_number(value)
    if math.isnan(num) or math.isinf(num):
        return num
    return float(math.floor(num))

@register_stdlib("ceil", arity=1)
def std_ceil(value: Value) -> float:
    num = to_number(value)
    if math.isnan(num) or math.isinf(num):
        return num
    return float(math.ceil(num))

@register_stdlib("len", arity=1)
def std_len(value: Value) -> float:
    if isinstance(value, (str, Mapping)) or is_sequence(value):
        return float(len(value))
    return float(len(to_display_string(value)))

@register_stdlib("upper", arity=1)
def std_upper(value: Value) -> str:
    return to_display_string(value).upper()

@register_stdlib("lower", arity=1)
def std_lower(value: Value) -> str:
    return to_display_string(value).lower()

@register_stdlib("concat")
def std_concat(*args: Value) -> str:
    return "".join(to_display_string(v) for v in args)

@register_stdlib("coalesce", min_arity=1)
def std_coalesce(*args: Value) -> Value:
    """First argument that is neither null nor undefined."""
    for arg in args:
        if not is_nullish(arg):
            return arg
    return None
