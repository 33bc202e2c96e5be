from __future__ import annotations

import math
import re
from collections.abc import Mapping

from ..runtime import UNDEFINED, Undefined, Value, is_sequence, value_kind

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_EXPONENT_RE = re.compile(r"e([+-])0*(\d)")

def is_truthy(val: Value) -> bool:
    match val:
        case bool():
            return val
        case None | Undefined():
            return False
        case int() | float():
            return not (val == 0 or math.isnan(val))
        case str():
            return bool(val)
        case _:
            return True

def to_float(num: int | float) -> float:
    """``float(num)``, with ints past the float range mapped to signed infinity."""
    try:
        return float(num)
    except OverflowError:
        return math.inf if num > 0 else -math.inf

def to_number(val: Value) -> float:
    match val:
        case bool():
            return 1.0 if val else 0.0
        case int() | float():
            return to_float(val)
        case None:
            return 0.0
        case Undefined():
            return math.nan
        case str():
            return _parse_number(val)
        case _:
            return _parse_number(to_display_string(val))

def _parse_number(text: str) -> float:
    s = text.strip()
    if not s:
        return 0.0

    if _DECIMAL_RE.fullmatch(s):
        return float(s)

    if _RADIX_RE.fullmatch(s):
        return to_float(int(s, 0))

    if s in ("Infinity", "+Infinity"):
        return math.inf

    if s == "-Infinity":
        return -math.inf

    return math.nan

def format_number(num: int | float) -> str:
    if isinstance(num, int):
        if abs(num) < 10**21:
            return str(num)
        num = to_float(num)

    if math.isnan(num):
        return "NaN"

    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"

    if num.is_integer() and abs(num) < 1e21:
        return str(int(num))

    return _EXPONENT_RE.sub(r"e\1\2", repr(num))

def to_display_string(val: Value) -> str:
    match val:
        case str():
            return val
        case bool():
            return "true" if val else "false"
        case int() | float():
            return format_number(val)
        case None:
            return "null"
        case Undefined():
            return "undefined"
        case Mapping():
            return "[object Object]"

    if is_sequence(val):
        return ",".join("" if item is None or item is UNDEFINED else to_display_string(item) for item in val)

    return str(val)

def strict_equals(lhs: Value, rhs: Value) -> bool:
    kind = value_kind(lhs)
    if kind != value_kind(rhs):
        return False

    match kind:
        case "null" | "undefined":
            return True
        case "number" | "string" | "boolean":
            return bool(lhs == rhs)
        case _:
            return lhs is rhs
