"""AST node classes for formula expressions.

Nodes mirror the ESTree shapes an external parser emits, so a JSON AST can be
loaded with :func:`from_mapping` and evaluated without going through
:mod:`formula_eval.parser`.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Tuple, Union
from typing_extensions import TypeAlias

from .types import ExpressionError, UnsupportedNodeType


@dataclass(frozen=True)
class Literal:
    value: float | int | str | bool | None

    @property
    def type(self) -> str:
        return "Literal"


@dataclass(frozen=True)
class Identifier:
    name: str

    @property
    def type(self) -> str:
        return "Identifier"


@dataclass(frozen=True)
class MemberExpression:
    object: 'Node'
    property: 'Node'
    computed: bool = False

    @property
    def type(self) -> str:
        return "MemberExpression"


@dataclass(frozen=True)
class CallExpression:
    callee: Identifier
    arguments: Tuple['Node', ...] = field(default_factory=tuple)

    @property
    def type(self) -> str:
        return "CallExpression"


@dataclass(frozen=True)
class BinaryExpression:
    operator: str
    left: 'Node'
    right: 'Node'

    @property
    def type(self) -> str:
        return "BinaryExpression"


@dataclass(frozen=True)
class UnaryExpression:
    operator: str
    argument: 'Node'
    prefix: bool = True

    @property
    def type(self) -> str:
        return "UnaryExpression"


@dataclass(frozen=True)
class ConditionalExpression:
    test: 'Node'
    consequent: 'Node'
    alternate: 'Node'

    @property
    def type(self) -> str:
        return "ConditionalExpression"


@dataclass(frozen=True)
class Program:
    body: 'Node'

    @property
    def type(self) -> str:
        return "Program"


Node: TypeAlias = Union[
    Literal,
    Identifier,
    MemberExpression,
    CallExpression,
    BinaryExpression,
    UnaryExpression,
    ConditionalExpression,
]


def node_type(node: Any) -> str:
    """Best-effort tag for diagnostics, including foreign objects."""
    tag = getattr(node, "type", None)
    if isinstance(tag, str):
        return tag

    if isinstance(node, Mapping) and isinstance(node.get("type"), str):
        return node["type"]

    return type(node).__name__


# ---------------- ESTree mappings ----------------

def _field(data: Mapping[str, Any], name: str) -> Any:
    if name not in data:
        raise ExpressionError(f"{data.get('type')} node is missing '{name}'")
    return data[name]


def from_mapping(data: Mapping[str, Any]) -> Program | Node:
    """Build nodes from an ESTree-shaped mapping such as a decoded JSON AST."""
    if not isinstance(data, Mapping):
        raise UnsupportedNodeType(f"Unsupported node type: {node_type(data)}")

    match data.get("type"):
        case "Program":
            body = _field(data, "body")
            # ESTree programs carry a statement list; unwrap a lone expression statement.
            if isinstance(body, list):
                if len(body) != 1:
                    raise ExpressionError("Program must contain exactly one expression")
                body = body[0]
            if isinstance(body, Mapping) and body.get("type") == "ExpressionStatement":
                body = _field(body, "expression")
            return Program(from_mapping(body))
        case "Literal":
            return Literal(_field(data, "value"))
        case "Identifier":
            return Identifier(_field(data, "name"))
        case "MemberExpression":
            return MemberExpression(
                from_mapping(_field(data, "object")),
                from_mapping(_field(data, "property")),
                bool(data.get("computed", False)),
            )
        case "CallExpression":
            callee = from_mapping(_field(data, "callee"))
            if not isinstance(callee, Identifier):
                raise ExpressionError("Call callee must be an identifier")
            return CallExpression(callee, tuple(from_mapping(arg) for arg in data.get("arguments", ())))
        case "BinaryExpression" | "LogicalExpression":
            return BinaryExpression(
                _field(data, "operator"),
                from_mapping(_field(data, "left")),
                from_mapping(_field(data, "right")),
            )
        case "UnaryExpression":
            return UnaryExpression(
                _field(data, "operator"),
                from_mapping(_field(data, "argument")),
                bool(data.get("prefix", True)),
            )
        case "ConditionalExpression":
            return ConditionalExpression(
                from_mapping(_field(data, "test")),
                from_mapping(_field(data, "consequent")),
                from_mapping(_field(data, "alternate")),
            )
        case other:
            raise UnsupportedNodeType(f"Unsupported node type: {other}")
