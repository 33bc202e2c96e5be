"""
Lark front end for formula expressions.

Turns source text such as ``a.b + @sum(x, y) > 10 ? "yes" : "no"`` into the
node classes of :mod:`formula_eval.tree`.

Expression precedence (lowest to highest):
1. ternary (? :), right associative
2. or (||)
3. and (&&)
4. equality (=== !==)
5. comparison (< <= > >=)
6. additive (+ -)
7. multiplicative (* / %)
8. prefix unary (! -)
9. member access (.name, [expr])
10. atoms: literals, identifiers, @calls, parenthesised expressions
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterator, List, Optional

from lark import Lark, Token, Transformer, UnexpectedInput, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from .tree import (
    BinaryExpression,
    CallExpression,
    ConditionalExpression,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    Program,
    UnaryExpression,
)

GRAMMAR = r"""
    start: expr

    ?expr: ternary

    ?ternary: logical_or
            | logical_or "?" ternary ":" ternary  -> conditional

    ?logical_or: logical_and
               | logical_or OR logical_and        -> binary

    ?logical_and: equality
                | logical_and AND equality        -> binary

    ?equality: comparison
             | equality EQ_OP comparison          -> binary

    ?comparison: additive
               | comparison CMP_OP additive       -> binary

    ?additive: multiplicative
             | additive (PLUS | MINUS) multiplicative -> binary

    ?multiplicative: unary
                   | multiplicative MUL_OP unary  -> binary

    ?unary: member
          | (BANG | MINUS) unary                  -> prefix_op

    ?member: atom
           | member "." NAME                      -> static_member
           | member "[" expr "]"                  -> computed_member

    ?atom: NUMBER                                 -> number
         | STRING                                 -> string
         | "true"                                 -> true
         | "false"                                -> false
         | "null"                                 -> null
         | NAME                                   -> identifier
         | "@" NAME "(" [arguments] ")"           -> call
         | "(" expr ")"

    arguments: expr ("," expr)*

    OR: "||"
    AND: "&&"
    EQ_OP: "===" | "!=="
    CMP_OP: ">=" | "<=" | ">" | "<"
    PLUS: "+"
    MINUS: "-"
    MUL_OP: "*" | "/" | "%"
    BANG: "!"

    NAME: /[A-Za-z_$][A-Za-z0-9_$]*/
    NUMBER: /(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?/
    STRING: /"(?:[^"\\\n]|\\.)*"/ | /'(?:[^'\\\n]|\\.)*'/

    %import common.WS
    %ignore WS
"""

_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(
            f"{message} at line {line}, col {column}" if line is not None else message
        )


def unescape(body: str) -> str:
    def repl(match: re.Match[str]) -> str:
        esc = match.group(1)
        if esc.startswith("u") and len(esc) == 5:
            return chr(int(esc[1:], 16))
        return _SIMPLE_ESCAPES.get(esc, esc)

    return _ESCAPE_RE.sub(repl, body)


@v_args(inline=True)
class _AstBuilder(Transformer):
    def start(self, expr: Node) -> Program:
        return Program(expr)

    def number(self, tok: Token) -> Literal:
        return Literal(float(tok))

    def string(self, tok: Token) -> Literal:
        return Literal(unescape(tok[1:-1]))

    def true(self) -> Literal:
        return Literal(True)

    def false(self) -> Literal:
        return Literal(False)

    def null(self) -> Literal:
        return Literal(None)

    def identifier(self, tok: Token) -> Identifier:
        return Identifier(str(tok))

    def call(self, name: Token, args: Optional[List[Node]]) -> CallExpression:
        return CallExpression(Identifier(str(name)), tuple(args or ()))

    def arguments(self, *items: Node) -> List[Node]:
        return list(items)

    def static_member(self, obj: Node, name: Token) -> MemberExpression:
        return MemberExpression(obj, Identifier(str(name)), computed=False)

    def computed_member(self, obj: Node, key: Node) -> MemberExpression:
        return MemberExpression(obj, key, computed=True)

    def binary(self, left: Node, op: Token, right: Node) -> BinaryExpression:
        return BinaryExpression(str(op), left, right)

    def prefix_op(self, op: Token, arg: Node) -> UnaryExpression:
        return UnaryExpression(str(op), arg, prefix=True)

    def conditional(self, test: Node, consequent: Node, alternate: Node) -> ConditionalExpression:
        return ConditionalExpression(test, consequent, alternate)


@lru_cache(maxsize=1)
def build_parser() -> Lark:
    return Lark(GRAMMAR, parser="lalr", maybe_placeholders=True, propagate_positions=False)


def _describe(exc: UnexpectedInput) -> str:
    if isinstance(exc, UnexpectedEOF):
        return "Unexpected end of input"

    if isinstance(exc, UnexpectedToken):
        if exc.token.type == "$END":
            return "Unexpected end of input"
        return f"Unexpected token {exc.token.value!r}"

    if isinstance(exc, UnexpectedCharacters):
        return f"Unexpected character {exc.char!r}"

    return "Invalid syntax"


def parse(source: str) -> Program:
    try:
        tree = build_parser().parse(source)
    except UnexpectedInput as exc:
        line = getattr(exc, "line", None)
        column = getattr(exc, "column", None)
        if line is not None and line < 0:
            line = column = None
        raise ParseError(_describe(exc), line, column) from exc

    return _AstBuilder().transform(tree)


def tokenize(source: str) -> Iterator[Token]:
    """Raw token stream; raises lark's UnexpectedCharacters on bad input."""
    return build_parser().lex(source)
