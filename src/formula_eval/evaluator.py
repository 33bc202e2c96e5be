from __future__ import annotations

import logging
from typing import Optional

from .runtime import (
    Context,
    EvaluationState,
    ExpressionError,
    UnsupportedNodeType,
    Value,
)
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
    node_type,
)
from .eval.chains import eval_call, eval_member
from .eval.expr import eval_binary, eval_ternary, eval_unary

logger = logging.getLogger(__name__)

# ---------------- Public API ----------------

def evaluate(ast: Program | Node, state: EvaluationState, context: Optional[Context]=None) -> Value:
    """Evaluate ``ast`` against ``state``.

    ``context`` is merged over ``state.context`` for this call only. Raises an
    ``ExpressionError`` subclass for malformed expressions; exceptions raised
    by host functions propagate unchanged.
    """
    if context is not None:
        state = state.with_context(context)

    body = ast.body if isinstance(ast, Program) else ast
    logger.debug("evaluating %s with %d variable(s)", node_type(body), len(state.context))

    return eval_node(body, state)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, state: EvaluationState) -> Value:
    try:
        return _eval_node_inner(n, state)
    except ExpressionError as e:
        raise e.rewrapped() from e


def _eval_node_inner(n: Node, state: EvaluationState) -> Value:
    match n:
        case Literal(value=value):
            return value
        case Identifier(name=name):
            return state.lookup_variable(name)
        case MemberExpression():
            return eval_member(n, state, eval_node)
        case CallExpression():
            return eval_call(n, state, eval_node)
        case BinaryExpression():
            return eval_binary(n, state, eval_node)
        case UnaryExpression():
            return eval_unary(n, state, eval_node)
        case ConditionalExpression():
            return eval_ternary(n, state, eval_node)
        case _:
            raise UnsupportedNodeType(f"Unsupported node type: {node_type(n)}")
