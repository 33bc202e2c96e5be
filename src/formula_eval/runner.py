from __future__ import annotations

import json
import logging
import sys
import traceback
from collections.abc import Mapping
from pathlib import Path
from typing import List, Optional

from .config import debug_py_trace_enabled, setup_logging
from .evaluator import evaluate
from .parser import ParseError, parse
from .runtime import Context, ExpressionError, Functions, Value, create_state, is_sequence
from .eval.helpers import to_display_string
from .stdlib import stdlib_functions
from .tree import Program

logger = logging.getLogger(__name__)

def compile_source(src: str) -> Program:
    return parse(src)

def run(src: str, context: Optional[Context]=None, functions: Optional[Functions]=None, stdlib: bool=True) -> Value:
    """Parse and evaluate ``src`` in one step.

    Host ``functions`` shadow stdlib functions of the same name.
    """
    table = stdlib_functions() if stdlib else {}
    table.update(functions or {})

    state = create_state(context, table)
    return evaluate(compile_source(src), state)

def format_result(value: Value) -> str:
    if isinstance(value, Mapping) or is_sequence(value):
        return json.dumps(value, default=to_display_string)

    return to_display_string(value)

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data.strip():
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    try:
        if candidate.is_file():
            return candidate.read_text(encoding="utf-8")
    except OSError:
        pass

    return arg

def _load_context(value: str) -> dict:
    """Decode ``--context``: inline JSON, or ``@path`` to a JSON file."""
    text = value
    if value.startswith("@"):
        try:
            text = Path(value[1:]).read_text(encoding="utf-8")
        except OSError as exc:
            raise SystemExit(f"--context file could not be read: {exc}") from None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"--context is not valid JSON: {exc}") from None

    if not isinstance(data, dict):
        raise SystemExit("--context must decode to a JSON object")

    return data

def main(argv: Optional[List[str]]=None) -> None:
    context: dict = {}
    stdlib = True
    log_level = None
    arg = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token == "--no-stdlib":
            stdlib = False
            continue

        if token.startswith("--context="):
            context.update(_load_context(token.split("=", 1)[1]))
            continue

        if token == "--context":
            try:
                context.update(_load_context(next(it)))
            except StopIteration:
                raise SystemExit("--context flag requires a value") from None
            continue

        if token.startswith("--log-level="):
            log_level = token.split("=", 1)[1]
            continue

        if token == "--log-level":
            try:
                log_level = next(it)
            except StopIteration:
                raise SystemExit("--log-level flag requires a value") from None
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    setup_logging(log_level)
    source = _load_source(arg or "-")

    try:
        result = run(source, context, stdlib=stdlib)
    except (ParseError, ExpressionError) as exc:
        logger.debug("evaluation failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            traceback.print_exc()
        raise SystemExit(1) from None

    print(format_result(result))

if __name__ == "__main__":
    main()
