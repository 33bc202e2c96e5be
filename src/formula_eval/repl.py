"""Interactive REPL for formula expressions, powered by prompt_toolkit."""

from __future__ import annotations

import os
import re
import sys
import traceback
from typing import Dict

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from .config import DEBUG_PY_TRACE_ENV, debug_py_trace_enabled, setup_logging
from .evaluator import evaluate
from .parser import ParseError, parse
from .repl_highlight import FormulaLexer
from .runner import format_result
from .runtime import EvaluationState, ExpressionError, Value, create_state
from .stdlib import stdlib_functions

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")
_NAME_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/vars": ("List bound variables", ""),
    "/set": ("Bind a variable to the value of an expression", "NAME EXPR"),
    "/unset": ("Remove a bound variable", "NAME"),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset variables and functions", ""),
}


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=f"{desc} {hint}".rstrip(),
                )


def _fresh_state() -> EvaluationState:
    return create_state({}, stdlib_functions())


def _eval_text(text: str, state: EvaluationState) -> Value:
    return evaluate(parse(text), state)


def _report(exc: Exception) -> None:
    print(f"Error: {exc}", file=sys.stderr)
    if debug_py_trace_enabled():
        print("\nPython traceback:", file=sys.stderr)
        traceback.print_exception(exc, file=sys.stderr)


def _handle_slash(line: str, state_box: list[EvaluationState]) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/vars":
        context = state_box[0].context
        if not context:
            print("(no variables)")
        for name in sorted(context):
            print(f"{name} = {format_result(context[name])}")
        return True

    if cmd == "/set":
        name, _, expr = arg.partition(" ")
        if not _NAME_RE.fullmatch(name) or not expr.strip():
            print("Usage: /set NAME EXPR", file=sys.stderr)
            return True

        try:
            value = _eval_text(expr, state_box[0])
        except (ParseError, ExpressionError) as exc:
            _report(exc)
            return True

        state_box[0] = state_box[0].with_context({name: value})
        print(f"{name} = {format_result(value)}")
        return True

    if cmd == "/unset":
        if arg not in state_box[0].context:
            print(f"Not bound: {arg}", file=sys.stderr)
            return True

        context: Dict[str, Value] = dict(state_box[0].context)
        del context[arg]
        state_box[0] = create_state(context, state_box[0].functions)
        return True

    if cmd == "/py-traceback":
        if arg.lower() in ("on", "1", "true", "yes"):
            os.environ[DEBUG_PY_TRACE_ENV] = "1"
        elif arg.lower() in ("off", "0", "false", "no"):
            os.environ.pop(DEBUG_PY_TRACE_ENV, None)
        elif arg == "":
            # Toggle.
            if debug_py_trace_enabled():
                os.environ.pop(DEBUG_PY_TRACE_ENV, None)
            else:
                os.environ[DEBUG_PY_TRACE_ENV] = "1"
        else:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        state = "on" if debug_py_trace_enabled() else "off"
        print(f"Python traceback: {state}")
        return True

    if cmd == "/reset":
        state_box[0] = _fresh_state()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    setup_logging()
    # Use a mutable box so /set and /reset can swap the state.
    state_box: list[EvaluationState] = [_fresh_state()]

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=FormulaLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
    )

    print("formula repl: Ctrl-D to exit, / for commands")

    while True:
        try:
            text = session.prompt(">>> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        # Slash command?
        if _handle_slash(text, state_box):
            continue

        try:
            result = _eval_text(text, state_box[0])
        except (ParseError, ExpressionError) as exc:
            _report(exc)
            continue

        print(format_result(result))


if __name__ == "__main__":
    repl()
