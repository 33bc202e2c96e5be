"""prompt_toolkit lexer for live formula highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from lark.exceptions import LexError
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .parser import tokenize

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "constant": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "function": "bold ansiyellow",
    "operator": "",
    "punctuation": "",
    "error": "bold ansired",
}

_KEYWORDS = {"true": "constant", "false": "constant", "null": "constant"}

# Token type → highlight group. Anonymous punctuation terminals fall through to "punctuation".
_TT_GROUP = {
    "NUMBER": "number",
    "STRING": "string",
    "NAME": "identifier",
    "OR": "operator",
    "AND": "operator",
    "EQ_OP": "operator",
    "CMP_OP": "operator",
    "PLUS": "operator",
    "MINUS": "operator",
    "MUL_OP": "operator",
    "BANG": "operator",
}


def _line_styles(line: str) -> StyleAndTextTuples:
    out: StyleAndTextTuples = []
    pos = 0
    after_at = False

    try:
        for tok in tokenize(line):
            start = tok.start_pos or 0
            if start > pos:
                out.append(("", line[pos:start]))

            text = str(tok)
            group = _KEYWORDS.get(text) if tok.type != "STRING" else None
            if group is None:
                group = _TT_GROUP.get(tok.type, "punctuation")
            if after_at and tok.type == "NAME":
                group = "function"
            after_at = text == "@"

            out.append((GROUP_STYLE[group], text))
            pos = start + len(text)
    except LexError:
        out.append((GROUP_STYLE["error"], line[pos:]))
        return out

    if pos < len(line):
        out.append(("", line[pos:]))

    return out


class FormulaLexer(Lexer):
    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno >= len(lines):
                return []
            return _line_styles(lines[lineno])

        return get_line
