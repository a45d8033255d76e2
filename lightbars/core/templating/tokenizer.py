# lightbars/core/templating/tokenizer.py
"""
Splits template source into a flat token stream.

Recognized tags (anything else between braces is plain text):
    {{name}}             variable
    {{#if name}}         conditional open
    {{#else}}            conditional else marker
    {{/if}}              conditional close
    {{#each name}}       loop open
    {{/each}}            loop close
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

class TokenKind(Enum):
    TEXT = "text"
    VARIABLE = "variable"
    IF_OPEN = "if_open"
    ELSE = "else"
    IF_CLOSE = "if_close"
    EACH_OPEN = "each_open"
    EACH_CLOSE = "each_close"

_NAME = r"[A-Za-z0-9_]+"
TAG_PATTERN = re.compile(
    r"\{\{(?:"
    rf"#if\s+(?P<if_name>{_NAME})"
    rf"|#each\s+(?P<each_name>{_NAME})"
    r"|(?P<else>#else)"
    r"|(?P<if_close>/if)"
    r"|(?P<each_close>/each)"
    rf"|(?P<var_name>{_NAME})"
    r")\}\}"
)

@dataclass(frozen=True)
class Token:
    kind: TokenKind
    raw: str
    offset: int
    line: int
    column: int
    name: Optional[str] = None

def _kind_and_name(match: "re.Match[str]") -> tuple:
    if match.group("if_name"): return TokenKind.IF_OPEN, match.group("if_name")
    if match.group("each_name"): return TokenKind.EACH_OPEN, match.group("each_name")
    if match.group("else"): return TokenKind.ELSE, None
    if match.group("if_close"): return TokenKind.IF_CLOSE, None
    if match.group("each_close"): return TokenKind.EACH_CLOSE, None
    return TokenKind.VARIABLE, match.group("var_name")

def tokenize(source: str) -> List[Token]:
    """Returns the tokens of `source` in order; concatenating their raw text reproduces it."""
    tokens: List[Token] = []
    line, line_start, pos = 1, 0, 0

    def advance_to(offset: int):
        nonlocal line, line_start
        newlines = source.count("\n", pos, offset)
        if newlines:
            line += newlines
            line_start = source.rfind("\n", pos, offset) + 1

    for match in TAG_PATTERN.finditer(source):
        start, end = match.span()
        if start > pos:
            tokens.append(Token(TokenKind.TEXT, source[pos:start], pos, line, pos - line_start + 1))
            advance_to(start)
            pos = start
        kind, name = _kind_and_name(match)
        tokens.append(Token(kind, match.group(0), start, line, start - line_start + 1, name))
        advance_to(end)
        pos = end
    if pos < len(source):
        tokens.append(Token(TokenKind.TEXT, source[pos:], pos, line, pos - line_start + 1))
    return tokens
