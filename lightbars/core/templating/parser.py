# lightbars/core/templating/parser.py
"""
Recursive-descent parser turning a token stream into a Template AST.

Every block open tag consumes tokens until its own close tag, so blocks of
either kind nest freely inside each other. Unbalanced or misplaced tags raise
TemplateSyntaxError instead of being passed through as text.
"""
from typing import List, Optional, Tuple
import structlog

from lightbars.config.settings import DEFAULT_MAX_NESTING_DEPTH
from lightbars.exceptions import TemplateSyntaxError, TemplateNestingError

from .nodes import Node, TextNode, VariableNode, IfNode, EachNode, Template
from .tokenizer import Token, TokenKind, tokenize

log = structlog.get_logger(__name__)

_BLOCK_TERMINATORS = (TokenKind.ELSE, TokenKind.IF_CLOSE, TokenKind.EACH_CLOSE)

class _Parser:
    def __init__(self, tokens: List[Token], source_name: str, max_depth: int):
        self.tokens = tokens
        self.source_name = source_name
        self.max_depth = max_depth
        self.pos = 0

    def _error(self, message: str, token: Token, error_cls=TemplateSyntaxError) -> TemplateSyntaxError:
        log.warning("template_syntax_error", source=self.source_name, line=token.line,
                    column=token.column, detail=message)
        return error_cls(message, self.source_name, token.line, token.column)

    def parse(self) -> Template:
        nodes, stop = self._parse_nodes(depth=0)
        if stop is not None:
            if stop.kind is TokenKind.ELSE:
                raise self._error("'{{#else}}' outside of an '{{#if}}' block", stop)
            raise self._error(f"'{stop.raw}' has no matching opening tag", stop)
        return Template(self.source_name, nodes)

    def _parse_nodes(self, depth: int) -> Tuple[List[Node], Optional[Token]]:
        """Consumes tokens until a block terminator (returned, already consumed) or end of input."""
        nodes: List[Node] = []
        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            if token.kind is TokenKind.TEXT:
                nodes.append(TextNode(token.raw))
            elif token.kind is TokenKind.VARIABLE:
                nodes.append(VariableNode(token.name, token.raw))
            elif token.kind is TokenKind.IF_OPEN:
                nodes.append(self._parse_if(token, depth + 1))
            elif token.kind is TokenKind.EACH_OPEN:
                nodes.append(self._parse_each(token, depth + 1))
            elif token.kind in _BLOCK_TERMINATORS:
                return nodes, token
        return nodes, None

    def _check_depth(self, opener: Token, depth: int):
        if depth > self.max_depth:
            raise self._error(f"block nesting deeper than {self.max_depth} levels", opener, TemplateNestingError)

    def _parse_if(self, opener: Token, depth: int) -> IfNode:
        self._check_depth(opener, depth)
        then_nodes, stop = self._parse_nodes(depth)
        else_nodes: List[Node] = []
        if stop is not None and stop.kind is TokenKind.ELSE:
            else_nodes, stop = self._parse_nodes(depth)
            if stop is not None and stop.kind is TokenKind.ELSE:
                raise self._error(f"second '{{{{#else}}}}' in '{opener.raw}' block", stop)
        if stop is None:
            raise self._error(f"'{opener.raw}' is never closed with '{{{{/if}}}}'", opener)
        if stop.kind is not TokenKind.IF_CLOSE:
            raise self._error(f"'{stop.raw}' closes '{opener.raw}' (line {opener.line}); expected '{{{{/if}}}}'", stop)
        return IfNode(opener.name, then_nodes, else_nodes)

    def _parse_each(self, opener: Token, depth: int) -> EachNode:
        self._check_depth(opener, depth)
        body, stop = self._parse_nodes(depth)
        if stop is None:
            raise self._error(f"'{opener.raw}' is never closed with '{{{{/each}}}}'", opener)
        if stop.kind is TokenKind.ELSE:
            raise self._error(f"'{{{{#else}}}}' directly inside '{opener.raw}' loop", stop)
        if stop.kind is not TokenKind.EACH_CLOSE:
            raise self._error(f"'{stop.raw}' closes '{opener.raw}' (line {opener.line}); expected '{{{{/each}}}}'", stop)
        return EachNode(opener.name, body)

def parse(source: str, source_name: str = "<string>", max_depth: int = DEFAULT_MAX_NESTING_DEPTH) -> Template:
    """Tokenizes and parses template source into a Template."""
    tokens = tokenize(source)
    template = _Parser(tokens, source_name, max_depth).parse()
    log.debug("template_parsed", source=source_name, tokens=len(tokens), top_level_nodes=len(template.nodes))
    return template
