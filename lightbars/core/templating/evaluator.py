# lightbars/core/templating/evaluator.py
"""
Walks a parsed template against a scope chain and produces output text.

Scopes are collections.ChainMap instances. A loop element gets a child scope
holding {"item": element} in front of the element's own fields, in front of
the enclosing scope, so element fields shadow outer names and the caller's
mapping is never written to.
"""
from collections import ChainMap
from collections.abc import Mapping
from typing import Any, List
import structlog

from lightbars.util import is_sequence, to_text

from .nodes import Node, TextNode, VariableNode, IfNode, EachNode

log = structlog.get_logger(__name__)

ITEM_KEY = "item"

def substitute_variable(node: VariableNode, scope: ChainMap) -> str:
    """String form of the bound value; the literal tag when the name is unbound or None."""
    value = scope.get(node.name)
    if value is None:
        return node.raw
    return to_text(value)

def evaluate_conditional(node: IfNode, scope: ChainMap, out: List[str]):
    branch = node.then_nodes if scope.get(node.name) else node.else_nodes
    _render_into(branch, scope, out)

def element_scope(scope: ChainMap, element: Any) -> ChainMap:
    element_fields = element if isinstance(element, Mapping) else {}
    return scope.new_child(element_fields).new_child({ITEM_KEY: element})

def evaluate_loop(node: EachNode, scope: ChainMap, out: List[str]):
    sequence = scope.get(node.name)
    if not is_sequence(sequence):
        if sequence is not None:
            log.debug("loop_over_non_sequence_skipped", name=node.name, value_type=type(sequence).__name__)
        return
    for element in sequence:
        _render_into(node.body, element_scope(scope, element), out)

def _render_into(nodes: List[Node], scope: ChainMap, out: List[str]):
    for node in nodes:
        if isinstance(node, TextNode):
            out.append(node.text)
        elif isinstance(node, VariableNode):
            out.append(substitute_variable(node, scope))
        elif isinstance(node, IfNode):
            evaluate_conditional(node, scope, out)
        elif isinstance(node, EachNode):
            evaluate_loop(node, scope, out)
        else:
            raise TypeError(f"unknown template node: {node!r}")

def render_nodes(nodes: List[Node], context: Mapping[str, Any]) -> str:
    out: List[str] = []
    _render_into(nodes, ChainMap(context), out)
    return "".join(out)
