# lightbars/core/templating/nodes.py
"""AST node types produced by the parser and walked by the evaluator."""
from dataclasses import dataclass, field
from typing import List, Union

@dataclass(frozen=True)
class TextNode:
    text: str

@dataclass(frozen=True)
class VariableNode:
    name: str
    raw: str  # original tag text, emitted unchanged when the name is undefined

@dataclass(frozen=True)
class IfNode:
    name: str
    then_nodes: List["Node"] = field(default_factory=list)
    else_nodes: List["Node"] = field(default_factory=list)

@dataclass(frozen=True)
class EachNode:
    name: str
    body: List["Node"] = field(default_factory=list)

Node = Union[TextNode, VariableNode, IfNode, EachNode]

@dataclass(frozen=True)
class Template:
    source_name: str
    nodes: List[Node]
