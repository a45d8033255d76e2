# lightbars/cli/console_output.py
"""
Renders parsed templates and check results to the console using rich.
"""
from typing import List, Tuple
from rich.console import Console as RichConsole
from rich.markup import escape
from rich.tree import Tree
import structlog

from lightbars.core.templating.nodes import Node, Template, TextNode, VariableNode, IfNode, EachNode

log = structlog.get_logger(__name__)

TEXT_PREVIEW_LENGTH = 40

def _text_preview(text: str) -> str:
    preview = text if len(text) <= TEXT_PREVIEW_LENGTH else text[:TEXT_PREVIEW_LENGTH - 3] + "..."
    return escape(repr(preview))

def _add_nodes(branch: Tree, nodes: List[Node]):
    for node in nodes:
        if isinstance(node, TextNode):
            branch.add(f"[dim]text[/dim] {_text_preview(node.text)}")
        elif isinstance(node, VariableNode):
            branch.add(f"[cyan]var[/cyan] {node.name}")
        elif isinstance(node, IfNode):
            if_branch = branch.add(f"[yellow]if[/yellow] {node.name}")
            _add_nodes(if_branch.add("then"), node.then_nodes)
            if node.else_nodes:
                _add_nodes(if_branch.add("else"), node.else_nodes)
        elif isinstance(node, EachNode):
            _add_nodes(branch.add(f"[magenta]each[/magenta] {node.name}"), node.body)

def build_ast_tree(template: Template) -> Tree:
    """Builds a rich Tree mirroring the template's node structure."""
    root = Tree(f"[bold]{escape(template.source_name)}[/bold]")
    _add_nodes(root, template.nodes)
    return root

def print_ast_tree(template: Template):
    RichConsole().print(build_ast_tree(template))

def print_check_results(results: List[Tuple[str, str]]):
    # results are (path, error message or "") pairs.
    console = RichConsole()
    for path, error in results:
        if error:
            console.print(f"[red]FAIL[/red] {escape(path)}: {escape(error)}")
        else:
            console.print(f"[green]ok[/green]   {escape(path)}")
    failures = sum(1 for _, error in results if error)
    log.debug("check_results_printed", checked=len(results), failures=failures)
