"""Diagnostic dump of a parse tree, one line per node."""

from __future__ import annotations

from rich.console import Console

from TranslatorComponents.ParseTree import ParseNode

INDENT = "    "


def format_parse_tree(node: ParseNode, depth: int = 0) -> list[str]:
    """Return the indented `Rule: <kind>, Text: <text>` lines for `node` and its descendants.

    Args:
        node (ParseNode): Subtree to dump.
        depth (int): Nesting level of `node`; each level indents by four spaces.
    """
    lines = [f"{INDENT * depth}Rule: {node.kind.value}, Text: {node.text!r}"]
    for child in node.children:
        lines.extend(format_parse_tree(child, depth + 1))
    return lines


def print_parse_tree(node: ParseNode, depth: int = 0, console: Console | None = None) -> None:
    console = console or Console()
    for line in format_parse_tree(node, depth):
        console.print(line, markup=False, highlight=False, soft_wrap=True)
