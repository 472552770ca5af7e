"""Source text to parse tree.

The grammar lives in `jpp.lark` next to this module. Lark builds the raw tree;
this module projects it onto immutable `ParseNode`s whose text is the exact
source slice each rule matched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lark import Lark, Tree
from lark.exceptions import UnexpectedInput

from TranslatorComponents.ParseTree import NodeKind, ParseNode

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name("jpp.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text(encoding="utf-8")

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    lexer="basic",
    start="program",
    propagate_positions=True,
    maybe_placeholders=False,
)


class ParsingError(Exception):
    """Raised when source text does not match the JPP grammar."""

    pass


def parse_source(source: str, filename: str = "<source>") -> ParseNode:
    """Parse JPP source text into a single `program` tree.

    Args:
        source (str): The complete text of one source file.
        filename (str): Used in error messages only.

    Returns:
        ParseNode: The `program` root; its last child is an `end_of_input` node.

    Raises:
        ParsingError: If the text does not parse, or does not yield exactly one program tree.
    """
    try:
        raw_tree = _PARSER.parse(source)
    except UnexpectedInput as error:
        raise ParsingError(
            f"{filename}: line {error.line}, column {error.column}: {error}"
        ) from error

    if not isinstance(raw_tree, Tree) or raw_tree.data != "program":
        raise ParsingError(f"{filename}: expected a single program tree")

    statements = tuple(_to_parse_node(child, source) for child in _subtrees(raw_tree))
    end_of_input = ParseNode(NodeKind.END_OF_INPUT, "", (), source.count("\n") + 1)
    logger.debug("Parsed %s: %d top-level statements", filename, len(statements))
    return ParseNode(NodeKind.PROGRAM, source, statements + (end_of_input,), 1)


def parse_file(path: str | Path) -> ParseNode:
    path = Path(path)
    return parse_source(path.read_text(encoding="utf-8"), filename=str(path))


def _subtrees(tree: Tree) -> list[Tree]:
    # Named terminals stay behind as Tokens; their text is already covered by the rule's span.
    return [child for child in tree.children if isinstance(child, Tree)]


def _to_parse_node(tree: Tree, source: str) -> ParseNode:
    meta = tree.meta
    if meta.empty:
        text, line = "", 0
    else:
        text, line = source[meta.start_pos : meta.end_pos], meta.line
    children = tuple(_to_parse_node(child, source) for child in _subtrees(tree))
    return ParseNode(NodeKind(str(tree.data)), text, children, line)
