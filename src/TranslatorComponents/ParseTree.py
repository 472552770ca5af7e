from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    PROGRAM = "program"
    STATEMENT = "statement"
    ASSIGNMENT = "assignment"
    DECLARATION = "declaration"
    EXPRESSION = "expression"
    FUNCTION_CALL = "function_call"
    PARAMS_LIST = "params_list"
    IF_STATEMENT = "if_statement"
    WHILE_LOOP = "while_loop"
    BLOCK = "block"
    BOOLEAN_EXPRESSION = "boolean_expression"
    COMPARISON_OPERATOR = "comparison_operator"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    TYPE = "type"
    END_OF_INPUT = "end_of_input"


@dataclass(frozen=True)
class ParseNode:
    """
    Class representing one node of a JPP parse tree.

    Attributes:
        kind (NodeKind): The grammar rule that produced the node.
        text (str): The exact source substring matched by the rule.
        children (tuple[ParseNode, ...]): Child nodes, in source order.
        line (int): 1-based line the match starts on, 0 when the match is empty.
    """

    kind: NodeKind
    text: str
    children: tuple[ParseNode, ...] = ()
    line: int = 0

    def walk(self) -> Iterator[ParseNode]:
        """Yield this node and all of its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def count_nodes(self) -> int:
        return sum(1 for _ in self.walk())

    def __repr__(self) -> str:
        return f"ParseNode({self.kind.value}, {self.text!r}, {len(self.children)} children, line {self.line})"
