from __future__ import annotations

from rich.text import Text
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from TranslatorComponents.ParseTree import ParseNode
from TranslatorComponents.ProgressReport import CodeGenerationReport
from TranslatorComponents.Types import ParseNodeId, node_id

LABEL_TEXT_LIMIT = 40


def node_label(node: ParseNode) -> str:
    """One-line label for a parse node: its kind and a shortened source excerpt."""
    text = " ".join(node.text.split())
    if len(text) > LABEL_TEXT_LIMIT:
        text = text[: LABEL_TEXT_LIMIT - 3] + "..."
    return f"{node.kind.value}: {text}" if text else node.kind.value


class ParseTreeView(Tree):
    """Tree widget showing a JPP parse tree.

    Owns the parse node id -> TreeNode mapping so that code generation reports
    can move the cursor onto the node they were produced from.
    """

    def __init__(self, label: str = "Root", **kwargs):
        super().__init__(label, **kwargs)
        self._nodes_by_id: dict[ParseNodeId, TreeNode] = {}

    def reset_tree(self, root_label: str = "program") -> None:
        self.clear()
        self.root.label = root_label
        self.root.expand()
        self._nodes_by_id = {}

    @property
    def node_count(self) -> int:
        return len(self._nodes_by_id)

    def build_from_parse_tree(self, tree: ParseNode) -> None:
        """Builds the entire widget tree from a parse tree root.

        Args:
            tree: The `program` root node.
        """
        self.reset_tree(root_label=node_label(tree))
        self._nodes_by_id[node_id(tree)] = self.root
        self._build_subtree(tree, self.root)
        self.root.expand()
        self.action_scroll_home()

    def _build_subtree(self, parse_node: ParseNode, tree_node: TreeNode) -> None:
        for child in parse_node.children:
            child_tree_node = tree_node.add(Text(node_label(child), style="white"))
            self._nodes_by_id[node_id(child)] = child_tree_node
            child_tree_node.expand()
            self._build_subtree(child, child_tree_node)

    def apply_code_generation_report(self, report: CodeGenerationReport) -> None:
        if report.looked_at_tree_node_id is None:
            return
        node = self._nodes_by_id.get(report.looked_at_tree_node_id)
        if node is not None:
            self.move_cursor(node)
            self.scroll_to_node(node)
