"""Phase 3: Parse the script block with the tree-sitter TypeScript grammar."""

from __future__ import annotations

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ParseError

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

FUNCTION_LIKE: set[str] = {
    "arrow_function",
    "function",
    "function_expression",
    "generator_function",
}


class Script:
    """A parsed script block. Node text is sliced from the UTF-8 source."""

    def __init__(self, source: bytes, tree: Tree):
        self.source: bytes = source
        self.tree: Tree = tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def statements(self) -> list[Node]:
        """Top-level statements, comments included, in source order."""
        return list(self.root.named_children)

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")


def named_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def child_of_type(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def is_function_like(node: Node | None) -> bool:
    return node is not None and node.type in FUNCTION_LIKE


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return None


def parse_script(text: str, file_path: str) -> Script:
    """Parse TypeScript source. Raises ParseError on the first syntax error."""
    source = text.encode("utf-8")
    parser = Parser(TS_LANGUAGE)
    tree = parser.parse(source)
    err = _first_error(tree.root_node)
    if err is not None:
        row, col = err.start_point
        what = "missing " + err.type if err.is_missing else "syntax error"
        raise ParseError(what + " in script block", file_path, row + 1, col)
    return Script(source, tree)
