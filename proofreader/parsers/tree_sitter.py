"""Tree-sitter powered JavaScript backends."""

from __future__ import annotations

from typing import Any, Optional

import tree_sitter_javascript
from tree_sitter import Language, Parser

from .base import ParseError, ParserBackend

TREE_SITTER_FAMILY = "tree-sitter"

JS_LANGUAGE = Language(tree_sitter_javascript.language())


class TreeSitterBackend(ParserBackend):
    """Parses with the tree-sitter JavaScript grammar.

    The grammar always recovers from syntax errors. In strict mode any tree
    containing ERROR or MISSING nodes is rejected; in recovering mode the
    best-effort tree is accepted as long as some top-level structure survived.
    """

    family = TREE_SITTER_FAMILY

    def __init__(self, *, recovering: bool = False) -> None:
        self.recovering = recovering
        self.backend_id = "tree-sitter-recovering" if recovering else "tree-sitter"

    def parse(self, text: str) -> Any:
        # Parser instances are not thread-safe; the gather phase may run in a pool.
        parser = Parser(JS_LANGUAGE)
        tree = parser.parse(text.encode("utf-8"))
        root = tree.root_node
        if root is None or root.type != "program":
            raise ParseError(self.backend_id, "grammar produced no program node")
        if not root.has_error:
            return tree

        error_node = _first_error(root)
        line, column = _location(error_node)
        if not self.recovering:
            kind = "missing token" if error_node is not None and error_node.is_missing else "syntax error"
            raise ParseError(self.backend_id, kind, line=line, column=column)

        named = root.named_children
        if named and all(child.type == "ERROR" for child in named):
            raise ParseError(
                self.backend_id, "no recoverable statements", line=line, column=column
            )
        return tree


def _first_error(node) -> Optional[Any]:  # type: ignore[no-untyped-def]
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _location(node) -> tuple[Optional[int], Optional[int]]:  # type: ignore[no-untyped-def]
    if node is None:
        return None, None
    row, column = node.start_point
    return row + 1, column + 1


__all__ = ["TreeSitterBackend", "TREE_SITTER_FAMILY", "JS_LANGUAGE"]
