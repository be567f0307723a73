"""Export/import extraction from tree-sitter JavaScript trees."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from ..models import DEFAULT_EXPORT
from .base import DeclarationCollector, DeclarationExtractor, Declarations

_NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
}
_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}


class TreeSitterExtractor(DeclarationExtractor):
    """Walks ``export_statement`` and ``import_statement`` nodes.

    Module statements are only legal at the top level, but a recovered tree
    may bury them inside ERROR nodes, so the whole tree is visited.
    """

    def extract(self, tree: Any, source: bytes) -> Declarations:
        collector = DeclarationCollector()
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "export_statement":
                self._collect_export(node, source, collector)
                continue
            if node.type == "import_statement":
                self._collect_import(node, source, collector)
                continue
            stack.extend(reversed(node.children))
        return collector.finish()

    def _collect_export(self, node, source: bytes, collector: DeclarationCollector) -> None:  # type: ignore[no-untyped-def]
        if any(child.type == "default" for child in node.children):
            collector.export(DEFAULT_EXPORT)
            return

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            for name in self._declared_names(declaration, source):
                collector.export(name)
            return

        for child in node.named_children:
            if child.type == "export_clause":
                for spec in child.named_children:
                    if spec.type != "export_specifier":
                        continue
                    external = spec.child_by_field_name("alias")
                    if external is None:
                        external = spec.child_by_field_name("name")
                    collector.export(_name_text(external, source))
            elif child.type == "namespace_export":
                names = [c for c in child.named_children if c.type in {"identifier", "string"}]
                if names:
                    collector.export(_name_text(names[-1], source))

    def _declared_names(self, declaration, source: bytes) -> List[str]:  # type: ignore[no-untyped-def]
        if declaration.type in _NAMED_DECLARATIONS:
            name_node = declaration.child_by_field_name("name")
            return [_node_text(name_node, source)] if name_node is not None else []
        if declaration.type in _VARIABLE_DECLARATIONS:
            names: List[str] = []
            for declarator in declaration.named_children:
                if declarator.type != "variable_declarator":
                    continue
                target = declarator.child_by_field_name("name")
                if target is not None:
                    names.extend(_bound_names(target, source))
            return names
        return []

    def _collect_import(self, node, source: bytes, collector: DeclarationCollector) -> None:  # type: ignore[no-untyped-def]
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return
        specifier = _name_text(source_node, source)
        if specifier is None:
            return

        names: List[str] = []
        namespace = False
        for child in node.named_children:
            if child.type != "import_clause":
                continue
            for part in child.named_children:
                if part.type == "identifier":
                    names.append(DEFAULT_EXPORT)
                elif part.type == "namespace_import":
                    namespace = True
                elif part.type == "named_imports":
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        imported = _name_text(spec.child_by_field_name("name"), source)
                        if imported:
                            names.append(imported)

        collector.import_(
            specifier,
            names,
            line=node.start_point[0] + 1,
            namespace=namespace,
        )


def _bound_names(node, source: bytes) -> Iterable[str]:  # type: ignore[no-untyped-def]
    if node.type in {"identifier", "shorthand_property_identifier_pattern"}:
        yield _node_text(node, source)
    elif node.type == "pair_pattern":
        value = node.child_by_field_name("value")
        if value is not None:
            yield from _bound_names(value, source)
    elif node.type in {"assignment_pattern", "object_assignment_pattern"}:
        left = node.child_by_field_name("left")
        if left is not None:
            yield from _bound_names(left, source)
    elif node.type in {"object_pattern", "array_pattern", "rest_pattern"}:
        for child in node.named_children:
            yield from _bound_names(child, source)


def _node_text(node, source: bytes) -> str:  # type: ignore[no-untyped-def]
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _name_text(node, source: bytes) -> Optional[str]:  # type: ignore[no-untyped-def]
    """Text of an identifier, or the contents of a string literal."""
    if node is None:
        return None
    text = _node_text(node, source)
    if node.type == "string" and len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text
