"""Export/import extraction from ESTree-shaped trees (esprima)."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from ..models import DEFAULT_EXPORT
from .base import DeclarationCollector, DeclarationExtractor, Declarations


class EstreeExtractor(DeclarationExtractor):
    """Reads module declarations from ``Program.body``."""

    def extract(self, tree: Any, source: bytes) -> Declarations:
        collector = DeclarationCollector()
        for node in tree.body:
            kind = node.type
            if kind == "ExportNamedDeclaration":
                self._collect_named_export(node, collector)
            elif kind == "ExportDefaultDeclaration":
                collector.export(DEFAULT_EXPORT)
            elif kind == "ExportAllDeclaration":
                collector.export(_identifier(getattr(node, "exported", None)))
            elif kind == "ImportDeclaration":
                self._collect_import(node, collector)
        return collector.finish()

    def _collect_named_export(self, node: Any, collector: DeclarationCollector) -> None:
        declaration = getattr(node, "declaration", None)
        if declaration is not None:
            if declaration.type == "VariableDeclaration":
                for declarator in declaration.declarations:
                    for name in _bound_names(declarator.id):
                        collector.export(name)
            else:
                collector.export(_identifier(getattr(declaration, "id", None)))
        for spec in getattr(node, "specifiers", None) or []:
            collector.export(_identifier(spec.exported))

    def _collect_import(self, node: Any, collector: DeclarationCollector) -> None:
        names: List[str] = []
        namespace = False
        for spec in node.specifiers or []:
            if spec.type == "ImportNamespaceSpecifier":
                namespace = True
            elif spec.type == "ImportDefaultSpecifier":
                names.append(DEFAULT_EXPORT)
            else:
                imported = _identifier(getattr(spec, "imported", None))
                names.append(imported or DEFAULT_EXPORT)
        collector.import_(
            node.source.value,
            names,
            line=_line(node),
            namespace=namespace,
        )


def _bound_names(pattern: Any) -> Iterable[str]:
    if pattern is None:
        return
    kind = pattern.type
    if kind == "Identifier":
        yield pattern.name
    elif kind == "ObjectPattern":
        for prop in pattern.properties:
            target = prop.argument if prop.type == "RestElement" else prop.value
            yield from _bound_names(target)
    elif kind == "ArrayPattern":
        for element in pattern.elements:
            yield from _bound_names(element)
    elif kind == "AssignmentPattern":
        yield from _bound_names(pattern.left)
    elif kind == "RestElement":
        yield from _bound_names(pattern.argument)


def _identifier(node: Any) -> Optional[str]:
    if node is None:
        return None
    name = getattr(node, "name", None)
    if name is None:
        name = getattr(node, "value", None)
    return str(name) if name is not None else None


def _line(node: Any) -> Optional[int]:
    loc = getattr(node, "loc", None)
    start = getattr(loc, "start", None)
    return getattr(start, "line", None)
