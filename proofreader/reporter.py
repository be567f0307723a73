"""Cross-check of every import against the completed module graph."""

from __future__ import annotations

from typing import List

from .graph import ModuleGraph
from .logging import get_logger
from .models import Diagnostic, ImportRequest, Severity
from .resolver import EXTERNAL, PathResolver, UnresolvablePathError

MODULE_NOT_FOUND = "module-not-found"
SYMBOL_NOT_EXPORTED = "symbol-not-exported"
UNRESOLVABLE_PATH = "unresolvable-path"


class DiagnosticReporter:
    """Produces diagnostics from a frozen :class:`ModuleGraph`.

    Output is ordered by file path, then import statement, then imported
    name, and is identical across runs on the same graph.
    """

    def __init__(self, resolver: PathResolver | None = None) -> None:
        self.resolver = resolver or PathResolver()
        self.logger = get_logger("reporter")

    def report(self, graph: ModuleGraph) -> List[Diagnostic]:
        if not graph.frozen:
            raise RuntimeError("Imports can only be resolved after the gather phase completes")

        diagnostics: List[Diagnostic] = []
        for path in graph.files():
            diagnostics.extend(graph.gather_diagnostics(path))
            record = graph.get(path)
            if record is None:
                continue
            for request in record.import_requests:
                diagnostics.extend(self.check_import(graph, path, request))
        self.logger.debug("Resolve phase produced %d diagnostics", len(diagnostics))
        return diagnostics

    def check_import(
        self, graph: ModuleGraph, path: str, request: ImportRequest
    ) -> List[Diagnostic]:
        specifier = request.raw_specifier
        try:
            resolved = self.resolver.resolve(path, specifier)
        except UnresolvablePathError as exc:
            return [
                Diagnostic(
                    severity=Severity.ERROR,
                    file_path=path,
                    message=f"module '{specifier}' cannot be resolved: {exc}",
                    code=UNRESOLVABLE_PATH,
                    raw_specifier=specifier,
                    line=request.line,
                )
            ]
        if resolved is EXTERNAL:
            return []

        target = graph.get(resolved)
        if target is None:
            return [
                Diagnostic(
                    severity=Severity.ERROR,
                    file_path=path,
                    message=f"module '{specifier}' not found ({resolved})",
                    code=MODULE_NOT_FOUND,
                    resolved_module_path=resolved,
                    raw_specifier=specifier,
                    line=request.line,
                )
            ]

        findings: List[Diagnostic] = []
        for name in request.imported_names:
            if name in target.exported_symbols:
                continue
            findings.append(
                Diagnostic(
                    severity=Severity.ERROR,
                    file_path=path,
                    message=(
                        f"imports '{name}' from '{specifier}' (resolved: {resolved}) "
                        "which is not exported"
                    ),
                    code=SYMBOL_NOT_EXPORTED,
                    symbol_name=name,
                    resolved_module_path=resolved,
                    raw_specifier=specifier,
                    line=request.line,
                )
            )
        return findings


__all__ = [
    "DiagnosticReporter",
    "MODULE_NOT_FOUND",
    "SYMBOL_NOT_EXPORTED",
    "UNRESOLVABLE_PATH",
]
