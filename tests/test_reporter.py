"""Tests for the resolve-phase diagnostic reporter."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

import pytest

from proofreader.graph import ModuleGraph
from proofreader.models import Diagnostic, ImportRequest, ModuleRecord, Severity
from proofreader.reporter import (
    MODULE_NOT_FOUND,
    SYMBOL_NOT_EXPORTED,
    UNRESOLVABLE_PATH,
    DiagnosticReporter,
)

Spec = Tuple[Sequence[str], Sequence[Tuple[str, Sequence[str]]]]


def _graph(modules: Dict[str, Spec]) -> ModuleGraph:
    graph = ModuleGraph()
    for path, (exports, imports) in modules.items():
        graph.add_file(
            path,
            record=ModuleRecord(
                path=path,
                exported_symbols=frozenset(exports),
                import_requests=tuple(
                    ImportRequest(specifier, tuple(names)) for specifier, names in imports
                ),
            ),
        )
    graph.freeze()
    return graph


def test_reports_unexported_symbol_once() -> None:
    graph = _graph(
        {
            "a.js": (["foo"], []),
            "b.js": ([], [("./a.js", ["foo", "bar"])]),
        }
    )

    diagnostics = DiagnosticReporter().report(graph)

    assert len(diagnostics) == 1
    finding = diagnostics[0]
    assert finding.code == SYMBOL_NOT_EXPORTED
    assert finding.severity is Severity.ERROR
    assert finding.file_path == "b.js"
    assert finding.symbol_name == "bar"
    assert finding.resolved_module_path == "a.js"
    assert finding.raw_specifier == "./a.js"
    assert "'bar'" in finding.message and "./a.js" in finding.message


def test_missing_module_suppresses_symbol_checks() -> None:
    graph = _graph({"b.js": ([], [("./missing", ["x", "y"])])})

    diagnostics = DiagnosticReporter().report(graph)

    assert [item.code for item in diagnostics] == [MODULE_NOT_FOUND]
    assert diagnostics[0].resolved_module_path == "missing.js"
    assert diagnostics[0].symbol_name is None


def test_external_imports_are_exempt() -> None:
    graph = _graph(
        {
            "react.js": ([], []),
            "app.js": ([], [("react", ["useState"]), ("lodash/fp", ["map"])]),
        }
    )
    assert DiagnosticReporter().report(graph) == []


def test_escaping_specifier_is_reported_as_unresolvable() -> None:
    graph = _graph({"src/app.js": ([], [("../../up.js", ["x"])])})

    diagnostics = DiagnosticReporter().report(graph)

    assert [item.code for item in diagnostics] == [UNRESOLVABLE_PATH]
    assert diagnostics[0].raw_specifier == "../../up.js"


def test_import_of_project_root_is_reported_as_unresolvable() -> None:
    graph = _graph({"index.js": ([], [(".", ["x"])])})

    diagnostics = DiagnosticReporter().report(graph)

    assert [item.code for item in diagnostics] == [UNRESOLVABLE_PATH]
    assert diagnostics[0].resolved_module_path is None
    assert "does not name a module file" in diagnostics[0].message


def test_namespace_and_side_effect_imports_only_require_module() -> None:
    graph = _graph(
        {
            "lib.js": ([], []),
            "main.js": ([], [("./lib", []), ("./gone", [])]),
        }
    )

    diagnostics = DiagnosticReporter().report(graph)

    assert [(item.code, item.resolved_module_path) for item in diagnostics] == [
        (MODULE_NOT_FOUND, "gone.js")
    ]


def test_diagnostics_are_ordered_by_file_statement_and_symbol() -> None:
    graph = _graph(
        {
            "z.js": ([], [("./lib", ["q"])]),
            "lib.js": (["ok"], []),
            "a.js": ([], [("./lib", ["m", "ok", "n"]), ("./nope", ["x"])]),
        }
    )

    diagnostics = DiagnosticReporter().report(graph)

    assert [(item.file_path, item.code, item.symbol_name) for item in diagnostics] == [
        ("a.js", SYMBOL_NOT_EXPORTED, "m"),
        ("a.js", SYMBOL_NOT_EXPORTED, "n"),
        ("a.js", MODULE_NOT_FOUND, None),
        ("z.js", SYMBOL_NOT_EXPORTED, "q"),
    ]


def test_gather_diagnostics_come_first_for_each_file() -> None:
    graph = ModuleGraph()
    warning = Diagnostic(Severity.WARNING, "a.js", "could not read", "traversal-fault")
    graph.add_file(
        "a.js",
        record=ModuleRecord("a.js", frozenset(), (ImportRequest("./b", ("x",)),)),
        diagnostics=[warning],
    )
    graph.freeze()

    diagnostics = DiagnosticReporter().report(graph)

    assert diagnostics[0] == warning
    assert diagnostics[1].code == MODULE_NOT_FOUND


def test_report_is_idempotent() -> None:
    graph = _graph(
        {
            "a.js": (["foo"], [("./b", ["nothing"])]),
            "b.js": ([], [("./a", ["foo", "bar"]), ("./c", ["x"])]),
        }
    )
    reporter = DiagnosticReporter()
    assert reporter.report(graph) == reporter.report(graph)


def test_report_requires_frozen_graph() -> None:
    with pytest.raises(RuntimeError):
        DiagnosticReporter().report(ModuleGraph())
