"""Text and JSON renderings of an analysis result."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from .models import Severity
from .orchestrator import AnalysisResult

_MARKERS = {Severity.ERROR: "error", Severity.WARNING: "warning"}


def render_text(result: AnalysisResult, *, show_parsers: bool = False) -> str:
    """Human-readable report: one line per diagnostic, then a summary."""
    summary = result.summary()
    lines: List[str] = []
    for item in result.diagnostics:
        location = f"{item.file_path}:{item.line}" if item.line is not None else item.file_path
        lines.append(f"{location}: {_MARKERS[item.severity]}: {item.message} [{item.code}]")

    if lines:
        lines.append("")
    if summary.issues == 0:
        lines.append(f"No import/export issues found in {summary.files} files.")
    else:
        lines.append(
            f"Total issues found: {summary.issues} "
            f"({summary.errors} errors, {summary.warnings} warnings) in {summary.files} files."
        )

    if show_parsers and summary.parsers:
        lines.append("")
        lines.append("Parsing methods used:")
        for path, backend in summary.parsers.items():
            lines.append(f"  {path}: {backend}")
    return "\n".join(lines) + "\n"


def build_payload(result: AnalysisResult) -> Dict[str, Any]:
    summary = result.summary()
    return {
        "diagnostics": [item.to_dict() for item in result.diagnostics],
        "summary": {
            "files": summary.files,
            "modules": summary.modules,
            "errors": summary.errors,
            "warnings": summary.warnings,
        },
        "parsers": summary.parsers,
    }


def render_json(result: AnalysisResult) -> str:
    return json.dumps(build_payload(result), indent=2) + "\n"


__all__ = ["build_payload", "render_json", "render_text"]
