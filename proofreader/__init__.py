"""Cross-file import/export checking for JavaScript module projects."""

from .models import Diagnostic, ImportRequest, ModuleRecord, Severity, SourceFile
from .orchestrator import AnalysisResult, Orchestrator, check_directory

__all__ = [
    "AnalysisResult",
    "Diagnostic",
    "ImportRequest",
    "ModuleRecord",
    "Orchestrator",
    "Severity",
    "SourceFile",
    "check_directory",
]
