"""Core data models shared across proofreader components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

SCRIPT_MODULE = "script-module"
DEFAULT_EXPORT = "default"


@dataclass(frozen=True)
class SourceFile:
    """A project-relative file and its text, as supplied by the enumerator."""

    path: str
    text: str

    def kind(self, extensions: Sequence[str]) -> Optional[str]:
        suffix = PurePosixPath(self.path).suffix.lower()
        return SCRIPT_MODULE if suffix in extensions else None


@dataclass(frozen=True)
class Parsed:
    """Successful parse from one backend."""

    backend_id: str
    family: str
    tree: Any
    source: bytes


@dataclass(frozen=True)
class Failed:
    """Every backend rejected the text; ``error`` is the last failure."""

    error: Exception
    attempts: Tuple[str, ...] = ()


ParseOutcome = Union[Parsed, Failed]


@dataclass(frozen=True)
class ImportRequest:
    """One import statement: the specifier and the names it asks for."""

    raw_specifier: str
    imported_names: Tuple[str, ...] = ()
    line: Optional[int] = None
    namespace: bool = False


@dataclass(frozen=True)
class ModuleRecord:
    """Exports and imports for one successfully parsed file."""

    path: str
    exported_symbols: FrozenSet[str]
    import_requests: Tuple[ImportRequest, ...]
    backend_id: Optional[str] = None


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """Finding produced by the gather or resolve phase."""

    severity: Severity
    file_path: str
    message: str
    code: str
    symbol_name: Optional[str] = None
    resolved_module_path: Optional[str] = None
    raw_specifier: Optional[str] = None
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "severity": self.severity.value,
            "file": self.file_path,
            "code": self.code,
            "message": self.message,
        }
        if self.symbol_name is not None:
            payload["symbol"] = self.symbol_name
        if self.resolved_module_path is not None:
            payload["module"] = self.resolved_module_path
        if self.raw_specifier is not None:
            payload["specifier"] = self.raw_specifier
        if self.line is not None:
            payload["line"] = self.line
        return payload


@dataclass
class AnalysisSummary:
    """Counts rendered alongside diagnostics."""

    files: int = 0
    modules: int = 0
    errors: int = 0
    warnings: int = 0
    parsers: Dict[str, str] = field(default_factory=dict)

    @property
    def issues(self) -> int:
        return self.errors + self.warnings


def summarize(diagnostics: List[Diagnostic]) -> Tuple[int, int]:
    errors = sum(1 for item in diagnostics if item.severity is Severity.ERROR)
    return errors, len(diagnostics) - errors
