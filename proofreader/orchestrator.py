"""Two-phase analysis: gather every file, then resolve every import."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .config import DEFAULT_EXTENSIONS, ConfigError, ProofreaderConfig, load_config
from .extractors import TraversalFault, extract
from .graph import ModuleGraph
from .logging import file_logger, get_logger
from .models import (
    AnalysisSummary,
    Diagnostic,
    Failed,
    ModuleRecord,
    Severity,
    SourceFile,
    summarize,
)
from .parsers import ParserChain, build_backends
from .repo_scanner import ProjectScanner
from .reporter import DiagnosticReporter
from .resolver import PathResolver

PARSE_FAILURE = "parse-failure"
TRAVERSAL_FAULT = "traversal-fault"


@dataclass(frozen=True)
class GatherResult:
    """Outcome of parsing and extracting one file."""

    path: str
    record: Optional[ModuleRecord]
    diagnostics: List[Diagnostic] = field(default_factory=list)
    backend_id: Optional[str] = None


@dataclass
class AnalysisResult:
    """Diagnostics for one run together with the graph they were computed from."""

    graph: ModuleGraph
    diagnostics: List[Diagnostic]

    @property
    def has_errors(self) -> bool:
        return any(item.severity is Severity.ERROR for item in self.diagnostics)

    def summary(self) -> AnalysisSummary:
        errors, warnings = summarize(self.diagnostics)
        parsers = {
            path: backend or "failed" for path, backend in self.graph.parse_methods.items()
        }
        return AnalysisSummary(
            files=len(parsers),
            modules=len(self.graph),
            errors=errors,
            warnings=warnings,
            parsers=parsers,
        )


class Orchestrator:
    """Owns the module graph for the duration of a single analysis run."""

    def __init__(
        self,
        chain: ParserChain | None = None,
        resolver: PathResolver | None = None,
        *,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        workers: int = 4,
        scanner: ProjectScanner | None = None,
    ) -> None:
        self.chain = chain or ParserChain(build_backends())
        self.resolver = resolver or PathResolver(extensions=extensions)
        self.reporter = DiagnosticReporter(self.resolver)
        self.extensions = tuple(ext.lower() for ext in self.resolver.extensions)
        self.workers = workers
        self.scanner = scanner or ProjectScanner(self.extensions)
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(cls, config: ProofreaderConfig) -> "Orchestrator":
        resolver = PathResolver(config.default_extension, config.extensions)
        return cls(
            ParserChain(build_backends(config.parsers)),
            resolver,
            workers=config.workers,
            scanner=ProjectScanner(resolver.extensions, exclude_paths=config.exclude_paths),
        )

    def run_check(self, path: str) -> AnalysisResult:
        """Scan the directory at ``path`` and analyze every module in it."""
        root = Path(path).expanduser().resolve()
        self.logger.info("Checking %s", root)
        files = self.scanner.scan(str(root))
        self.logger.debug("Scanner discovered %d module files", len(files))
        return self.analyze(files)

    def analyze(self, files: Iterable[SourceFile]) -> AnalysisResult:
        sources = self._select_sources(files)
        graph = ModuleGraph()

        for result in self._gather(sources):
            graph.add_file(
                result.path,
                record=result.record,
                diagnostics=result.diagnostics,
                backend_id=result.backend_id,
            )
        graph.freeze()
        self.logger.debug("Gather phase complete: %d of %d files parsed", len(graph), len(sources))

        diagnostics = self.reporter.report(graph)
        return AnalysisResult(graph=graph, diagnostics=diagnostics)

    def gather_file(self, source: SourceFile) -> GatherResult:
        """Parse and extract one file; reads nothing but ``source``."""
        log = file_logger(self.logger, source.path)
        outcome = self.chain.parse(source.text)
        if isinstance(outcome, Failed):
            log.warning("Cannot parse with any parser: %s", outcome.error)
            if outcome.attempts:
                message = f"cannot parse with any parser ({', '.join(outcome.attempts)}): {outcome.error}"
            else:
                message = f"cannot parse: {outcome.error}"
            return GatherResult(
                path=source.path,
                record=None,
                diagnostics=[
                    Diagnostic(
                        severity=Severity.ERROR,
                        file_path=source.path,
                        message=message,
                        code=PARSE_FAILURE,
                        line=getattr(outcome.error, "line", None),
                    )
                ],
            )

        try:
            declarations = extract(outcome, source.path)
        except TraversalFault as exc:
            log.warning("Skipping declarations: %s", exc.reason)
            return GatherResult(
                path=source.path,
                record=ModuleRecord(
                    path=source.path,
                    exported_symbols=frozenset(),
                    import_requests=(),
                    backend_id=outcome.backend_id,
                ),
                diagnostics=[
                    Diagnostic(
                        severity=Severity.WARNING,
                        file_path=source.path,
                        message=f"exports and imports could not be read: {exc.reason}",
                        code=TRAVERSAL_FAULT,
                    )
                ],
                backend_id=outcome.backend_id,
            )

        record = ModuleRecord(
            path=source.path,
            exported_symbols=declarations.exported_symbols,
            import_requests=declarations.import_requests,
            backend_id=outcome.backend_id,
        )
        return GatherResult(path=source.path, record=record, backend_id=outcome.backend_id)

    def _select_sources(self, files: Iterable[SourceFile]) -> List[SourceFile]:
        selected: Dict[str, SourceFile] = {}
        for source in files:
            if source.kind(self.extensions) is None:
                continue
            if source.path in selected:
                self.logger.warning("Ignoring duplicate entry for %s", source.path)
                continue
            selected[source.path] = source
        return [selected[path] for path in sorted(selected)]

    def _gather(self, sources: List[SourceFile]) -> List[GatherResult]:
        if self.workers <= 1 or len(sources) <= 1:
            return [self.gather_file(source) for source in sources]
        # Leaving the executor block waits for every submitted file.
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(self.gather_file, source) for source in sources]
        return [future.result() for future in futures]


def check_directory(
    path: str,
    *,
    workers: int | None = None,
    parsers: Sequence[str] | None = None,
) -> AnalysisResult:
    """Load ``.proofreader.yml`` from ``path`` and run the analysis.

    ``workers`` and ``parsers`` override the configured values.
    """
    root = Path(path).expanduser().resolve()
    if not root.exists():
        raise FileNotFoundError(f"Project path not found: {path}")
    if not root.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {path}")
    config = load_config(root)
    if workers is not None:
        if workers < 1:
            raise ConfigError("workers must be a positive integer")
        config.workers = workers
    if parsers:
        config.parsers = list(parsers)
    return Orchestrator.from_config(config).run_check(str(root))


__all__ = [
    "AnalysisResult",
    "GatherResult",
    "Orchestrator",
    "PARSE_FAILURE",
    "TRAVERSAL_FAULT",
    "check_directory",
]
