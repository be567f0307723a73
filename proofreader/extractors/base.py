"""Shared declaration types for the per-family extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Optional, Sequence, Set, Tuple

from ..models import ImportRequest


class TraversalFault(Exception):
    """Raised when a successfully parsed tree has a shape the extractor cannot walk."""

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"{file_path}: {reason}")


@dataclass(frozen=True)
class Declarations:
    """Exports and imports of one file."""

    exported_symbols: FrozenSet[str]
    import_requests: Tuple[ImportRequest, ...]


@dataclass
class DeclarationCollector:
    """Accumulates exports as a set and imports in statement order."""

    exports: Set[str] = field(default_factory=set)
    imports: List[ImportRequest] = field(default_factory=list)

    def export(self, name: Optional[str]) -> None:
        if name:
            self.exports.add(name)

    def import_(
        self,
        specifier: str,
        names: Sequence[str],
        *,
        line: Optional[int] = None,
        namespace: bool = False,
    ) -> None:
        self.imports.append(
            ImportRequest(
                raw_specifier=specifier,
                imported_names=tuple(names),
                line=line,
                namespace=namespace,
            )
        )

    def finish(self) -> Declarations:
        return Declarations(
            exported_symbols=frozenset(self.exports),
            import_requests=tuple(self.imports),
        )


class DeclarationExtractor(ABC):
    """Contract for walking one tree family."""

    @abstractmethod
    def extract(self, tree: Any, source: bytes) -> Declarations:
        """Return the exports and imports declared in ``tree``."""
