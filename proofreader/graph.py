"""Module graph populated by the gather phase and read by the resolve phase."""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional

from .models import Diagnostic, ModuleRecord


class GraphFrozenError(RuntimeError):
    """Raised when the graph is written to after the gather phase ended."""


class ModuleGraph:
    """Canonical path -> :class:`ModuleRecord`, plus per-file gather results.

    Records are write-once. ``freeze`` marks the barrier between the gather
    and resolve phases; after it the graph only serves reads.
    """

    def __init__(self) -> None:
        self._records: Dict[str, ModuleRecord] = {}
        self._gather_diagnostics: Dict[str, List[Diagnostic]] = {}
        self._parse_methods: Dict[str, Optional[str]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def add_file(
        self,
        path: str,
        *,
        record: Optional[ModuleRecord] = None,
        diagnostics: Optional[List[Diagnostic]] = None,
        backend_id: Optional[str] = None,
    ) -> None:
        """Register the gather result for ``path``.

        ``record`` is ``None`` for files that failed every parser.
        """
        if self._frozen:
            raise GraphFrozenError(f"Module graph is frozen; cannot add {path}")
        if path in self._parse_methods:
            raise ValueError(f"Module {path} was already gathered")
        if record is not None:
            self._records[path] = record
        self._gather_diagnostics[path] = list(diagnostics or [])
        self._parse_methods[path] = backend_id

    def get(self, key: str) -> Optional[ModuleRecord]:
        return self._records.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def records(self) -> Iterator[ModuleRecord]:
        for path in sorted(self._records):
            yield self._records[path]

    def files(self) -> List[str]:
        """Every gathered path, parsed or not, in sorted order."""
        return sorted(self._parse_methods)

    def gather_diagnostics(self, path: str) -> List[Diagnostic]:
        return list(self._gather_diagnostics.get(path, []))

    @property
    def parse_methods(self) -> Mapping[str, Optional[str]]:
        return {path: self._parse_methods[path] for path in self.files()}


__all__ = ["GraphFrozenError", "ModuleGraph"]
