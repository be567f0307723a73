"""Base classes for parser backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class ParseError(Exception):
    """Raised by a backend that cannot produce a usable tree for the text."""

    def __init__(
        self,
        backend_id: str,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.backend_id = backend_id
        self.message = message
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{backend_id}: {message}{location}")


class ParserBackend(ABC):
    """Contract for backends that turn module text into a syntax tree."""

    #: Identifier used in configuration and in the parse-method summary.
    backend_id: str = ""
    #: Tree shape produced by ``parse``; selects the declaration extractor.
    family: str = ""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Return a tree for ``text`` or raise :class:`ParseError`."""
