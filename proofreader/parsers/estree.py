"""Esprima backend producing ESTree-shaped trees."""

from __future__ import annotations

from typing import Any

import esprima
from esprima.error_handler import Error as EsprimaError

from .base import ParseError, ParserBackend

ESTREE_FAMILY = "estree"


class EsprimaBackend(ParserBackend):
    """Parses ES2017 module syntax with esprima in tolerant mode.

    Tolerant mode records recoverable problems (for example strict-mode
    violations) on ``tree.errors`` and still raises for unrecoverable syntax.
    """

    backend_id = "esprima"
    family = ESTREE_FAMILY

    def __init__(self, *, tolerant: bool = True) -> None:
        self.tolerant = tolerant

    def parse(self, text: str) -> Any:
        try:
            return esprima.parseModule(text, {"tolerant": self.tolerant, "loc": True})
        except EsprimaError as exc:
            raise ParseError(
                self.backend_id,
                getattr(exc, "description", None) or str(exc),
                line=getattr(exc, "lineNumber", None),
                column=getattr(exc, "column", None),
            ) from exc
        except RecursionError as exc:
            raise ParseError(self.backend_id, "nesting too deep") from exc


__all__ = ["EsprimaBackend", "ESTREE_FAMILY"]
