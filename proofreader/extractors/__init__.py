"""Declaration extraction over every supported tree family."""

from __future__ import annotations

from typing import Dict

from ..models import Parsed
from ..parsers.estree import ESTREE_FAMILY
from ..parsers.tree_sitter import TREE_SITTER_FAMILY
from .base import DeclarationExtractor, Declarations, TraversalFault
from .estree import EstreeExtractor
from .tree_sitter import TreeSitterExtractor

_EXTRACTORS: Dict[str, DeclarationExtractor] = {
    TREE_SITTER_FAMILY: TreeSitterExtractor(),
    ESTREE_FAMILY: EstreeExtractor(),
}


def extract(parsed: Parsed, file_path: str) -> Declarations:
    """Return exports and imports for ``parsed``.

    Any failure while walking the tree is raised as :class:`TraversalFault`.
    """
    extractor = _EXTRACTORS.get(parsed.family)
    if extractor is None:
        raise TraversalFault(file_path, f"no extractor for tree family '{parsed.family}'")
    try:
        return extractor.extract(parsed.tree, parsed.source)
    except TraversalFault:
        raise
    except Exception as exc:
        raise TraversalFault(
            file_path, f"unexpected {parsed.backend_id} tree shape: {exc!r}"
        ) from exc


__all__ = [
    "DeclarationExtractor",
    "Declarations",
    "EstreeExtractor",
    "TraversalFault",
    "TreeSitterExtractor",
    "extract",
]
