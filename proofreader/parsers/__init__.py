"""Parser backends, discovery utilities, and the fallback chain."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence

from ..logging import get_logger
from ..models import Failed, ParseOutcome, Parsed
from .base import ParseError, ParserBackend
from .estree import ESTREE_FAMILY, EsprimaBackend
from .tree_sitter import TREE_SITTER_FAMILY, TreeSitterBackend

_ENTRY_POINT_GROUP = "proofreader.backends"

_BUILTIN_FACTORIES: dict[str, Callable[[], ParserBackend]] = {
    "tree-sitter": TreeSitterBackend,
    "esprima": EsprimaBackend,
    "tree-sitter-recovering": lambda: TreeSitterBackend(recovering=True),
}

logger = get_logger("parsers")


class ParserChain:
    """Tries each backend in order and returns the first successful parse."""

    def __init__(self, backends: Sequence[ParserBackend]) -> None:
        if not backends:
            raise ValueError("ParserChain requires at least one backend")
        self.backends = tuple(backends)

    def parse(self, text: str) -> ParseOutcome:
        try:
            source = text.encode("utf-8")
        except UnicodeEncodeError as exc:
            logger.debug("Text is not encodable as UTF-8: %s", exc.reason)
            return Failed(
                error=ParseError(
                    "encoding", f"text is not valid Unicode ({exc.reason} at offset {exc.start})"
                )
            )

        failures: List[ParseError] = []
        for backend in self.backends:
            try:
                tree = backend.parse(text)
            except ParseError as exc:
                failures.append(exc)
                logger.debug("Backend %s rejected input: %s", backend.backend_id, exc)
                continue
            except Exception as exc:  # pragma: no cover - defensive guard
                failures.append(ParseError(backend.backend_id, f"backend crashed: {exc}"))
                logger.debug("Backend %s raised %r", backend.backend_id, exc)
                continue
            logger.debug("Parsed with %s", backend.backend_id)
            return Parsed(
                backend_id=backend.backend_id,
                family=backend.family,
                tree=tree,
                source=source,
            )
        return Failed(
            error=failures[-1],
            attempts=tuple(backend.backend_id for backend in self.backends),
        )


def build_backends(enabled: Sequence[str] | None = None) -> List[ParserBackend]:
    """Return instantiated backends in the order of ``enabled``.

    Names are looked up among the built-in backends first and then in the
    ``proofreader.backends`` entry-point group.
    """

    names = list(enabled) if enabled is not None else list(_BUILTIN_FACTORIES)
    factories: dict[str, Callable[[], ParserBackend]] = dict(_BUILTIN_FACTORIES)
    for entry in _iter_entry_points():
        if entry.name in factories:
            continue
        factories[entry.name] = _entry_point_factory(entry)

    missing = [name for name in names if name not in factories]
    if missing:
        raise ValueError(f"Unknown parser backends requested: {', '.join(missing)}")

    backends: List[ParserBackend] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        instance = factories[name]()
        if not isinstance(instance, ParserBackend):
            raise TypeError(f"Backend factory for '{name}' did not return a ParserBackend instance")
        backends.append(instance)
        seen.add(name)
    return backends


def _entry_point_factory(entry: metadata.EntryPoint) -> Callable[[], ParserBackend]:
    def _factory() -> ParserBackend:
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load parser entry point '{entry.name}': {exc}") from exc
        return _coerce_backend(loaded)

    return _factory


def _coerce_backend(obj: object) -> ParserBackend:
    if isinstance(obj, ParserBackend):
        return obj
    if isinstance(obj, type) and issubclass(obj, ParserBackend):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, ParserBackend):
            return instance
    raise TypeError("Parser entry point must be a ParserBackend subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ESTREE_FAMILY",
    "TREE_SITTER_FAMILY",
    "EsprimaBackend",
    "ParseError",
    "ParserBackend",
    "ParserChain",
    "TreeSitterBackend",
    "build_backends",
]
