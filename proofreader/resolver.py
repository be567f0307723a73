"""Resolution of relative module specifiers to canonical module keys."""

from __future__ import annotations

from typing import Final, List, Sequence, Union

from .config import DEFAULT_EXTENSION, DEFAULT_EXTENSIONS


class _External:
    """Sentinel for specifiers that name packages outside the project."""

    def __repr__(self) -> str:
        return "EXTERNAL"

    def __bool__(self) -> bool:
        return False


EXTERNAL: Final = _External()


class UnresolvablePathError(ValueError):
    """Raised when a specifier climbs above the project root or names no file."""

    def __init__(
        self, importing_path: str, specifier: str, reason: str = "escapes the project root"
    ) -> None:
        self.importing_path = importing_path
        self.specifier = specifier
        self.reason = reason
        super().__init__(f"'{specifier}' from {importing_path} {reason}")


def is_relative(specifier: str) -> bool:
    return specifier.startswith(".")


class PathResolver:
    """Maps ``(importing file, specifier)`` to a canonical project path."""

    def __init__(
        self,
        default_extension: str = DEFAULT_EXTENSION,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.default_extension = default_extension
        recognized = {ext.lower() for ext in extensions}
        recognized.add(default_extension.lower())
        self.extensions = tuple(sorted(recognized))

    def resolve(self, importing_path: str, specifier: str) -> Union[str, _External]:
        if not is_relative(specifier):
            return EXTERNAL

        segments: List[str] = importing_path.split("/")[:-1]
        for part in specifier.split("/"):
            if part in {".", ""}:
                continue
            if part == "..":
                if not segments:
                    raise UnresolvablePathError(importing_path, specifier)
                segments.pop()
            else:
                segments.append(part)

        if not segments:
            raise UnresolvablePathError(importing_path, specifier, "does not name a module file")
        resolved = "/".join(segments)
        if not self.has_recognized_extension(resolved):
            resolved += self.default_extension
        return resolved

    def has_recognized_extension(self, path: str) -> bool:
        name = path.rsplit("/", 1)[-1].lower()
        return any(name.endswith(ext) and len(name) > len(ext) for ext in self.extensions)


__all__ = ["EXTERNAL", "PathResolver", "UnresolvablePathError", "is_relative"]
