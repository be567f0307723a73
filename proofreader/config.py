"""Configuration loading for proofreader (.proofreader.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".proofreader.yml"

DEFAULT_EXTENSION = ".js"
DEFAULT_EXTENSIONS = (".js", ".mjs", ".cjs", ".jsx")
DEFAULT_PARSERS = ("tree-sitter", "esprima", "tree-sitter-recovering")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProofreaderConfig:
    """Represents the settings defined in .proofreader.yml."""

    root: Path
    default_extension: str = DEFAULT_EXTENSION
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    parsers: List[str] = field(default_factory=lambda: list(DEFAULT_PARSERS))
    workers: int = 4
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> ProofreaderConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProofreaderConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ProofreaderConfig(root=root)

    default_extension = _as_extension(data.get("default_extension"))
    if default_extension:
        config.default_extension = default_extension

    extensions = [ext for ext in map(_as_extension, _as_str_list(data.get("extensions"))) if ext]
    if extensions:
        config.extensions = extensions
    if config.default_extension not in config.extensions:
        config.extensions.append(config.default_extension)

    parsers = _as_str_list(data.get("parsers"))
    if parsers:
        config.parsers = parsers

    workers = _as_int(data.get("workers"))
    if workers is not None:
        if workers < 1:
            raise ConfigError("workers must be a positive integer")
        config.workers = workers

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_extension(value: Any) -> Optional[str]:
    text = _as_str(value)
    if not text:
        return None
    text = text.strip().lower()
    return text if text.startswith(".") else f".{text}"


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
