"""Tests for proofreader.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from proofreader.config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_PARSERS,
    ConfigError,
    ProofreaderConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ProofreaderConfig)
    assert config.root == tmp_path.resolve()
    assert config.default_extension == ".js"
    assert config.extensions == list(DEFAULT_EXTENSIONS)
    assert config.parsers == list(DEFAULT_PARSERS)
    assert config.workers == 4
    assert config.exclude_paths == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".proofreader.yml"
    config_file.write_text(
        """
default_extension: mjs
extensions: [".js", "MJS"]
parsers:
  - esprima
  - tree-sitter-recovering
workers: 8
exclude_paths:
  - "dist/"
  - "*.min.js"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.default_extension == ".mjs"
    assert config.extensions == [".js", ".mjs"]
    assert config.parsers == ["esprima", "tree-sitter-recovering"]
    assert config.workers == 8
    assert config.exclude_paths == ["dist/", "*.min.js"]


def test_default_extension_is_always_recognized(tmp_path: Path) -> None:
    (tmp_path / ".proofreader.yml").write_text(
        "default_extension: .jsx\nextensions: [.js]\n", encoding="utf-8"
    )
    config = load_config(tmp_path)
    assert config.extensions == [".js", ".jsx"]


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".proofreader.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).parsers == list(DEFAULT_PARSERS)


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".proofreader.yml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".proofreader.yml").write_text("parsers: [unterminated\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_positive_workers_are_rejected(tmp_path: Path) -> None:
    (tmp_path / ".proofreader.yml").write_text("workers: 0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
