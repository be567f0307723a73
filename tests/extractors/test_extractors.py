"""Tests for export/import extraction across tree families."""

from __future__ import annotations

import textwrap
from typing import Callable

import pytest

from proofreader.extractors import TraversalFault, extract
from proofreader.models import ImportRequest, Parsed
from proofreader.parsers import EsprimaBackend, ParserBackend, TreeSitterBackend

MODULE = textwrap.dedent(
    """
    import def, { alpha, beta as b } from "./lib/util.js";
    import * as ns from "../shared/index.js";
    import "./side-effect";
    import { default as other } from "./other.mjs";
    import React from "react";

    export function foo() {}
    export class Bar {}
    export const baz = 1, qux = 2;
    export let [first, ...others] = [1, 2, 3];
    export const { deep: renamed, shallow = 3 } = {};
    const local = 4;
    export { local as publicLocal, local };
    export default foo;
    """
).lstrip("\n")

EXPECTED_EXPORTS = {
    "foo",
    "Bar",
    "baz",
    "qux",
    "first",
    "others",
    "renamed",
    "shallow",
    "publicLocal",
    "local",
    "default",
}

EXPECTED_IMPORTS = (
    ImportRequest("./lib/util.js", ("default", "alpha", "beta"), line=1),
    ImportRequest("../shared/index.js", (), line=2, namespace=True),
    ImportRequest("./side-effect", (), line=3),
    ImportRequest("./other.mjs", ("default",), line=4),
    ImportRequest("react", ("default",), line=5),
)

BACKENDS = {
    "tree-sitter": TreeSitterBackend,
    "esprima": EsprimaBackend,
}


def _parse(factory: Callable[[], ParserBackend], text: str) -> Parsed:
    backend = factory()
    return Parsed(
        backend_id=backend.backend_id,
        family=backend.family,
        tree=backend.parse(text),
        source=text.encode("utf-8"),
    )


@pytest.mark.parametrize("backend", sorted(BACKENDS))
def test_extract_exports_and_imports(backend: str) -> None:
    declarations = extract(_parse(BACKENDS[backend], MODULE), "src/module.js")

    assert declarations.exported_symbols == EXPECTED_EXPORTS
    assert declarations.import_requests == EXPECTED_IMPORTS


@pytest.mark.parametrize("backend", sorted(BACKENDS))
def test_default_export_forms(backend: str) -> None:
    for text in (
        "export default function () {}\n",
        "export default class Named {}\n",
        "export default 42;\n",
    ):
        declarations = extract(_parse(BACKENDS[backend], text), "a.js")
        assert declarations.exported_symbols == {"default"}


@pytest.mark.parametrize("backend", sorted(BACKENDS))
def test_reexport_specifiers_use_external_names(backend: str) -> None:
    text = 'export { a as b, c } from "./other.js";\n'
    declarations = extract(_parse(BACKENDS[backend], text), "a.js")
    assert declarations.exported_symbols == {"b", "c"}
    assert declarations.import_requests == ()


@pytest.mark.parametrize("backend", sorted(BACKENDS))
def test_duplicate_exports_collapse(backend: str) -> None:
    text = "const a = 1;\nexport { a };\nexport { a as a };\n"
    declarations = extract(_parse(BACKENDS[backend], text), "a.js")
    assert declarations.exported_symbols == {"a"}


def test_namespace_reexport_exports_alias() -> None:
    text = 'export * as helpers from "./helpers.js";\nexport * from "./all.js";\n'
    declarations = extract(_parse(TreeSitterBackend, text), "a.js")
    assert declarations.exported_symbols == {"helpers"}


def test_recovered_tree_keeps_surviving_declarations() -> None:
    text = "export function foo() {}\nexport const bar = 1;\n)))\n"
    recovered = _parse(lambda: TreeSitterBackend(recovering=True), text)
    clean = _parse(TreeSitterBackend, "export function foo() {}\nexport const bar = 1;\n")

    assert extract(recovered, "a.js").exported_symbols == {"foo", "bar"}
    assert extract(recovered, "a.js").exported_symbols == extract(clean, "a.js").exported_symbols


def test_unexpected_tree_shape_raises_traversal_fault() -> None:
    parsed = Parsed(backend_id="tree-sitter", family="tree-sitter", tree=object(), source=b"")
    with pytest.raises(TraversalFault) as excinfo:
        extract(parsed, "broken.js")
    assert excinfo.value.file_path == "broken.js"


def test_unknown_family_raises_traversal_fault() -> None:
    parsed = Parsed(backend_id="custom", family="custom", tree=None, source=b"")
    with pytest.raises(TraversalFault):
        extract(parsed, "custom.js")
