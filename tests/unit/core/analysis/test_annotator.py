from __future__ import annotations

"""
Unit tests for the Semantic Annotator.

Verifies:
1. Exact base-name matches win over extension rules.
2. Ordered extension fallback.
3. Injected and file-loaded tables.
"""

import importlib
import json

import pytest

from repovisualizer.core.analysis import annotator as annotator_module
from repovisualizer.core.analysis.annotator import Annotator, annotate, default_annotator


@pytest.mark.parametrize(
    "path, expected",
    [
        ("src", "Source Code"),
        ("client/src/index.js", "Entry Point"),
        ("client/src/App.js", "Main Component"),
        ("package.json", "Dependencies"),
        ("web/vite.config.js", "Vite Config"),
        (".env", "Secrets"),
        ("lib/helpers.js", "Logic File"),
        ("styles/main.css", "Styles"),
        ("public/index.html", "HTML"),
        ("data/seed.json", "Data"),
        ("ui/Button.jsx", "Component"),
    ],
)
def test_default_tables(path: str, expected: str) -> None:
    """Verify the built-in dictionary and extension labels."""
    assert annotate(path) == expected


def test_unmatched_path_returns_empty_string() -> None:
    """An annotation miss is a normal empty value, not an error."""
    assert annotate("docs/guide.txt") == ""
    assert annotate("Makefile") == ""
    assert annotate("archive.tar.gz") == ""


def test_extension_uses_text_after_last_dot() -> None:
    """Multi-dot names are classified by their final extension."""
    assert annotate("dist/bundle.min.js") == "Logic File"
    assert annotate("config.json.bak") == ""


def test_only_base_name_is_considered() -> None:
    """Well-known names deeper in the path do not leak into the label."""
    assert annotate("src/notes.txt") == ""
    assert annotate("docs/src") == "Source Code"


def test_annotation_is_deterministic() -> None:
    """Repeated lookups on the same path return the same label."""
    annotator = default_annotator()
    assert annotator.annotate("client/App.js") == annotator.annotate("client/App.js")


def test_injected_tables_replace_defaults() -> None:
    """Injected tables are the only vocabulary the instance knows."""
    annotator = Annotator(
        names={"Makefile": "Build Script"},
        extension_rules=[(".py", "Python Module"), ("md", "Docs")],
    )

    assert annotator.annotate("Makefile") == "Build Script"
    assert annotator.annotate("pkg/core.py") == "Python Module"
    assert annotator.annotate("README.md") == "Docs"
    assert annotator.annotate("index.js") == ""


def test_extension_rules_are_ordered() -> None:
    """The first rule matching the extension wins."""
    annotator = Annotator(names={}, extension_rules=[("js", "First"), ("js", "Second")])
    assert annotator.annotate("a.js") == "First"


def test_annotator_is_callable() -> None:
    """Instances can be passed where a plain label function is expected."""
    annotator = Annotator(names={"x": "X"}, extension_rules=[])
    assert annotator("dir/x") == "X"


def test_merged_with_overrides_take_precedence() -> None:
    """Overrides replace names and jump ahead of inherited extension rules."""
    merged = default_annotator().merged_with(
        names={"README.md": "Project Overview"},
        extension_rules=[("js", "Script")],
    )

    assert merged.annotate("README.md") == "Project Overview"
    assert merged.annotate("lib/util.js") == "Script"
    assert merged.annotate("styles/site.css") == "Styles"
    # Base instance is untouched
    assert default_annotator().annotate("README.md") == "Documentation"


def test_from_file_loads_overrides(tmp_path) -> None:
    """Verify JSON override documents are merged over the defaults."""
    doc = tmp_path / "labels.json"
    doc.write_text(
        json.dumps({
            "names": {"Dockerfile": "Container Image"},
            "extensions": [["py", "Python Module"]],
        }),
        encoding="utf-8",
    )

    annotator = Annotator.from_file(str(doc))

    assert annotator.annotate("Dockerfile") == "Container Image"
    assert annotator.annotate("app/main.py") == "Python Module"
    assert annotator.annotate("index.js") == "Entry Point"


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"names": ["not", "a", "map"]},
        {"extensions": [["py"]]},
        {"extensions": "py"},
    ],
)
def test_from_file_rejects_malformed_documents(tmp_path, payload) -> None:
    """Malformed override documents raise ValueError."""
    doc = tmp_path / "bad.json"
    doc.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError):
        Annotator.from_file(str(doc))


def test_module_import_builds_shared_instance() -> None:
    """A fresh import exposes a working shared annotator over the built-in tables."""
    module = importlib.reload(annotator_module)

    shared = module.default_annotator()

    assert shared is module.default_annotator()
    assert shared.extension_rules[0] == ("js", "Logic File")
    assert module.annotate("client/src/App.js") == "Main Component"
