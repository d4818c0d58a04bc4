from __future__ import annotations

"""
Unit tests for the Input Validator.

Verifies:
1. Listing records are normalized into Entry objects.
2. Malformed records are rejected with their position.
3. Configuration coercion, default injection and strict mode.
"""

import pytest

from repovisualizer.core.pipeline.stages.validator import (
    validate_config,
    validate_entries,
    validate_entry,
)
from repovisualizer.domain.errors import ValidationError
from repovisualizer.domain.tree_models import Entry, EntryKind

# -----------------------------------------------------------------------------
# LISTING ENTRIES
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw_type, expected",
    [
        ("blob", EntryKind.FILE),
        ("file", EntryKind.FILE),
        ("tree", EntryKind.DIRECTORY),
        ("Directory", EntryKind.DIRECTORY),
        (" BLOB ", EntryKind.FILE),
    ],
)
def test_type_aliases(raw_type: str, expected: EntryKind) -> None:
    entry = validate_entry({"path": "a/b", "type": raw_type})
    assert entry == Entry("a/b", expected)


def test_kind_key_is_accepted() -> None:
    """Records may carry the kind under 'kind' instead of 'type'."""
    assert validate_entry({"path": "x", "kind": "tree"}).kind is EntryKind.DIRECTORY


def test_entry_objects_pass_through() -> None:
    entry = Entry("docs/guide.md", EntryKind.FILE)
    assert validate_entry(entry) is entry


def test_extra_fields_are_ignored() -> None:
    """Provider metadata such as sha or size does not affect validation."""
    entry = validate_entry({"path": "a.js", "type": "blob", "sha": "f00", "size": 12})
    assert entry == Entry("a.js", EntryKind.FILE)


def test_entries_keep_input_order(sample_records) -> None:
    entries = validate_entries(sample_records)
    assert [e.path for e in entries] == [r["path"] for r in sample_records]


@pytest.mark.parametrize(
    "record, fragment",
    [
        ({"path": "", "type": "blob"}, "non-empty"),
        ({"path": None, "type": "blob"}, "non-empty"),
        ({"path": "/root.js", "type": "blob"}, "must not start"),
        ({"path": "a//b.js", "type": "blob"}, "empty segment"),
        ({"path": "a/", "type": "tree"}, "empty segment"),
        ({"path": "a", "type": "commit"}, "unrecognized type"),
        ({"path": "a", "type": 3}, "unrecognized type"),
        (["a", "blob"], "expected a mapping"),
    ],
)
def test_malformed_records(record, fragment: str) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_entry(record, index=4)

    assert fragment in exc.value.reason
    assert exc.value.index == 4
    assert "#4" in str(exc.value)


def test_first_bad_record_is_reported() -> None:
    records = [
        {"path": "ok", "type": "tree"},
        {"path": "/bad", "type": "blob"},
        {"path": "", "type": "blob"},
    ]
    with pytest.raises(ValidationError) as exc:
        validate_entries(records)
    assert exc.value.index == 1


def test_validation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        validate_entry({"path": "", "type": "blob"})

# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------

def test_validate_none_returns_defaults() -> None:
    """Passing None should return the full default configuration."""
    cfg, warnings = validate_config(None)

    assert cfg["export_graph_json"] is True
    assert cfg["page_capacity"] == 700
    assert len(warnings) > 0


def test_validate_empty_dict_returns_defaults() -> None:
    cfg, warnings = validate_config({})

    assert cfg["source"] == ""
    assert cfg["github_token_env"] == "GITHUB_TOKEN"
    assert warnings == []


def test_validate_converts_strings_to_bools() -> None:
    raw = {
        "export_graph_html": "yes",
        "export_report": "off",
        "print_tree": "1",
        "print_report": 0,
    }
    cfg, warnings = validate_config(raw)

    assert cfg["export_graph_html"] is True
    assert cfg["export_report"] is False
    assert cfg["print_tree"] is True
    assert cfg["print_report"] is False
    assert len(warnings) == 4


def test_validate_page_capacity_coercion() -> None:
    cfg, _ = validate_config({"page_capacity": "500"})
    assert cfg["page_capacity"] == 500

    cfg, warnings = validate_config({"page_capacity": -3})
    assert cfg["page_capacity"] == 700
    assert any("page_capacity" in w for w in warnings)


def test_validate_strips_strings_and_falls_back() -> None:
    cfg, warnings = validate_config({"source": "  listing.json ", "repo_name": 42})

    assert cfg["source"] == "listing.json"
    assert cfg["repo_name"] == ""
    assert any("repo_name" in w for w in warnings)


def test_validate_strict_mode_raises() -> None:
    with pytest.raises(TypeError):
        validate_config({"export_report": "maybe"}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"page_capacity": "700"}, strict=True)
    with pytest.raises(TypeError):
        validate_config([], strict=True)
