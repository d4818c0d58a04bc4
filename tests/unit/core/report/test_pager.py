from __future__ import annotations

"""
Unit tests for the Report Pager.

Verifies that rows are never lost or reordered, that page breaks follow the
vertical geometry and that long paths are truncated for display only.
"""

from typing import Any, Dict, List

import pytest

from repovisualizer.core.report.pager import build_report, make_row, paginate, truncate_path
from repovisualizer.domain.errors import ValidationError
from repovisualizer.domain.tree_models import Entry, EntryKind


def _listing(count: int) -> List[Dict[str, Any]]:
    return [{"path": f"pkg/module_{i:03d}.js", "type": "blob"} for i in range(count)]


# -----------------------------------------------------------------------------
# COMPLETENESS & ORDER
# -----------------------------------------------------------------------------

def test_empty_listing_has_no_pages() -> None:
    assert paginate([]) == []


@pytest.mark.parametrize("count", [1, 41, 42, 86, 87, 250])
def test_rows_are_loss_free_and_ordered(count: int) -> None:
    """Concatenated pages reproduce the input listing exactly."""
    records = _listing(count)
    pages = paginate(records)

    flattened = [row.path for page in pages for row in page.rows]
    assert flattened == [r["path"] for r in records]
    assert all(len(page) > 0 for page in pages)
    assert [p.number for p in pages] == list(range(1, len(pages) + 1))


def test_default_geometry_page_split() -> None:
    """The first page holds fewer rows because of the document header."""
    pages = paginate(_listing(87))

    assert [len(p) for p in pages] == [41, 45, 1]


def test_page_boundary_exact_fit() -> None:
    """A listing that exactly fills the first page produces one page."""
    assert len(paginate(_listing(41))) == 1
    assert len(paginate(_listing(42))) == 2


def test_custom_geometry() -> None:
    """Rows start while the offset is within the page capacity."""
    pages = paginate(
        _listing(12),
        page_capacity=130,
        row_height=15,
        first_page_offset=100,
        page_top=40,
    )

    assert [len(p) for p in pages] == [3, 7, 2]


def test_first_row_always_placed() -> None:
    """A header taller than the capacity still never yields an empty page."""
    pages = paginate(_listing(5), page_capacity=90)

    assert [len(p) for p in pages] == [1, 4]


def test_row_count_capacity() -> None:
    """A capacity expressed in rows paginates without loss."""
    records = _listing(7)
    pages = paginate(records, lambda _: "", 3, row_height=1, first_page_offset=0, page_top=0)

    assert [len(p) for p in pages] == [4, 3]
    assert [row.path for p in pages for row in p.rows] == [r["path"] for r in records]


def test_capacity_below_page_top() -> None:
    """Later pages start at the capacity when page_top lies below it."""
    records = _listing(7)
    pages = paginate(records, lambda _: "", 3)

    assert [len(p) for p in pages] == [1] * 7
    assert [row.path for p in pages for row in p.rows] == [r["path"] for r in records]


# -----------------------------------------------------------------------------
# ROW CONTENT
# -----------------------------------------------------------------------------

def test_rows_carry_kind_and_annotation() -> None:
    pages = paginate([
        {"path": "server", "type": "tree"},
        {"path": "server/index.js", "type": "blob"},
        {"path": "LICENSE", "type": "blob"},
    ])
    rows = pages[0].rows

    assert rows[0].as_columns() == ("[ DIR  ]", "server", "Backend Logic")
    assert rows[1].as_columns() == ("[ FILE ]", "server/index.js", "Entry Point")
    assert rows[2].annotation == ""


def test_custom_annotate_function() -> None:
    """Any str -> str callable can label rows."""
    pages = paginate([{"path": "a/b.py", "type": "blob"}], annotate=lambda p: p.upper())
    assert pages[0].rows[0].annotation == "A/B.PY"


def test_make_row_truncates_display_path_only() -> None:
    long_path = "deeply/nested/" * 5 + "file.js"
    row = make_row(Entry(long_path, EntryKind.FILE), lambda _: "")

    assert row.path == long_path
    assert len(row.display_path) == 55
    assert row.display_path.endswith("...")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("short/path.js", "short/path.js"),
        ("x" * 55, "x" * 55),
        ("y" * 56, "y" * 52 + "..."),
        ("z" * 120, "z" * 52 + "..."),
    ],
)
def test_truncate_path(path: str, expected: str) -> None:
    assert truncate_path(path) == expected


# -----------------------------------------------------------------------------
# REPORT WRAPPER & ERRORS
# -----------------------------------------------------------------------------

def test_build_report_metadata() -> None:
    report = build_report("demo", _listing(50))

    assert report.title == "demo"
    assert report.total_entries == 50
    assert len(report.rows) == 50
    assert len(report.pages) == 2


@pytest.mark.parametrize(
    "layout",
    [
        {"row_height": 0},
        {"row_height": -15},
        {"page_capacity": 0},
        {"page_capacity": -700},
    ],
)
def test_invalid_geometry_rejected(layout: Dict[str, int]) -> None:
    """Non-positive capacity or row height is a configuration error."""
    with pytest.raises(ValueError):
        paginate(_listing(3), **layout)


def test_malformed_entry_rejected() -> None:
    with pytest.raises(ValidationError):
        paginate([{"path": "ok.js", "type": "blob"}, {"path": "/abs.js", "type": "blob"}])
