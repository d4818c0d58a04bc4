from __future__ import annotations

"""
Tabular Report Data Models.

Defines the rows and pages produced by the report pager and consumed by
the document composition layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from repovisualizer.domain.constants import DIRECTORY_KIND_LABEL, FILE_KIND_LABEL
from repovisualizer.domain.tree_models import EntryKind

# -----------------------------------------------------------------------------
# TABLE COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportRow:
    """
    One line of the report table.

    Attributes:
        kind: Declared kind of the entry.
        path: Full entry path (identity, never truncated).
        annotation: Semantic label, empty string when none applies.
        display_path: Path as it should be printed, possibly truncated.
    """
    kind: EntryKind
    path: str
    annotation: str = ""
    display_path: str = ""

    @property
    def kind_label(self) -> str:
        return FILE_KIND_LABEL if self.kind is EntryKind.FILE else DIRECTORY_KIND_LABEL

    def as_columns(self) -> Tuple[str, str, str]:
        return self.kind_label, self.display_path or self.path, self.annotation


@dataclass(frozen=True)
class Page:
    """An ordered run of rows that fits inside one page of the document."""
    number: int
    rows: Tuple[ReportRow, ...]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class Report:
    """
    Complete paginated report ready for document composition.

    Attributes:
        title: Repository name shown in the document header.
        total_entries: Number of listing entries covered by the report.
        pages: Pages in output order.
    """
    title: str
    total_entries: int
    pages: List[Page] = field(default_factory=list)

    @property
    def rows(self) -> List[ReportRow]:
        return [row for page in self.pages for row in page.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "total_entries": self.total_entries,
            "pages": [
                [list(row.as_columns()) for row in page.rows]
                for page in self.pages
            ],
        }
