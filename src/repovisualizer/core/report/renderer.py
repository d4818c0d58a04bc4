from __future__ import annotations

"""
Report Text Renderer.

Formats a paginated Report as plain text: a centered header, the column
headings and one fixed-width line per row, with a form-feed marker between
pages.
"""

from typing import List

from repovisualizer.domain.constants import FILE_KIND_LABEL, REPORT_COLUMNS
from repovisualizer.domain.report_models import Report

PAGE_BREAK = "\f"
HEADER_WIDTH = 100
PATH_COLUMN_WIDTH = 58

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_report_lines(report: Report) -> List[str]:
    """
    Render a report into printable lines.

    Args:
        report: Report produced by the pager.

    Returns:
        List[str]: Header, table heading and all rows in page order.
    """
    kind_width = len(FILE_KIND_LABEL) + 2

    lines: List[str] = [
        f"Report: {report.title}".center(HEADER_WIDTH).rstrip(),
        f"Total Files: {report.total_entries}".center(HEADER_WIDTH).rstrip(),
        "",
    ]
    type_col, path_col, desc_col = REPORT_COLUMNS
    heading = f"{type_col:<{kind_width}}{path_col:<{PATH_COLUMN_WIDTH}}{desc_col}"
    lines.append(heading)
    lines.append("-" * len(heading))

    for page in report.pages:
        if page.number > 1:
            lines.append(PAGE_BREAK)
        for row in page.rows:
            kind, path, annotation = row.as_columns()
            lines.append(f"{kind:<{kind_width}}{path:<{PATH_COLUMN_WIDTH}}{annotation}".rstrip())

    return lines


def render_report_text(report: Report) -> str:
    """Render a report into a single text document."""
    return "\n".join(render_report_lines(report)) + "\n"
