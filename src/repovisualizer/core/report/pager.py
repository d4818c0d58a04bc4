from __future__ import annotations

"""
Report Pager.

Lays out the listing as a three-column table (kind, path, annotation) over
fixed-capacity pages. Rows keep the input order of the listing, are never
split across pages and are never dropped.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional

from repovisualizer.core.analysis.annotator import default_annotator
from repovisualizer.core.pipeline.stages.validator import validate_entries
from repovisualizer.domain.constants import (
    ELLIPSIS,
    PAGE_CAPACITY,
    PAGE_TOP_Y,
    PATH_DISPLAY_WIDTH,
    ROW_HEIGHT,
    TABLE_START_Y,
)
from repovisualizer.domain.report_models import Page, Report, ReportRow
from repovisualizer.domain.tree_models import Entry

logger = logging.getLogger(__name__)

AnnotateFn = Callable[[str], str]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def paginate(
        entries: Iterable[Any],
        annotate: Optional[AnnotateFn] = None,
        page_capacity: int = PAGE_CAPACITY,
        *,
        row_height: int = ROW_HEIGHT,
        first_page_offset: int = TABLE_START_Y,
        page_top: int = PAGE_TOP_Y,
        display_width: int = PATH_DISPLAY_WIDTH,
) -> List[Page]:
    """
    Split the listing into pages of report rows.

    The vertical offset starts at first_page_offset (below the document
    header) and grows by row_height per row. When the offset has passed
    page_capacity the current page is closed and the next one starts at
    page_top, or at the capacity itself when page_top lies below it.

    Args:
        entries: Entry objects or raw ``{"path", "type"}`` records.
        annotate: Label function. Defaults to the built-in annotator.
        page_capacity: Maximum vertical offset at which a row may start.
        row_height: Vertical space consumed by one row.
        first_page_offset: Starting offset on the first page.
        page_top: Starting offset on every following page.
        display_width: Maximum printed path length.

    Returns:
        List[Page]: Pages in order; empty when the listing is empty.

    Raises:
        ValueError: If page_capacity or row_height is not positive.
        ValidationError: If any entry is malformed.
    """
    if row_height <= 0:
        raise ValueError(f"row_height must be positive, got {row_height}.")
    if page_capacity <= 0:
        raise ValueError(f"page_capacity must be positive, got {page_capacity}.")

    validated = validate_entries(entries)
    annotate = annotate or default_annotator().annotate

    pages: List[Page] = []
    current: List[ReportRow] = []
    offset = first_page_offset
    next_page_top = min(page_top, page_capacity)

    for entry in validated:
        if offset > page_capacity and current:
            pages.append(Page(number=len(pages) + 1, rows=tuple(current)))
            current = []
            offset = next_page_top

        current.append(make_row(entry, annotate, display_width))
        offset += row_height

    if current:
        pages.append(Page(number=len(pages) + 1, rows=tuple(current)))

    logger.debug(f"Paginated {len(validated)} rows into {len(pages)} pages.")
    return pages


def build_report(
        title: str,
        entries: Iterable[Any],
        annotate: Optional[AnnotateFn] = None,
        page_capacity: int = PAGE_CAPACITY,
        **layout: int,
) -> Report:
    """
    Paginate a listing and wrap the pages with document header metadata.

    Args:
        title: Repository name printed in the report header.
        entries: Entry objects or raw records.
        annotate: Label function. Defaults to the built-in annotator.
        page_capacity: Maximum vertical offset at which a row may start.
        **layout: Extra geometry forwarded to paginate().

    Returns:
        Report: Title, entry count and pages.
    """
    validated = validate_entries(entries)
    pages = paginate(validated, annotate, page_capacity, **layout)
    return Report(title=title, total_entries=len(validated), pages=pages)


def make_row(entry: Entry, annotate: AnnotateFn, display_width: int = PATH_DISPLAY_WIDTH) -> ReportRow:
    """Map one entry to its report row."""
    return ReportRow(
        kind=entry.kind,
        path=entry.path,
        annotation=annotate(entry.path) or "",
        display_path=truncate_path(entry.path, display_width),
    )


def truncate_path(path: str, width: int = PATH_DISPLAY_WIDTH) -> str:
    """
    Shorten a path for display, keeping its head and marking the cut.

    Args:
        path: Full path.
        width: Maximum length of the returned string.

    Returns:
        str: The path itself when it fits, otherwise its first
            ``width - len(ELLIPSIS)`` characters followed by the ellipsis.
    """
    if len(path) <= width:
        return path
    keep = max(width - len(ELLIPSIS), 0)
    return path[:keep] + ELLIPSIS
