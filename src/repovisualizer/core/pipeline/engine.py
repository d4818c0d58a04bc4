from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the whole visualization workflow:
1. Validates configuration.
2. Resolves the annotation tables.
3. Acquires the raw listing (local JSON file or GitHub repository).
4. Validates the listing entries.
5. Builds the containment graph and the paginated report.
6. Persists the requested artifacts.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

from repovisualizer.core.analysis.annotator import Annotator, default_annotator
from repovisualizer.core.analysis.tree_builder import build_tree
from repovisualizer.core.analysis.tree_renderer import render_tree_lines
from repovisualizer.core.pipeline.components.reader import read_listing_file
from repovisualizer.core.pipeline.components.writer import write_artifacts
from repovisualizer.core.pipeline.stages.validator import validate_config, validate_entries
from repovisualizer.core.report.pager import build_report
from repovisualizer.domain.constants import DEFAULT_REPO_NAME, PAGE_CAPACITY
from repovisualizer.domain.errors import RetrievalError, ValidationError
from repovisualizer.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from repovisualizer.domain.report_models import Report
from repovisualizer.domain.tree_models import RepoGraph
from repovisualizer.infra.fs import normalize_path
from repovisualizer.infra.network import fetch_repository_tree, parse_repo_url

logger = logging.getLogger(__name__)


def transform_listing(
        records: Sequence[Any],
        title: str,
        annotator: Optional[Annotator] = None,
        page_capacity: int = PAGE_CAPACITY,
) -> Tuple[RepoGraph, Report]:
    """
    Run both consumers of a listing: the tree builder and the pager.

    The listing is validated once up front, so a malformed record fails the
    call before either output exists.

    Raises:
        ValidationError: If any record is malformed.
    """
    annotator = annotator or default_annotator()
    entries = validate_entries(records)

    graph = build_tree(entries, annotator)
    report = build_report(title, entries, annotator.annotate, page_capacity)
    return graph, report


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        records: Optional[Sequence[Any]] = None,
        dry_run: bool = False,
) -> PipelineResult:
    """
    Execute the full pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        records: Pre-fetched listing records. When given, the configured
            source is only used for naming.
        dry_run: If True, build everything but write nothing to disk.

    Returns:
        PipelineResult: Object containing status, outputs and summary.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config Validation
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    source = cfg["source"]
    repo_name = cfg["repo_name"] or _derive_repo_name(source)

    # -------------------------------------------------------------------------
    # 2) Annotation Tables
    # -------------------------------------------------------------------------
    annotator = default_annotator()
    if cfg["annotations_file"]:
        annotations_path = normalize_path(cfg["annotations_file"], os.getcwd())
        try:
            annotator = Annotator.from_file(annotations_path)
        except (OSError, ValueError) as e:
            msg = f"Cannot load annotation tables from '{annotations_path}': {e}"
            logger.error(msg)
            return create_error_result(msg, source, repo_name)

    # -------------------------------------------------------------------------
    # 3) Listing Acquisition
    # -------------------------------------------------------------------------
    if records is None:
        try:
            records = _acquire_listing(source, cfg["github_token_env"])
        except (OSError, ValueError, RetrievalError) as e:
            msg = f"Cannot acquire repository listing from '{source}': {e}"
            logger.error(msg)
            return create_error_result(msg, source, repo_name)

    # -------------------------------------------------------------------------
    # 4) Transform
    # -------------------------------------------------------------------------
    try:
        graph, report = transform_listing(
            records, repo_name, annotator, page_capacity=cfg["page_capacity"]
        )
    except ValidationError as e:
        logger.error(f"Listing rejected: {e}")
        return create_error_result(
            str(e), source, repo_name,
            summary_extra={"invalid_index": e.index},
        )

    tree_lines: List[str] = render_tree_lines(graph) if cfg["print_tree"] else []

    # -------------------------------------------------------------------------
    # 5) Artifact Persistence
    # -------------------------------------------------------------------------
    generated: Dict[str, str] = {}
    if not dry_run:
        output_dir = normalize_path(cfg["output_dir"], os.getcwd())
        try:
            generated = write_artifacts(
                output_dir,
                cfg["output_prefix"] or repo_name,
                repo_name,
                graph,
                report,
                graph_json=cfg["export_graph_json"],
                graph_html=cfg["export_graph_html"],
                report_text=cfg["export_report"],
                report_json=cfg["export_report_json"],
            )
        except OSError as e:
            msg = f"Failed to write artifacts to '{output_dir}': {e}"
            logger.error(msg)
            return create_error_result(msg, source, repo_name)

    logger.info("Pipeline execution finished.")
    return create_success_result(
        source, repo_name, graph, report,
        tree_lines=tree_lines,
        generated_files=generated,
        summary_extra={"dry_run": dry_run},
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _acquire_listing(source: str, token_env: str) -> List[Dict[str, Any]]:
    if not source:
        raise ValueError("No listing source configured.")
    if _is_remote(source):
        token = os.environ.get(token_env) if token_env else None
        return fetch_repository_tree(source, token=token)
    return read_listing_file(normalize_path(source, os.getcwd()))


def _derive_repo_name(source: str) -> str:
    """Name the repository after the URL or the listing file."""
    if not source:
        return DEFAULT_REPO_NAME
    if _is_remote(source):
        try:
            return parse_repo_url(source)[1]
        except ValueError:
            return DEFAULT_REPO_NAME
    base = os.path.basename(source.rstrip("/\\"))
    return os.path.splitext(base)[0] or DEFAULT_REPO_NAME
