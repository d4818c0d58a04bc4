from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structure and factory functions used to communicate
execution outcomes between the pipeline engine and the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from repovisualizer.domain.report_models import Report
from repovisualizer.domain.tree_models import RepoGraph

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        source: Listing source (file path or repository URL).
        repo_name: Title used for the report and the HTML viewer.
        entry_count: Number of validated listing entries.
        graph: Containment graph, None on failure.
        report: Paginated report, None on failure.
        tree_lines: ASCII tree preview when requested.
        generated_files: Artifact key to absolute path.
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str

    source: str
    repo_name: str
    entry_count: int = 0

    graph: Optional[RepoGraph] = None
    report: Optional[Report] = None
    tree_lines: List[str] = field(default_factory=list)

    generated_files: Dict[str, str] = field(default_factory=dict)
    summary: Dict[str, Any] = field(default_factory=dict)

    def to_summary_dict(self) -> Dict[str, Any]:
        """Serializable overview without the full graph and report payloads."""
        return {
            "ok": self.ok,
            "error": self.error,
            "source": self.source,
            "repo_name": self.repo_name,
            "entry_count": self.entry_count,
            "generated_files": dict(self.generated_files),
            "summary": dict(self.summary),
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        source: str = "",
        repo_name: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        source: Listing source of the failed run.
        repo_name: Resolved repository title, if known.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        source=source,
        repo_name=repo_name,
        summary=summary_extra or {},
    )


def create_success_result(
        source: str,
        repo_name: str,
        graph: RepoGraph,
        report: Report,
        tree_lines: Optional[List[str]] = None,
        generated_files: Optional[Dict[str, str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        source: Listing source that was processed.
        repo_name: Title used for the outputs.
        graph: Containment graph built from the listing.
        report: Paginated report built from the listing.
        tree_lines: Optional ASCII tree preview.
        generated_files: Paths of persisted artifacts.
        summary_extra: Final execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    summary: Dict[str, Any] = {
        "nodes": len(graph.nodes),
        "edges": len(graph.edges),
        "pages": len(report.pages),
        "conflicts": [c.path for c in graph.conflicts],
    }
    summary.update(summary_extra or {})

    return PipelineResult(
        ok=True,
        error="",
        source=source,
        repo_name=repo_name,
        entry_count=report.total_entries,
        graph=graph,
        report=report,
        tree_lines=tree_lines or [],
        generated_files=generated_files or {},
        summary=summary,
    )
