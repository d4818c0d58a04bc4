from __future__ import annotations

"""
Artifact Writer Component.

Serializes pipeline outputs to disk: the graph in the rendering contract
shape (JSON), a standalone HTML viewer embedding that JSON, and the
report as plain text or JSON pages.
"""

import html
import json
import logging
import os
from typing import Callable, Dict, Tuple

from repovisualizer.core.report.renderer import render_report_text
from repovisualizer.domain.report_models import Report
from repovisualizer.domain.tree_models import RepoGraph
from repovisualizer.infra.fs import write_text_file

logger = logging.getLogger(__name__)

FORCE_GRAPH_SCRIPT_URL = "https://unpkg.com/3d-force-graph"

_HTML_TEMPLATE = """<html><head><title>{title} 3D</title>
<script src="{script_url}"></script>
<style>body{{margin:0; background:#050505;}}</style></head><body>
<div id="graph"></div>
<script>
  const gData = {graph_json};
  ForceGraph3D()(document.getElementById('graph'))
    .graphData(gData)
    .dagMode('td')
    .dagLevelDistance(60)
    .nodeAutoColorBy('kind')
    .linkDirectionalParticles(2)
    .nodeLabel('id');
</script></body></html>
"""

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def graph_to_json(graph: RepoGraph) -> str:
    """Serialize a graph into the ``{nodes, links}`` JSON document."""
    return json.dumps(graph.to_dict(), ensure_ascii=False, indent=2)


def report_to_json(report: Report) -> str:
    """Serialize a report into ``{title, total_entries, pages}`` JSON."""
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


def render_graph_html(graph: RepoGraph, title: str) -> str:
    """
    Build a self-contained HTML page visualizing the graph in 3D.

    The embedded JSON is escaped so that path names cannot terminate the
    surrounding script element.
    """
    payload = json.dumps(graph.to_dict(), ensure_ascii=False).replace("</", "<\\/")
    return _HTML_TEMPLATE.format(
        title=html.escape(title),
        script_url=FORCE_GRAPH_SCRIPT_URL,
        graph_json=payload,
    )


def write_artifacts(
        output_dir: str,
        prefix: str,
        title: str,
        graph: RepoGraph,
        report: Report,
        *,
        graph_json: bool = True,
        graph_html: bool = False,
        report_text: bool = True,
        report_json: bool = False,
) -> Dict[str, str]:
    """
    Persist the requested artifacts.

    Args:
        output_dir: Destination directory, created when missing.
        prefix: Filename prefix for every artifact.
        title: Repository name used in the HTML title.
        graph: Graph to export.
        report: Report to export.
        graph_json: Write ``<prefix>_graph.json``.
        graph_html: Write ``<prefix>-3d-report.html``.
        report_text: Write ``<prefix>_report.txt``.
        report_json: Write ``<prefix>_report.json``.

    Returns:
        Dict[str, str]: Artifact key to absolute path of each written file.

    Raises:
        OSError: If any artifact cannot be written.
    """
    generated: Dict[str, str] = {}
    planned: Dict[str, Tuple[str, Callable[[], str]]] = {}

    if graph_json:
        planned["graph_json"] = (f"{prefix}_graph.json", lambda: graph_to_json(graph))
    if graph_html:
        planned["graph_html"] = (f"{prefix}-3d-report.html", lambda: render_graph_html(graph, title))
    if report_text:
        planned["report"] = (f"{prefix}_report.txt", lambda: render_report_text(report))
    if report_json:
        planned["report_json"] = (f"{prefix}_report.json", lambda: report_to_json(report))

    for key, (file_name, render) in planned.items():
        path = os.path.abspath(os.path.join(output_dir, file_name))
        write_text_file(path, render())
        logger.info(f"Artifact saved: {path}")
        generated[key] = path

    return generated

