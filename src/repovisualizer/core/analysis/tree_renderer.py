from __future__ import annotations

"""
Tree Renderer.

Converts a RepoGraph into a visual ASCII representation. Directories are
listed before files at every level and semantic labels are appended to the
node names that carry one.
"""

from typing import Dict, Iterator, List, Tuple

from repovisualizer.domain.constants import ROOT_ID
from repovisualizer.domain.tree_models import Node, NodeKind, RepoGraph

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_lines(graph: RepoGraph, show_annotations: bool = True) -> List[str]:
    """
    Render the whole graph starting at the root apex.

    Args:
        graph: Graph produced by the tree builder.
        show_annotations: Append node annotations in parentheses.

    Returns:
        List[str]: Visual lines of the tree, root label first.
    """
    children: Dict[str, List[Node]] = {}
    by_id = {n.id: n for n in graph.nodes}
    for edge in graph.edges:
        children.setdefault(edge.parent_id, []).append(by_id[edge.child_id])

    root = by_id.get(ROOT_ID) or Node.root()
    lines: List[str] = [root.display_name]

    # Explicit stack of (pending siblings, indentation) so depth is unbounded
    stack: List[Tuple[Iterator[Tuple[Node, bool]], str]] = [
        (_ordered_children(children, ROOT_ID), "")
    ]
    while stack:
        siblings, prefix = stack[-1]
        item = next(siblings, None)
        if item is None:
            stack.pop()
            continue

        node, is_last = item
        lines.append(f"{prefix}{'└── ' if is_last else '├── '}{_label(node, show_annotations)}")

        if node.kind is NodeKind.DIRECTORY:
            child_prefix = prefix + ("    " if is_last else "│   ")
            stack.append((_ordered_children(children, node.id), child_prefix))

    return lines

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _ordered_children(
        children: Dict[str, List[Node]],
        parent_id: str,
) -> Iterator[Tuple[Node, bool]]:
    """Yield the children of parent_id, directories first, flagging the last one."""
    entries = sorted(
        children.get(parent_id, []),
        key=lambda n: (n.kind is NodeKind.FILE, n.display_name),
    )
    total = len(entries)
    for i, node in enumerate(entries):
        yield node, i == total - 1


def _label(node: Node, show_annotations: bool) -> str:
    label = node.display_name
    if node.kind is NodeKind.DIRECTORY:
        label += "/"
    if show_annotations and node.annotation:
        label += f"  ({node.annotation})"
    return label
