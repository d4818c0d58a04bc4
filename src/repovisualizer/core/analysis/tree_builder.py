from __future__ import annotations

"""
Path Tree Builder.

Materializes the containment graph induced by a flat repository listing.
Listings may omit intermediate directories, repeat entries and arrive in
any order, so the builder first computes the prefix closure of all paths
and only then classifies and annotates every prefix. The result depends on
the set of entries alone, never on their arrival order.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from repovisualizer.core.analysis.annotator import Annotator, default_annotator
from repovisualizer.core.pipeline.stages.validator import validate_entries
from repovisualizer.domain.constants import PATH_SEPARATOR, ROOT_ID
from repovisualizer.domain.tree_models import (
    Edge,
    Entry,
    EntryKind,
    KindConflict,
    Node,
    NodeKind,
    RepoGraph,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        entries: Iterable[Any],
        annotator: Optional[Annotator] = None,
) -> RepoGraph:
    """
    Build the deduplicated node and edge sets for a repository listing.

    Args:
        entries: Entry objects or raw ``{"path", "type"}`` records.
        annotator: Label source for explicitly listed paths. Defaults to the
            built-in tables.

    Returns:
        RepoGraph: Root first, then one node per distinct prefix path, each
            non-root node with exactly one incoming edge.

    Raises:
        ValidationError: If any entry is malformed. No graph is produced.
    """
    validated = validate_entries(entries)
    annotator = annotator or default_annotator()

    closure = _compute_prefix_closure(validated)

    nodes: List[Node] = [Node.root()]
    edges: List[Edge] = []
    conflicts: List[KindConflict] = []

    for prefix in sorted(closure.prefixes, key=_path_sort_key):
        kind, conflict = _classify(prefix, closure)
        if conflict is not None:
            logger.warning(
                f"Kind conflict on '{conflict.path}': {conflict.reason}. "
                f"Resolved as {conflict.resolved.value}."
            )
            conflicts.append(conflict)

        annotation: Optional[str] = None
        if prefix in closure.declared:
            annotation = annotator.annotate(prefix) or None

        parent, _, name = prefix.rpartition(PATH_SEPARATOR)
        nodes.append(Node(id=prefix, display_name=name, kind=kind, annotation=annotation))
        edges.append(Edge(parent_id=parent or ROOT_ID, child_id=prefix))

    logger.info(
        f"Tree built: {len(validated)} entries -> {len(nodes)} nodes, "
        f"{len(edges)} edges, {len(conflicts)} conflicts."
    )
    return RepoGraph(nodes=tuple(nodes), edges=tuple(edges), conflicts=tuple(conflicts))

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (CLOSURE AND CLASSIFICATION)
# -----------------------------------------------------------------------------

@dataclass
class _PrefixClosure:
    """
    Working state of the first pass.

    Attributes:
        prefixes: Every prefix path of every entry, full paths included.
        declared: Kinds explicitly declared per listed path.
        ancestors: Prefixes that contain at least one other listed path.
    """
    prefixes: Set[str] = field(default_factory=set)
    declared: Dict[str, Set[EntryKind]] = field(default_factory=dict)
    ancestors: Set[str] = field(default_factory=set)


def _compute_prefix_closure(entries: List[Entry]) -> _PrefixClosure:
    closure = _PrefixClosure()

    for entry in entries:
        segments = entry.segments
        prefix = ""
        for depth, segment in enumerate(segments):
            prefix = f"{prefix}{PATH_SEPARATOR}{segment}" if prefix else segment
            closure.prefixes.add(prefix)
            if depth < len(segments) - 1:
                closure.ancestors.add(prefix)

        closure.declared.setdefault(entry.path, set()).add(entry.kind)

    return closure


def _classify(prefix: str, closure: _PrefixClosure) -> Tuple[NodeKind, Optional[KindConflict]]:
    """
    Decide the kind of a prefix node.

    A prefix is a file only when it was declared as a file and nothing else
    claims it as a directory. Containment has to stay representable, so a
    contested prefix resolves to a directory and the clash is reported.
    """
    kinds = closure.declared.get(prefix, set())
    if EntryKind.FILE not in kinds:
        return NodeKind.DIRECTORY, None

    reasons: List[str] = []
    if EntryKind.DIRECTORY in kinds:
        reasons.append("declared both as file and directory")
    if prefix in closure.ancestors:
        reasons.append("declared as file but contains other entries")

    if not reasons:
        return NodeKind.FILE, None

    declared = tuple(sorted(kinds, key=lambda k: k.value))
    return NodeKind.DIRECTORY, KindConflict(
        path=prefix,
        declared=declared,
        resolved=NodeKind.DIRECTORY,
        reason="; ".join(reasons),
    )


def _path_sort_key(path: str) -> List[str]:
    """Order paths segment-wise so parents precede children and siblings group."""
    return path.split(PATH_SEPARATOR)
