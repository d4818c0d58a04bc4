from __future__ import annotations

"""
Repository Graph Data Models.

Provides the immutable structures exchanged between the listing validator,
the path tree builder and the rendering boundary. The graph is serialized
as ``{"nodes": [...], "links": [{"source", "target"}]}``, the shape
expected by force-graph viewers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from repovisualizer.domain.constants import ROOT_ID, ROOT_LABEL

# -----------------------------------------------------------------------------
# CLASSIFICATION ENUMS
# -----------------------------------------------------------------------------

class EntryKind(str, Enum):
    """Declared type of a listing record."""
    FILE = "file"
    DIRECTORY = "directory"


class NodeKind(str, Enum):
    """Classification of a materialized graph node."""
    ROOT = "root"
    DIRECTORY = "directory"
    FILE = "file"

# -----------------------------------------------------------------------------
# INPUT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Entry:
    """
    A single validated record of the repository listing.

    Attributes:
        path: Repository-relative path, '/' separated, without leading '/'.
        kind: Declared entry type.
    """
    path: str
    kind: EntryKind

    @property
    def segments(self) -> List[str]:
        return self.path.split("/")

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

# -----------------------------------------------------------------------------
# GRAPH MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Node:
    """
    Graph vertex for the root apex, a directory or a file.

    Attributes:
        id: Full repository path, or the reserved ROOT_ID for the apex.
        display_name: Final path segment, or ROOT_LABEL for the apex.
        kind: Node classification.
        annotation: Semantic label, None for synthesized ancestors.
    """
    id: str
    display_name: str
    kind: NodeKind
    annotation: Optional[str] = None

    @classmethod
    def root(cls) -> "Node":
        return cls(id=ROOT_ID, display_name=ROOT_LABEL, kind=NodeKind.ROOT)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.display_name,
            "kind": self.kind.value,
            "annotation": self.annotation,
        }


@dataclass(frozen=True)
class Edge:
    """Directed containment edge from a directory (or root) to a child."""
    parent_id: str
    child_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"source": self.parent_id, "target": self.child_id}


@dataclass(frozen=True)
class KindConflict:
    """
    Anomaly raised when one path is claimed both as a file and a directory.

    Attributes:
        path: The contested prefix path.
        declared: Kinds explicitly declared for the path by the listing.
        resolved: Kind finally assigned to the node.
        reason: Short explanation of what caused the conflict.
    """
    path: str
    declared: Tuple[EntryKind, ...]
    resolved: NodeKind
    reason: str


@dataclass(frozen=True)
class RepoGraph:
    """
    Deduplicated containment graph of a repository listing.

    Attributes:
        nodes: Root first, then every materialized prefix in path order.
        edges: Exactly one incoming edge per non-root node.
        conflicts: File/directory classification anomalies detected.
    """
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    conflicts: Tuple[KindConflict, ...] = field(default_factory=tuple)

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def get(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def children_of(self, node_id: str) -> List[Node]:
        by_id = {n.id: n for n in self.nodes}
        return [by_id[e.child_id] for e in self.edges if e.parent_id == node_id]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the rendering collaborator contract."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [e.to_dict() for e in self.edges],
        }
