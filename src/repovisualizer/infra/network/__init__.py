from __future__ import annotations

"""
Network Communication Infrastructure.

Retrieval boundary of the application: acquires raw repository listings
from remote hosting providers.
"""

from repovisualizer.infra.network.github_client import (
    DEFAULT_BRANCHES,
    build_tree_url,
    fetch_repository_tree,
    parse_repo_url,
)

__all__ = [
    "DEFAULT_BRANCHES",
    "build_tree_url",
    "fetch_repository_tree",
    "parse_repo_url",
]
