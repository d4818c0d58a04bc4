from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from repovisualizer.domain.errors import RetrievalError
from repovisualizer.infra.network.common import DEFAULT_TIMEOUT, GITHUB_API_ROOT, USER_AGENT

logger = logging.getLogger(__name__)

DEFAULT_BRANCHES: Tuple[str, ...] = ("main", "master")


def parse_repo_url(url: str) -> Tuple[str, str]:
    """Extract (owner, repo) from a repository web URL."""
    clean = (url or "").strip().rstrip("/")
    if clean.endswith(".git"):
        clean = clean[:-4]

    parts = [p for p in clean.split("/") if p]
    if len(parts) < 2:
        raise ValueError(f"Cannot extract owner/repository from URL: {url!r}")
    return parts[-2], parts[-1]


def build_tree_url(owner: str, repo: str, branch: str) -> str:
    """Compose the recursive git tree endpoint for a branch."""
    return f"{GITHUB_API_ROOT}/repos/{owner}/{repo}/git/trees/{branch}?recursive=1"


def fetch_repository_tree(
        url: str,
        token: Optional[str] = None,
        branches: Sequence[str] = DEFAULT_BRANCHES,
        timeout: int = DEFAULT_TIMEOUT,
) -> List[Dict[str, Any]]:
    """
    Acquire the flat recursive listing of a GitHub repository.

    Branches are tried in order; the first one that answers wins.

    Raises:
        ValueError: If the URL does not name a repository.
        RetrievalError: If no branch could be fetched.
    """
    owner, repo = parse_repo_url(url)
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"token {token}"

    last_error = ""
    for branch in branches:
        api_url = build_tree_url(owner, repo, branch)
        logger.info(f"Fetching repository listing: {owner}/{repo}@{branch}")
        try:
            response = requests.get(api_url, headers=headers, timeout=timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            last_error = f"{branch}: {e}"
            logger.warning(f"Network: Listing unavailable for branch '{branch}': {e}")
            continue
        except ValueError as e:
            last_error = f"{branch}: malformed JSON payload ({e})"
            logger.warning(f"Network: Malformed listing payload for branch '{branch}'.")
            continue

        records = data.get("tree") if isinstance(data, dict) else None
        if not isinstance(records, list):
            last_error = f"{branch}: payload has no 'tree' array"
            logger.warning(f"Network: Listing payload for branch '{branch}' has no 'tree' array.")
            continue

        if data.get("truncated"):
            logger.warning("Network: GitHub truncated the recursive listing.")
        logger.info(f"Network: Retrieved {len(records)} entries from {owner}/{repo}@{branch}.")
        return records

    msg = f"GitHub API communication failure for {owner}/{repo} ({last_error})"
    logger.error(msg)
    raise RetrievalError(msg)
