from __future__ import annotations

from repovisualizer.domain.constants import APP_VERSION

USER_AGENT = f"RepoVisualizer-Client/{APP_VERSION}"
DEFAULT_TIMEOUT = 10
GITHUB_API_ROOT = "https://api.github.com"
