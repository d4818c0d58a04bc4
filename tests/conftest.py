from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory from the real home folder.
3. Shared listing fixtures used across unit and integration tests.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_user_data(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the application data directory into the test sandbox."""
    home = tmp_path / "app_home"
    monkeypatch.setenv("REPOVISUALIZER_HOME", str(home))
    return home


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """
    Return a GitHub-style listing that omits some intermediate directories.

    Structure:
    /client
      /src
        App.js
        index.js
        styles.css
    /server
      index.js
    package.json
    README.md
    """
    return [
        {"path": "README.md", "type": "blob"},
        {"path": "client/src/App.js", "type": "blob"},
        {"path": "client/src/index.js", "type": "blob"},
        {"path": "client/src/styles.css", "type": "blob"},
        {"path": "server", "type": "tree"},
        {"path": "server/index.js", "type": "blob"},
        {"path": "package.json", "type": "blob"},
    ]


@pytest.fixture
def listing_file(tmp_path: Path, sample_records: List[Dict[str, Any]]) -> Path:
    """Persist the sample listing as a GitHub tree API payload."""
    path = tmp_path / "demo-repo.json"
    path.write_text(
        json.dumps({"sha": "abc123", "tree": sample_records, "truncated": False}),
        encoding="utf-8",
    )
    return path
