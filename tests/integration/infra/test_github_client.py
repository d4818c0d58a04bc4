from __future__ import annotations

"""
Integration tests for the GitHub listing client.

Utilizes mocking to verify branch fallback, authentication headers and
payload validation without making real network calls.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from repovisualizer.domain.errors import RetrievalError
from repovisualizer.infra.network import build_tree_url, fetch_repository_tree, parse_repo_url


def _response(payload=None, status_error=None, json_error=None) -> MagicMock:
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


# -----------------------------------------------------------------------------
# URL HANDLING
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/octo/demo",
        "https://github.com/octo/demo/",
        "https://github.com/octo/demo.git",
        "  https://github.com/octo/demo  ",
    ],
)
def test_parse_repo_url(url: str) -> None:
    assert parse_repo_url(url) == ("octo", "demo")


def test_parse_repo_url_rejects_short_urls() -> None:
    with pytest.raises(ValueError):
        parse_repo_url("demo")


def test_build_tree_url() -> None:
    assert build_tree_url("octo", "demo", "main") == (
        "https://api.github.com/repos/octo/demo/git/trees/main?recursive=1"
    )


# -----------------------------------------------------------------------------
# FETCHING
# -----------------------------------------------------------------------------

def test_fetch_main_branch(sample_records) -> None:
    """TC-01: The first branch answering with a tree wins."""
    with patch("requests.get", return_value=_response({"tree": sample_records})) as mock_get:
        records = fetch_repository_tree("https://github.com/octo/demo")

    assert records == sample_records
    assert mock_get.call_count == 1
    called_url = mock_get.call_args[0][0]
    assert called_url.endswith("/git/trees/main?recursive=1")
    headers = mock_get.call_args[1]["headers"]
    assert "Authorization" not in headers
    assert headers["User-Agent"].startswith("RepoVisualizer-Client/")


def test_fetch_falls_back_to_master() -> None:
    """TC-02: A failing main branch falls back to master."""
    missing = _response(status_error=requests.exceptions.HTTPError("404 Not Found"))
    found = _response({"tree": [{"path": "a.js", "type": "blob"}], "truncated": False})

    with patch("requests.get", side_effect=[missing, found]) as mock_get:
        records = fetch_repository_tree("https://github.com/octo/legacy")

    assert records == [{"path": "a.js", "type": "blob"}]
    assert mock_get.call_args_list[1][0][0].endswith("/git/trees/master?recursive=1")


def test_fetch_sends_token() -> None:
    """TC-03: A token is sent with the GitHub token scheme."""
    with patch("requests.get", return_value=_response({"tree": []})) as mock_get:
        fetch_repository_tree("https://github.com/octo/demo", token="s3cr3t")

    assert mock_get.call_args[1]["headers"]["Authorization"] == "token s3cr3t"


def test_fetch_all_branches_failing() -> None:
    """TC-04: Exhausting every branch raises RetrievalError."""
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("offline")):
        with pytest.raises(RetrievalError) as exc:
            fetch_repository_tree("https://github.com/octo/demo")

    assert "octo/demo" in str(exc.value)


def test_fetch_rejects_payload_without_tree() -> None:
    """TC-05: Malformed payloads are treated like an unavailable branch."""
    responses = [
        _response({"message": "Not Found"}),
        _response(json_error=ValueError("bad json")),
    ]
    with patch("requests.get", side_effect=responses):
        with pytest.raises(RetrievalError):
            fetch_repository_tree("https://github.com/octo/demo")
