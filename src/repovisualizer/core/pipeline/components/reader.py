from __future__ import annotations

"""
Listing Reader Component.

Loads a raw repository listing from a local JSON document. Accepts either a
bare array of ``{"path", "type"}`` records or the payload of the GitHub
recursive tree API (``{"tree": [...]}``).
"""

import json
import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_listing_file(file_path: str) -> List[Dict[str, Any]]:
    """
    Read raw listing records from a JSON file.

    Args:
        file_path: Path to the listing document.

    Returns:
        List[Dict[str, Any]]: Raw records, unvalidated and in file order.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the document is not valid JSON or has no record array.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = extract_records(data)
    logger.info(f"Loaded {len(records)} listing records from {file_path}")
    return records


def extract_records(data: Any) -> List[Dict[str, Any]]:
    """
    Extract the record array from a decoded listing document.

    Raises:
        ValueError: If no record array can be located.
    """
    if isinstance(data, dict):
        if data.get("truncated"):
            logger.warning("Listing payload is flagged as truncated by the provider.")
        data = data.get("tree", data.get("entries"))

    if not isinstance(data, list):
        raise ValueError("Listing document must be an array or contain a 'tree' array.")
    return data
