from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the runtime configuration using JSON.
Unknown or missing keys fall back to the domain defaults.
"""

import json
import logging
import os
from typing import Any, Dict

from repovisualizer.domain.constants import PAGE_CAPACITY
from repovisualizer.infra.fs import DEFAULT_OUTPUT_SUBDIR, get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"


def get_config_file() -> str:
    """Resolve the absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Listing source: local JSON file or GitHub repository URL
        "source": "",
        "repo_name": "",

        # Output
        "output_dir": os.path.join(os.getcwd(), DEFAULT_OUTPUT_SUBDIR),
        "output_prefix": "",
        "export_graph_json": True,
        "export_graph_html": False,
        "export_report": True,
        "export_report_json": False,

        # Console previews
        "print_tree": False,
        "print_report": False,

        # Annotation & report layout
        "annotations_file": "",
        "page_capacity": PAGE_CAPACITY,

        # Retrieval
        "github_token_env": DEFAULT_TOKEN_ENV,
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded configuration or the defaults on failure.
    """
    defaults = get_default_config()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    defaults.update({k: v for k, v in data.items() if k in defaults})
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.
    """
    config_file = get_config_file()
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
