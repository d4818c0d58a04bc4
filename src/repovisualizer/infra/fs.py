from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, application data directory
resolution and safe artifact persistence. Acts as an abstraction over the
'os' module to ensure uniform behavior across Windows and Unix-like systems.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

DEFAULT_OUTPUT_SUBDIR = "repovisualizer_output"
APP_DIR_NAME = "RepoVisualizer"
UNIX_APP_DIR_NAME = ".repovisualizer"
HOME_ENV_VAR = "REPOVISUALIZER_HOME"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Override: $REPOVISUALIZER_HOME
    - Windows: %LOCALAPPDATA%/RepoVisualizer
    - Linux/Mac: ~/.repovisualizer

    Returns:
        str: Absolute path to the application data directory.
    """
    path = os.environ.get(HOME_ENV_VAR, "")

    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# PERSISTENCE API
# -----------------------------------------------------------------------------

def write_text_file(path: str, content: str) -> None:
    """
    Write UTF-8 text to disk, creating parent directories as needed.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
