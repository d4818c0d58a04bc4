from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants, including the
default semantic annotation tables, the graph apex identity and the
geometry of the paginated tabular report.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

APP_VERSION = "1.0.0"
DEFAULT_REPO_NAME = "repository"

# -----------------------------------------------------------------------------
# GRAPH IDENTITY
# -----------------------------------------------------------------------------
ROOT_ID = "root"
ROOT_LABEL = "ROOT"
PATH_SEPARATOR = "/"

# -----------------------------------------------------------------------------
# SEMANTIC ANNOTATION TABLES
# -----------------------------------------------------------------------------

# Exact base-name matches. Read-only so a shared Annotator stays pure.
DEFAULT_NAME_LABELS: Mapping[str, str] = MappingProxyType({
    "src": "Source Code",
    "public": "Public Assets",
    "components": "UI Components",
    "assets": "Images/Fonts",
    "server": "Backend Logic",
    "client": "Frontend UI",
    "utils": "Helpers",
    "config": "Config Settings",
    "routes": "API Routes",
    "models": "DB Models",
    "controllers": "API Logic",
    "package.json": "Dependencies",
    ".gitignore": "Git Ignore",
    "README.md": "Documentation",
    ".env": "Secrets",
    "index.js": "Entry Point",
    "App.js": "Main Component",
    "vite.config.js": "Vite Config",
})

# Ordered (extension, label) fallbacks, evaluated top to bottom
DEFAULT_EXTENSION_LABELS: Tuple[Tuple[str, str], ...] = (
    ("js", "Logic File"),
    ("css", "Styles"),
    ("html", "HTML"),
    ("json", "Data"),
    ("jsx", "Component"),
)

# -----------------------------------------------------------------------------
# REPORT GEOMETRY
# -----------------------------------------------------------------------------
PAGE_CAPACITY = 700
PAGE_TOP_Y = 40
TABLE_START_Y = 100
ROW_HEIGHT = 15

PATH_DISPLAY_WIDTH = 55
ELLIPSIS = "..."

FILE_KIND_LABEL = "[ FILE ]"
DIRECTORY_KIND_LABEL = "[ DIR  ]"

REPORT_COLUMNS: Tuple[str, str, str] = ("TYPE", "FILE PATH", "DESCRIPTION")
