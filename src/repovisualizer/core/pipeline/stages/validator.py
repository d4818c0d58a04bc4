from __future__ import annotations

"""
Input Validation Service.

Acts as the primary gatekeeper for the pipeline. Converts raw listing
records received from the retrieval boundary into validated Entry objects
and normalizes the runtime configuration dictionary with type coercion and
default injection.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from repovisualizer.domain.config import get_default_config
from repovisualizer.domain.constants import PATH_SEPARATOR
from repovisualizer.domain.errors import ValidationError
from repovisualizer.domain.tree_models import Entry, EntryKind

logger = logging.getLogger(__name__)

# Boundary type tags accepted for each entry kind
_TYPE_ALIASES: Dict[str, EntryKind] = {
    "blob": EntryKind.FILE,
    "file": EntryKind.FILE,
    "tree": EntryKind.DIRECTORY,
    "directory": EntryKind.DIRECTORY,
}

# -----------------------------------------------------------------------------
# PUBLIC API: LISTING ENTRIES
# -----------------------------------------------------------------------------

def validate_entries(records: Iterable[Any]) -> List[Entry]:
    """
    Validate and normalize a complete listing.

    The whole listing is checked before anything is returned, so a single
    malformed record aborts the transform without partial output.

    Args:
        records: Entry objects or mappings shaped like ``{"path", "type"}``.

    Returns:
        List[Entry]: Validated entries in input order.

    Raises:
        ValidationError: On the first malformed record.
    """
    entries = [validate_entry(record, index=i) for i, record in enumerate(records)]
    logger.debug(f"Validated {len(entries)} listing entries.")
    return entries


def validate_entry(record: Any, *, index: int | None = None) -> Entry:
    """
    Validate a single listing record.

    Args:
        record: An Entry or a mapping with 'path' and 'type' keys.
        index: Position in the listing, used for error reporting.

    Returns:
        Entry: The normalized entry.

    Raises:
        ValidationError: If the path is empty, starts with the separator,
            or the type tag is not recognized.
    """
    if isinstance(record, Entry):
        path, raw_type = record.path, record.kind
    elif isinstance(record, Mapping):
        path, raw_type = record.get("path"), record.get("type", record.get("kind"))
    else:
        raise ValidationError(
            f"expected a mapping with 'path' and 'type', got {type(record).__name__}",
            index=index, entry=record,
        )

    if not isinstance(path, str) or not path:
        raise ValidationError("path must be a non-empty string", index=index, entry=record)
    if path.startswith(PATH_SEPARATOR):
        raise ValidationError(
            f"path must not start with '{PATH_SEPARATOR}'", index=index, entry=record
        )
    if "" in path.split(PATH_SEPARATOR):
        raise ValidationError("path contains an empty segment", index=index, entry=record)

    kind = _resolve_kind(raw_type)
    if kind is None:
        raise ValidationError(
            f"unrecognized type {raw_type!r} (expected one of {sorted(_TYPE_ALIASES)})",
            index=index, entry=record,
        )

    return record if isinstance(record, Entry) else Entry(path=path, kind=kind)

# -----------------------------------------------------------------------------
# PUBLIC API: CONFIGURATION
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (e.g., from CLI or persisted JSON) into strictly
    typed parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = [
        "source", "repo_name", "output_dir", "output_prefix",
        "annotations_file", "github_token_env",
    ]

    bool_fields = [
        "export_graph_json", "export_graph_html", "export_report", "export_report_json",
        "print_tree", "print_report",
    ]

    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    merged["page_capacity"] = _as_positive_int(
        merged.get("page_capacity"), defaults["page_capacity"], "page_capacity",
        warnings, strict,
    )

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _resolve_kind(raw_type: Any) -> EntryKind | None:
    if isinstance(raw_type, EntryKind):
        return raw_type
    if isinstance(raw_type, str):
        return _TYPE_ALIASES.get(raw_type.strip().lower())
    return None


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(
        value: Any, fallback: int, field: str, warnings: List[str], strict: bool
) -> int:
    """Coerce numeric strings and numbers into a strictly positive int."""
    if value is None:
        return fallback

    candidate: int | None = None
    if isinstance(value, int) and not isinstance(value, bool):
        candidate = value
    elif not strict and isinstance(value, str) and value.strip().isdigit():
        candidate = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {candidate}.")

    if candidate is not None and candidate > 0:
        return candidate

    msg = f"Invalid field '{field}': expected positive int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
