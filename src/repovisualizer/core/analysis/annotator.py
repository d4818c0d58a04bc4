from __future__ import annotations

"""
Semantic Annotator.

Maps the base name of a repository path to a short human-readable label.
Exact well-known names are resolved first, then the file extension is
matched against an ordered rule table. Tables are injected at construction
so callers can provide their own vocabulary.
"""

import json
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from repovisualizer.domain.constants import (
    DEFAULT_EXTENSION_LABELS,
    DEFAULT_NAME_LABELS,
    PATH_SEPARATOR,
)

logger = logging.getLogger(__name__)

ExtensionRules = Sequence[Tuple[str, str]]

# -----------------------------------------------------------------------------
# ANNOTATOR SERVICE
# -----------------------------------------------------------------------------

class Annotator:
    """
    Pure lookup service over static annotation tables.

    Instances are immutable after construction and therefore safe to share
    between concurrent transforms.
    """

    def __init__(
            self,
            names: Optional[Mapping[str, str]] = None,
            extension_rules: Optional[ExtensionRules] = None,
    ):
        """
        Args:
            names: Exact base-name to label mapping.
            extension_rules: Ordered (extension, label) pairs. Extensions are
                given without the leading dot.
        """
        self._names: Mapping[str, str] = MappingProxyType(
            dict(DEFAULT_NAME_LABELS if names is None else names)
        )
        rules = DEFAULT_EXTENSION_LABELS if extension_rules is None else extension_rules
        self._extension_rules: Tuple[Tuple[str, str], ...] = tuple(
            (_normalize_extension(ext), label) for ext, label in rules
        )

    @property
    def names(self) -> Mapping[str, str]:
        return self._names

    @property
    def extension_rules(self) -> Tuple[Tuple[str, str], ...]:
        return self._extension_rules

    def annotate(self, path: str) -> str:
        """
        Resolve the semantic label for a repository path.

        Args:
            path: Repository-relative path or bare name.

        Returns:
            str: The label, or an empty string when no rule applies.
        """
        name = path.split(PATH_SEPARATOR)[-1]

        label = self._names.get(name)
        if label is not None:
            return label

        if "." not in name:
            return ""
        extension = name.rsplit(".", 1)[1]
        for rule_ext, rule_label in self._extension_rules:
            if extension == rule_ext:
                return rule_label
        return ""

    __call__ = annotate

    def merged_with(
            self,
            names: Optional[Mapping[str, str]] = None,
            extension_rules: Optional[ExtensionRules] = None,
    ) -> "Annotator":
        """
        Build a new Annotator layering overrides on top of this one.

        Name overrides replace matching keys. Extension overrides take
        precedence over existing rules for the same extension and are
        evaluated before the remaining inherited rules.
        """
        merged_names: Dict[str, str] = dict(self._names)
        merged_names.update(names or {})

        overrides = [(_normalize_extension(e), l) for e, l in (extension_rules or [])]
        overridden = {ext for ext, _ in overrides}
        inherited = [(e, l) for e, l in self._extension_rules if e not in overridden]

        return Annotator(merged_names, overrides + inherited)

    @classmethod
    def from_file(cls, file_path: str, base: Optional["Annotator"] = None) -> "Annotator":
        """
        Load annotation overrides from a JSON document.

        Expected layout::

            {"names": {"Makefile": "Build Script"},
             "extensions": [["py", "Python Module"]]}

        Args:
            file_path: Path to the JSON document.
            base: Annotator to extend. Defaults to the built-in tables.

        Returns:
            Annotator: A new instance combining base tables and overrides.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the document does not match the expected layout.
        """
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        names, rules = _parse_tables(data, file_path)
        logger.debug(
            f"Loaded annotation overrides from {file_path}: "
            f"{len(names)} names, {len(rules)} extension rules."
        )
        return (base or default_annotator()).merged_with(names, rules)

# -----------------------------------------------------------------------------
# SHARED INSTANCE
# -----------------------------------------------------------------------------

_DEFAULT_ANNOTATOR: Optional[Annotator] = None


def default_annotator() -> Annotator:
    """Return the shared Annotator over the built-in tables, built on first use."""
    global _DEFAULT_ANNOTATOR
    if _DEFAULT_ANNOTATOR is None:
        _DEFAULT_ANNOTATOR = Annotator()
    return _DEFAULT_ANNOTATOR


def annotate(path: str) -> str:
    """Annotate a path with the built-in tables."""
    return default_annotator().annotate(path)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _normalize_extension(ext: str) -> str:
    return ext[1:] if ext.startswith(".") else ext


def _parse_tables(data: Any, source: str) -> Tuple[Dict[str, str], List[Tuple[str, str]]]:
    """Validate the raw JSON structure of an annotation override file."""
    if not isinstance(data, dict):
        raise ValueError(f"Annotation file '{source}' must contain a JSON object.")

    raw_names = data.get("names", {})
    if not isinstance(raw_names, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw_names.items()
    ):
        raise ValueError(f"Annotation file '{source}': 'names' must map strings to strings.")

    raw_rules = data.get("extensions", [])
    if isinstance(raw_rules, dict):
        raw_rules = list(raw_rules.items())
    if not isinstance(raw_rules, list):
        raise ValueError(f"Annotation file '{source}': 'extensions' must be a list of pairs.")

    rules: List[Tuple[str, str]] = []
    for item in _as_pairs(raw_rules, source):
        rules.append(item)

    return dict(raw_names), rules


def _as_pairs(items: Iterable[Any], source: str) -> Iterable[Tuple[str, str]]:
    for item in items:
        if (
                not isinstance(item, (list, tuple))
                or len(item) != 2
                or not all(isinstance(v, str) for v in item)
        ):
            raise ValueError(
                f"Annotation file '{source}': invalid extension rule {item!r}."
            )
        yield item[0], item[1]
