from __future__ import annotations

"""
Domain Exceptions.

Failures that abort a transform before any output is produced. A missing
annotation is never represented here: it is a normal empty-string value.
"""

from typing import Any, Optional


class ValidationError(ValueError):
    """
    Raised when a listing record cannot be turned into a valid Entry.

    Attributes:
        index: Position of the offending record in the input listing.
        entry: The raw record as received.
        reason: Human-readable description of the defect.
    """

    def __init__(self, reason: str, *, index: Optional[int] = None, entry: Any = None):
        self.index = index
        self.entry = entry
        self.reason = reason
        location = f"entry #{index}" if index is not None else "entry"
        super().__init__(f"Invalid {location} {entry!r}: {reason}")


class RetrievalError(RuntimeError):
    """Raised when the remote repository listing cannot be acquired."""
