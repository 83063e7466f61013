"""Exception taxonomy for the ingestion core.

All failures are fail-fast: the first error aborts the surrounding
``load_data`` call and reaches the caller unchanged, with the original
``OSError``/``UnicodeDecodeError`` chained as ``__cause__``.
"""

from __future__ import annotations

from typing import Optional


class IngestionError(Exception):
    """Base class for ingestion failures tied to a filesystem path."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class TraversalError(IngestionError):
    """Raised when a directory or entry cannot be listed or stat'ed."""


class ReadError(IngestionError):
    """Raised when a loader cannot produce a Document from a path."""
