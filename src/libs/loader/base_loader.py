"""Abstract base class for document loaders.

Loader components are responsible for turning raw files on disk into
canonical ``Document`` objects used by the ingestion pipeline.

Design principles:
- Pluggable: concrete loaders implement a common ``BaseLoader``
  interface and are registered per file extension in a
  :class:`~src.libs.loader.loader_registry.LoaderRegistry`.
- Identity-aware: every loader builds its documents against one
  :class:`DocumentIdentity`, so they share its chunk-size policy and
  hash cache.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from src.core.errors import ReadError
from src.ingestion.identity import DocumentIdentity, Metadata, default_identity
from src.ingestion.models import Document


PathLike = Union[str, Path]


class BaseLoader(ABC):
    """Abstract base class for document loaders.

    Subclasses must implement :meth:`load` to read a file from disk and
    produce a :class:`Document` instance with appropriate metadata.

    Args:
        identity: Identity model for the produced documents. Defaults to
            the shared process-wide instance.
    """

    def __init__(self, identity: Optional[DocumentIdentity] = None) -> None:
        self.identity = identity if identity is not None else default_identity()

    @abstractmethod
    async def load(
        self,
        path: PathLike,
        **kwargs: Any,
    ) -> Document:
        """Load a document from the given path.

        Args:
            path: Path to the source file on disk.
            **kwargs: Loader-specific options.

        Returns:
            A :class:`Document` representing the loaded file.

        Raises:
            ReadError: If the file cannot be read or decoded.
        """
        raise NotImplementedError

    def make_document(self, text: str, metadata: Optional[Metadata] = None) -> Document:
        """Build a document bound to this loader's identity model."""

        return Document(text=text, metadata=metadata or {}, identity=self.identity)

    def validate_path(self, path: PathLike) -> Path:
        """Validate that the given path points to an existing file.

        Args:
            path: String or :class:`Path` to validate.

        Returns:
            A normalised :class:`Path` object.

        Raises:
            ReadError: If the path does not exist or is not a file.
        """

        file_path = path if isinstance(path, Path) else Path(path)

        if not file_path.exists():
            raise ReadError(f"File not found: {file_path}", path=str(file_path))
        if not file_path.is_file():
            raise ReadError(f"Expected a file path, got: {file_path}", path=str(file_path))

        return file_path
