"""Core data models for ingestion."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.ingestion.identity import DocumentIdentity, Metadata, default_identity


class BaseNode(ABC):
    """A unit of ingested knowledge with a content-addressed identifier."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Content-addressed identifier."""

    @property
    @abstractmethod
    def content(self) -> str:
        """Externally visible representation."""


@dataclass(eq=False)
class Document(BaseNode):
    """Represents a source document before chunking.

    ``id`` and ``content`` are derived on every access through the
    document's :class:`DocumentIdentity`; neither is stored. Two documents
    are equal when their ids are equal, i.e. when their text and ordered
    metadata match.
    """

    text: str
    metadata: Metadata = field(default_factory=dict)
    identity: DocumentIdentity = field(default_factory=default_identity, repr=False)

    @property
    def id(self) -> str:
        return self.identity.compute_id(self.text, self.metadata)

    @property
    def content(self) -> str:
        return self.identity.content_of(self.text, self.metadata)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "text": self.text,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        identity: Optional[DocumentIdentity] = None,
    ) -> "Document":
        """Deserialize from dictionary.

        The stored ``id`` is not trusted; it is recomputed from ``text``
        and ``metadata``.
        """
        return cls(
            text=data["text"],
            metadata=dict(data.get("metadata") or {}),
            identity=identity if identity is not None else default_identity(),
        )
