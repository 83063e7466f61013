"""Ingestion - Offline document loading.

This package contains the document ingestion core:
- Document model and identity (hashing, chunk-size truncation)
- Lazy directory traversal
- Directory loader (``src.ingestion.pipeline``), which dispatches
  through ``src.libs.loader`` and is therefore imported from its module
"""

from src.ingestion.identity import ChunkSizePolicy, DocumentIdentity, HashCache
from src.ingestion.models import BaseNode, Document
from src.ingestion.walker import DirectoryWalker, walk

__all__ = [
    "BaseNode",
    "ChunkSizePolicy",
    "DirectoryWalker",
    "Document",
    "DocumentIdentity",
    "HashCache",
    "walk",
]
