"""Document identity model.

This module owns the two derived views of a :class:`Document`:

- ``id``: a SHA-256 digest over the raw text followed by the JSON
  serialization of the ordered metadata entries, memoized in an explicit
  :class:`HashCache`.
- ``content``: the metadata serialization, a newline and the text (or the
  bare text when metadata is empty), cut down to the configured chunk
  size by :meth:`DocumentIdentity.apply_chunk_size`.

Design Principles Applied:
- Explicit state: the chunk-size threshold lives on a shared
  :class:`ChunkSizePolicy` handle and the digest memo on a
  :class:`HashCache`, both passed in at construction.
- Pure identity: ``id`` never depends on the chunk-size threshold.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

if TYPE_CHECKING:
    from src.core.settings import Settings


logger = logging.getLogger(__name__)

JSONValue = Any
Metadata = Dict[str, JSONValue]
EvictionPolicy = Callable[["OrderedDict[str, str]"], None]

_ID_PREFIX_LENGTH = 8


def unbounded(entries: "OrderedDict[str, str]") -> None:
    """Eviction policy that keeps every entry for the cache's lifetime."""


def max_entries(limit: int) -> EvictionPolicy:
    """Build an eviction policy that drops the oldest entries above ``limit``.

    Args:
        limit: Maximum number of digests to retain. Must be positive.

    Returns:
        A policy callable suitable for :class:`HashCache`.

    Raises:
        ValueError: If ``limit`` is not positive.
    """

    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    def _evict(entries: "OrderedDict[str, str]") -> None:
        while len(entries) > limit:
            entries.popitem(last=False)

    return _evict


class HashCache:
    """Memo table from a canonical ``(text, metadata)`` key to its digest.

    ``hits`` and ``misses`` count lookups so callers can verify that each
    distinct input is hashed once.
    """

    def __init__(self, eviction_policy: Optional[EvictionPolicy] = None) -> None:
        self._entries: "OrderedDict[str, str]" = OrderedDict()
        self._eviction_policy = eviction_policy or unbounded
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: str, compute: Callable[[], str]) -> str:
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        value = compute()
        self._entries[key] = value
        self._eviction_policy(self._entries)
        return value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class ChunkSizePolicy:
    """Mutable chunk-size threshold shared by every document of an identity model.

    ``None`` disables truncation. Changes apply to every later ``content``
    access made through the owning :class:`DocumentIdentity`.
    """

    chunk_size: Optional[int] = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ChunkSizePolicy":
        ingestion = getattr(settings, "ingestion", None)
        if ingestion is None:
            return cls()
        return cls(chunk_size=ingestion.chunk_size)


def serialize_metadata(metadata: Mapping[str, Any]) -> str:
    """Serialize metadata as a JSON list of ``[key, value]`` pairs.

    Insertion order is preserved. Compact separators and raw non-ASCII
    characters keep the output identical to ``JSON.stringify``.
    """

    entries = [[key, value] for key, value in metadata.items()]
    return json.dumps(entries, separators=(",", ":"), ensure_ascii=False)


def sha256_digest(text: str, metadata: Mapping[str, Any]) -> str:
    """Compute the uncached document digest."""

    hasher = hashlib.sha256()
    # lone surrogates (undecodable file names) must hash, not raise
    hasher.update(text.encode("utf-8", errors="surrogatepass"))
    hasher.update(serialize_metadata(metadata).encode("utf-8", errors="surrogatepass"))
    return hasher.hexdigest()


def _cache_key(text: str, metadata: Mapping[str, Any]) -> str:
    entries = [[key, value] for key, value in metadata.items()]
    return json.dumps([text, entries], separators=(",", ":"), ensure_ascii=False)


class DocumentIdentity:
    """Computes ``id`` and ``content`` for documents without mutating them.

    Args:
        policy: Shared chunk-size handle. A fresh unset policy is created
            when omitted.
        cache: Digest memo. A fresh unbounded cache is created when omitted.
    """

    def __init__(
        self,
        policy: Optional[ChunkSizePolicy] = None,
        cache: Optional[HashCache] = None,
    ) -> None:
        self.policy = policy if policy is not None else ChunkSizePolicy()
        self.cache = cache if cache is not None else HashCache()

    def compute_id(self, text: str, metadata: Mapping[str, Any]) -> str:
        """Return the hex SHA-256 identifier for ``(text, metadata)``.

        Equal inputs return the same cached string object without hashing
        again.

        Raises:
            TypeError: If ``metadata`` holds values that are not JSON
                serializable.
        """

        key = _cache_key(text, metadata)
        return self.cache.get_or_compute(key, lambda: sha256_digest(text, metadata))

    def render_content(self, text: str, metadata: Mapping[str, Any]) -> str:
        """Return the untruncated content representation."""

        if not metadata:
            return text
        return f"{serialize_metadata(metadata)}\n{text}"

    def apply_chunk_size(self, content: str, doc_id: str) -> str:
        """Truncate ``content`` to the configured chunk size.

        When the threshold is set and exceeded, a warning naming the
        document and the overflow is logged, followed by guidance on how
        to silence it, and the first ``chunk_size`` characters are
        returned. Otherwise ``content`` is returned unchanged.

        Raises:
            ValueError: If the chunk size is set but is not a positive
                integer.
        """

        chunk_size = self.policy.chunk_size
        if chunk_size is not None and (
            isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0
        ):
            raise ValueError(f"chunk size must be a positive integer or None, got {chunk_size!r}")
        if chunk_size is None or len(content) <= chunk_size:
            return content

        logger.warning(
            "Document (%s) is larger than chunk size %d: %d characters (%d over)",
            doc_id[:_ID_PREFIX_LENGTH],
            chunk_size,
            len(content),
            len(content) - chunk_size,
        )
        logger.warning("Truncating content...")
        logger.warning("If you want to disable this warning:")
        logger.warning("  1. Set the chunk size to None")
        logger.warning("  2. Set the chunk size to a larger value")
        logger.warning("  3. Change the way of splitting content into different chunks")
        return content[:chunk_size]

    def content_of(self, text: str, metadata: Mapping[str, Any]) -> str:
        """Return the externally visible content for ``(text, metadata)``."""

        content = self.render_content(text, metadata)
        if self.policy.chunk_size is None:
            return content
        return self.apply_chunk_size(content, self.compute_id(text, metadata))


_DEFAULT_IDENTITY = DocumentIdentity()


def default_identity() -> DocumentIdentity:
    """Return the identity model shared by documents built without one."""

    return _DEFAULT_IDENTITY


def identity_from_settings(settings: "Settings", cache: Optional[HashCache] = None) -> DocumentIdentity:
    """Create an identity model whose chunk-size policy is seeded from settings."""

    return DocumentIdentity(policy=ChunkSizePolicy.from_settings(settings), cache=cache)

