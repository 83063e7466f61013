"""Directory loading pipeline.

:class:`DirectoryLoader` drives a :class:`DirectoryWalker` over a root
directory, dispatches every emitted path through a
:class:`LoaderRegistry` and collects the resulting documents in traversal
order. Reads are awaited one at a time; the first failure aborts the
whole call and no partial result is returned.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from src.ingestion.identity import DocumentIdentity, identity_from_settings
from src.ingestion.models import Document
from src.ingestion.walker import PathLike, walk
from src.libs.loader.loader_registry import LoaderRegistry
from src.observability.logger import get_logger

if TYPE_CHECKING:
    from src.core.settings import Settings


logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "src"


class DirectoryLoader:
    """Loads every file under a directory into a :class:`Document`.

    Args:
        registry: Loader dispatch table. A registry holding only the
            plain-text fallback is created when omitted.
        follow_symlinks: Passed to the walker; descend into symlinked
            directories with cycle detection.
    """

    def __init__(
        self,
        registry: Optional[LoaderRegistry] = None,
        follow_symlinks: bool = False,
    ) -> None:
        self.registry = registry if registry is not None else LoaderRegistry()
        self.follow_symlinks = follow_symlinks

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        identity: Optional[DocumentIdentity] = None,
    ) -> "DirectoryLoader":
        """Create a loader configured from ingestion settings.

        Also applies ``settings.observability.log_level`` to the package
        loggers.

        Args:
            settings: Application settings.
            identity: Identity model for the produced documents. When
                omitted, a new one is seeded with
                ``settings.ingestion.chunk_size``.

        Returns:
            A :class:`DirectoryLoader` with a default registry.
        """

        get_logger(PACKAGE_LOGGER, settings.observability.log_level)
        if identity is None:
            identity = identity_from_settings(settings)
        return cls(
            registry=LoaderRegistry(identity=identity),
            follow_symlinks=settings.ingestion.follow_symlinks,
        )

    async def load_data(self, root_path: PathLike) -> List[Document]:
        """Load all documents below ``root_path`` in traversal order.

        Args:
            root_path: Directory to load.

        Returns:
            Documents in the order the walker emitted their paths.

        Raises:
            TraversalError: If a directory or entry cannot be accessed.
            ReadError: If a loader cannot read a file.
        """

        documents: List[Document] = []
        async for path in walk(root_path, follow_symlinks=self.follow_symlinks):
            loader = self.registry.resolve(path)
            logger.debug("Loading %s with %s", path, type(loader).__name__)
            documents.append(await loader.load(path))

        logger.info("Loaded %d documents from %s", len(documents), root_path)
        return documents
