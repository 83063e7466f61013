"""Extension-keyed registry of document loaders.

The registry maps a file extension (the final dot-segment, dot included)
to a :class:`BaseLoader` and falls back to a single default loader for
everything else. Matching is case-sensitive: ``.MD`` and ``.md`` are
different keys. Files without an extension, and dotfiles such as
``.bashrc``, have the empty extension and always use the fallback.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

from src.ingestion.identity import DocumentIdentity
from src.libs.loader.base_loader import BaseLoader, PathLike
from src.libs.loader.text_loader import PlainTextLoader


logger = logging.getLogger(__name__)


def extension_of(path: PathLike) -> str:
    """Return the final dot-segment of ``path`` including the dot.

    >>> extension_of("notes/readme.md")
    '.md'
    >>> extension_of("archive.tar.gz")
    '.gz'
    >>> extension_of("Makefile")
    ''
    """

    return os.path.splitext(os.fspath(path))[1]


class LoaderRegistry:
    """Chooses the loader responsible for each file path.

    There is no removal or priority mechanism: registering an extension a
    second time replaces the previous loader.

    Args:
        fallback: Loader used for unregistered extensions. Defaults to a
            :class:`PlainTextLoader` bound to ``identity``.
        identity: Identity model for the default fallback.
    """

    def __init__(
        self,
        fallback: Optional[BaseLoader] = None,
        identity: Optional[DocumentIdentity] = None,
    ) -> None:
        self._loaders: Dict[str, BaseLoader] = {}
        self._fallback = fallback if fallback is not None else PlainTextLoader(identity=identity)

    @property
    def fallback(self) -> BaseLoader:
        return self._fallback

    def register(self, extension: str, loader: BaseLoader) -> None:
        """Register ``loader`` for files ending in ``extension``.

        Args:
            extension: Extension including the leading dot, e.g. ``".csv"``.
            loader: The loader instance to dispatch to.

        Raises:
            ValueError: If ``loader`` is not a :class:`BaseLoader` or the
                extension does not start with a dot.
        """
        if not isinstance(loader, BaseLoader):
            raise ValueError(
                f"Loader {type(loader).__name__} must inherit from BaseLoader"
            )
        if not extension.startswith("."):
            raise ValueError(f"Extension must start with '.', got: {extension!r}")

        if extension in self._loaders:
            logger.debug("Replacing loader for %s", extension)
        self._loaders[extension] = loader

    def get(self, extension: str) -> Optional[BaseLoader]:
        return self._loaders.get(extension)

    def resolve(self, path: PathLike) -> BaseLoader:
        """Return the registered loader for ``path`` or the fallback."""

        loader = self._loaders.get(extension_of(path))
        return loader if loader is not None else self._fallback

    def extensions(self) -> List[str]:
        """List all registered extensions.

        Returns:
            Sorted list of extensions with a dedicated loader.
        """
        return sorted(self._loaders.keys())
