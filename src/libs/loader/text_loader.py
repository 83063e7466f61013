"""Plain-text loader, the registry's fallback.

Reads the whole file as UTF-8 and wraps it in a :class:`Document` with
empty metadata. No parsing or normalisation is applied.
"""

from __future__ import annotations

import asyncio
from typing import Any

from src.core.errors import ReadError
from src.ingestion.models import Document
from src.libs.loader.base_loader import BaseLoader, PathLike


class PlainTextLoader(BaseLoader):
    """Loader for any file that can be decoded as UTF-8 text."""

    async def load(
        self,
        path: PathLike,
        **_: Any,
    ) -> Document:
        """Load a text file into a :class:`Document`.

        Args:
            path: Path to the file on disk.

        Returns:
            A :class:`Document` whose ``text`` is the file contents.

        Raises:
            ReadError: If the file is missing, unreadable, or not valid
                UTF-8.
        """

        file_path = await asyncio.to_thread(self.validate_path, path)
        try:
            raw = await asyncio.to_thread(file_path.read_bytes)
            # decode outside text mode so "\r\n" and "\r" survive untouched
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ReadError(f"File is not valid UTF-8: {file_path}", path=str(file_path)) from exc
        except OSError as exc:
            raise ReadError(f"Cannot read file: {file_path}", path=str(file_path)) from exc

        return self.make_document(text)
