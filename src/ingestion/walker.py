"""Lazy depth-first directory traversal.

:class:`DirectoryWalker` yields the absolute path of every non-directory
entry under a root, depth-first and pre-order, with siblings in the order
returned by ``os.listdir``. Listing and status checks run in a worker
thread via :func:`asyncio.to_thread` and are awaited one at a time.

Symbolic links are inspected with ``lstat``:

- a link to a file is yielded like any other file;
- a dangling link raises :class:`TraversalError`;
- a link to a directory is skipped unless ``follow_symlinks`` is set, in
  which case it is descended once per ``(st_dev, st_ino)`` so link cycles
  terminate.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from pathlib import Path
from typing import List, Set, Tuple, Union

from src.core.errors import TraversalError


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DirectoryWalker:
    """Single-pass async iterator over the files below ``root``.

    The walker keeps an explicit stack of pending entries instead of
    recursing, so deep trees do not grow the call stack. Iterating it a
    second time yields nothing.

    Args:
        root: Directory to traverse. Made absolute on construction.
        follow_symlinks: Descend into symlinked directories, guarding
            against cycles.
    """

    def __init__(self, root: PathLike, follow_symlinks: bool = False) -> None:
        self.root = os.path.abspath(os.fspath(root))
        self.follow_symlinks = follow_symlinks
        self._pending: List[str] = []
        self._visited: Set[Tuple[int, int]] = set()
        self._started = False

    def __aiter__(self) -> "DirectoryWalker":
        return self

    async def __anext__(self) -> str:
        if not self._started:
            self._started = True
            root_stat = await self._stat(self.root, follow=True)
            if not stat.S_ISDIR(root_stat.st_mode):
                raise TraversalError(f"Not a directory: {self.root}", path=self.root)
            await self._enter(self.root, root_stat)

        while self._pending:
            path = self._pending.pop()
            entry_stat = await self._stat(path, follow=False)

            if stat.S_ISLNK(entry_stat.st_mode):
                entry_stat = await self._stat(path, follow=True)
                if stat.S_ISDIR(entry_stat.st_mode):
                    if self.follow_symlinks:
                        await self._enter(path, entry_stat)
                    else:
                        logger.debug("Skipping symlinked directory: %s", path)
                    continue
                return path

            if stat.S_ISDIR(entry_stat.st_mode):
                await self._enter(path, entry_stat)
                continue

            return path

        raise StopAsyncIteration

    async def _enter(self, directory: str, dir_stat: os.stat_result) -> None:
        key = (dir_stat.st_dev, dir_stat.st_ino)
        if key in self._visited:
            logger.debug("Skipping already visited directory: %s", directory)
            return
        self._visited.add(key)

        try:
            names = await asyncio.to_thread(os.listdir, directory)
        except OSError as exc:
            raise TraversalError(f"Cannot list directory: {directory}", path=directory) from exc

        logger.debug("Entering directory %s (%d entries)", directory, len(names))
        # reversed so the first listed entry is popped first
        self._pending.extend(os.path.join(directory, name) for name in reversed(names))

    @staticmethod
    async def _stat(path: str, follow: bool) -> os.stat_result:
        try:
            return await asyncio.to_thread(os.stat, path, follow_symlinks=follow)
        except OSError as exc:
            raise TraversalError(f"Cannot stat path: {path}", path=path) from exc


def walk(root: PathLike, follow_symlinks: bool = False) -> DirectoryWalker:
    """Return a lazy walker over the files below ``root``."""

    return DirectoryWalker(root, follow_symlinks=follow_symlinks)
