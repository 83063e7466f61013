"""Unit tests for the lazy directory walker."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

import pytest

from src.core.errors import TraversalError
from src.ingestion.walker import DirectoryWalker, walk


requires_symlinks = pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")


def _reference_listing(directory: str) -> List[str]:
    """Plain recursive depth-first listing used as the expected order."""

    paths: List[str] = []
    for name in os.listdir(directory):
        full_path = os.path.join(directory, name)
        if os.path.isdir(full_path):
            paths.extend(_reference_listing(full_path))
        else:
            paths.append(full_path)
    return paths


async def _collect(walker: DirectoryWalker) -> List[str]:
    return [path async for path in walker]


def _build_tree(root: Path) -> None:
    (root / "a.txt").write_text("a", encoding="utf-8")
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "sub" / "b.txt").write_text("b", encoding="utf-8")
    (root / "sub" / "deeper" / "c.md").write_text("c", encoding="utf-8")
    (root / "z.txt").write_text("z", encoding="utf-8")
    (root / "empty").mkdir()


@pytest.mark.asyncio
async def test_walk_yields_every_file_once_in_reference_order(tmp_path: Path) -> None:
    _build_tree(tmp_path)

    paths = await _collect(walk(tmp_path))

    assert paths == _reference_listing(str(tmp_path))
    assert len(paths) == len(set(paths)) == 4


@pytest.mark.asyncio
async def test_nested_directory_is_exhausted_before_next_sibling(tmp_path: Path) -> None:
    _build_tree(tmp_path)

    paths = await _collect(walk(tmp_path))

    sub_positions = [i for i, path in enumerate(paths) if f"{os.sep}sub{os.sep}" in path]
    assert sub_positions == list(range(sub_positions[0], sub_positions[0] + len(sub_positions)))


@pytest.mark.asyncio
async def test_paths_are_absolute_for_relative_root(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _build_tree(tmp_path)
    monkeypatch.chdir(tmp_path.parent)

    paths = await _collect(walk(tmp_path.name))

    assert paths
    assert all(os.path.isabs(path) for path in paths)
    assert sorted(paths) == sorted(_reference_listing(str(tmp_path)))


@pytest.mark.asyncio
async def test_empty_directory_yields_nothing(tmp_path: Path) -> None:
    assert await _collect(walk(tmp_path)) == []


@pytest.mark.asyncio
async def test_walker_is_single_pass(tmp_path: Path) -> None:
    _build_tree(tmp_path)
    walker = walk(tmp_path)

    first = await _collect(walker)
    second = await _collect(walker)

    assert len(first) == 4
    assert second == []


@pytest.mark.asyncio
async def test_missing_root_fails_when_pulled(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    walker = walk(missing)  # construction performs no I/O

    with pytest.raises(TraversalError) as excinfo:
        await walker.__anext__()

    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


@pytest.mark.asyncio
async def test_file_root_is_rejected(tmp_path: Path) -> None:
    file_path = tmp_path / "file.txt"
    file_path.write_text("x", encoding="utf-8")

    with pytest.raises(TraversalError, match="Not a directory"):
        await _collect(walk(file_path))


@requires_symlinks
@pytest.mark.asyncio
async def test_dangling_symlink_fails_fast_after_earlier_paths(tmp_path: Path) -> None:
    (tmp_path / "dir").mkdir()
    os.symlink(tmp_path / "nowhere", tmp_path / "dir" / "broken")
    walker = walk(tmp_path)

    with pytest.raises(TraversalError) as excinfo:
        await _collect(walker)

    assert excinfo.value.path == str(tmp_path / "dir" / "broken")


@requires_symlinks
@pytest.mark.asyncio
async def test_symlinked_file_is_yielded(tmp_path: Path) -> None:
    target = tmp_path / "target.txt"
    target.write_text("t", encoding="utf-8")
    os.symlink(target, tmp_path / "link.txt")

    paths = await _collect(walk(tmp_path))

    assert sorted(paths) == sorted([str(target), str(tmp_path / "link.txt")])


@requires_symlinks
@pytest.mark.asyncio
async def test_symlinked_directory_is_skipped_by_default(tmp_path: Path) -> None:
    real = tmp_path / "real"
    real.mkdir()
    (real / "inside.txt").write_text("i", encoding="utf-8")
    os.symlink(real, tmp_path / "alias")

    paths = await _collect(walk(tmp_path))

    assert paths == [str(real / "inside.txt")]


@requires_symlinks
@pytest.mark.asyncio
async def test_follow_symlinks_descends_once_per_directory(tmp_path: Path) -> None:
    root = tmp_path / "root"
    (root / "loop").mkdir(parents=True)
    (root / "loop" / "file.txt").write_text("f", encoding="utf-8")
    os.symlink(root, root / "loop" / "back")  # cycle back to the root
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "extra.txt").write_text("e", encoding="utf-8")
    os.symlink(outside, root / "linked")

    paths = await _collect(walk(root, follow_symlinks=True))

    assert sorted(paths) == sorted(
        [str(root / "loop" / "file.txt"), str(root / "linked" / "extra.txt")]
    )
