"""Recursive tree listing on top of a :class:`ContentSource`.

Sibling subdirectories are listed concurrently (bounded by a semaphore), but
the returned list is always in depth-first traversal order: each
directory's files and subtrees appear in listing order, so callers relying
on "first match wins" see the same sequence as a sequential walk.
"""

from __future__ import annotations

import asyncio
import logging

from theme_converter.domain.entities import RemoteEntry
from theme_converter.domain.ports.content_source import ContentSource
from theme_converter.domain.value_objects import CancellationToken, RepositoryRef
from theme_converter.services.file_classifier import should_descend

logger = logging.getLogger(__name__)


class TreeWalker:
    """Turn a repository reference into a flat, ordered list of files."""

    def __init__(self, source: ContentSource, max_concurrency: int = 4) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._source = source
        self._max_concurrency = max_concurrency

    async def list_all_files(
        self, ref: RepositoryRef, token: CancellationToken | None = None
    ) -> list[RemoteEntry]:
        """Return every reachable file entry, in traversal order."""
        sem = asyncio.Semaphore(self._max_concurrency)
        files = await self._walk(ref, "", sem, token)
        logger.info("Listed %d files in %s", len(files), ref.full_name)
        return files

    async def _walk(
        self,
        ref: RepositoryRef,
        path: str,
        sem: asyncio.Semaphore,
        token: CancellationToken | None,
    ) -> list[RemoteEntry]:
        # Only the network call holds the semaphore; holding it across the
        # recursion would deadlock once the tree is deeper than the limit.
        async with sem:
            if token is not None:
                token.raise_if_cancelled()
            entries = await self._source.list_directory(ref, path, token)

        subdirs = [e for e in entries if e.is_directory and should_descend(e.name)]
        skipped = sum(1 for e in entries if e.is_directory) - len(subdirs)
        if skipped:
            logger.debug("Skipped %d excluded directories under '%s'", skipped, path or "/")

        subtrees = await _gather_all(
            [self._walk(ref, d.path, sem, token) for d in subdirs]
        )
        subtree_by_path = dict(zip((d.path for d in subdirs), subtrees))

        files: list[RemoteEntry] = []
        for entry in entries:
            if entry.is_file:
                files.append(entry)
            elif entry.path in subtree_by_path:
                files.extend(subtree_by_path[entry.path])
        return files


async def _gather_all(coros: list) -> list[list[RemoteEntry]]:
    """Run *coros* concurrently; on the first failure cancel the rest."""
    if not coros:
        return []
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
