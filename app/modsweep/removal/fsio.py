"""Asynchronous filesystem access for the removal pipeline.

The scanner, classifier and remover never touch ``os`` directly; they go
through an :class:`AsyncFilesystem`. :class:`LocalFilesystem` implements
it on top of ``aiofiles.os``, which runs each blocking syscall in the
event loop's executor so the loop itself never waits on disk I/O.
"""

import asyncio
import contextlib
import logging
import stat
from pathlib import Path
from typing import Protocol

import aiofiles.os

from modsweep.removal.models import EntryKind

logger = logging.getLogger(__name__)


class AsyncFilesystem(Protocol):
    """Filesystem operations consumed by the removal pipeline."""

    async def list_directory(self, path: Path) -> list[str]:
        """Return the names of the direct entries of ``path``."""
        ...

    async def stat_path(self, path: Path) -> EntryKind:
        """Return the kind of ``path`` itself, without following links."""
        ...

    async def delete_file(self, path: Path) -> None:
        """Unlink a non-directory entry."""
        ...

    async def delete_empty_directory(self, path: Path) -> None:
        """Remove a directory; fails if it still has entries."""
        ...


class LocalFilesystem:
    """AsyncFilesystem backed by the local disk via aiofiles.

    Args:
        max_concurrency: Upper bound on filesystem calls in flight at once.
            None or 0 leaves the number of calls unbounded.
    """

    def __init__(self, max_concurrency: int | None = None) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    def _slot(self) -> contextlib.AbstractAsyncContextManager[object]:
        if self._semaphore is None:
            return contextlib.nullcontext()
        return self._semaphore

    async def list_directory(self, path: Path) -> list[str]:
        async with self._slot():
            return await aiofiles.os.listdir(path)

    async def stat_path(self, path: Path) -> EntryKind:
        async with self._slot():
            st = await aiofiles.os.stat(path, follow_symlinks=False)
        if stat.S_ISLNK(st.st_mode):
            return EntryKind.LINK
        if stat.S_ISDIR(st.st_mode):
            return EntryKind.DIRECTORY
        return EntryKind.FILE

    async def delete_file(self, path: Path) -> None:
        async with self._slot():
            await aiofiles.os.remove(path)
        logger.debug("Deleted file %s", path)

    async def delete_empty_directory(self, path: Path) -> None:
        async with self._slot():
            await aiofiles.os.rmdir(path)
        logger.debug("Deleted directory %s", path)
