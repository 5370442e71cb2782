"""Recursive, concurrent enumeration of a target directory.

Scans a target root and sorts every descendant into files and
directories. Each directory is listed as soon as it is discovered and
its entries are classified concurrently, so siblings and subtrees are
explored in parallel rather than depth-first.
"""

import asyncio
import errno
import logging
import os
from pathlib import Path

from modsweep.removal.classifier import FileClassifier
from modsweep.removal.errors import ScanError, first_error
from modsweep.removal.fsio import AsyncFilesystem
from modsweep.removal.models import EntryKind, ScanResult

logger = logging.getLogger(__name__)


class TreeScanner:
    """Enumerates all descendants of a directory.

    A directory is added to ``ScanResult.pending`` when its listing is
    requested and dropped from it only after every one of its direct
    entries has been classified. A subdirectory enters ``pending``
    before its parent leaves it, so ``pending`` only becomes empty once
    the whole tree is known. Symbolic links are recorded as files and
    never descended into.

    Args:
        filesystem: Filesystem to list and stat through.
    """

    def __init__(self, filesystem: AsyncFilesystem) -> None:
        self._fs = filesystem
        self._classifier = FileClassifier(filesystem)

    async def scan(self, root: Path) -> ScanResult:
        """Scan ``root`` and return its fully populated ScanResult.

        The root itself is not part of ``directories``. An empty root
        yields empty sets. A root that is a symbolic link is not listed;
        the result has ``root_kind`` LINK and no descendants.

        Raises:
            ScanError: If any listing or classification fails, or if the
                root is neither a directory nor a link. Remaining work of
                this scan is cancelled; nothing is retried.
        """
        try:
            root_kind = await self._classifier.classify(root)
        except OSError as e:
            raise ScanError(root, e) from e

        if root_kind is EntryKind.LINK:
            logger.debug("Target %s is a symbolic link, not descending", root)
            return ScanResult(root=root, root_kind=root_kind)
        if root_kind is not EntryKind.DIRECTORY:
            cause = NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(root))
            raise ScanError(root, cause)

        result = ScanResult(root=root)
        try:
            async with asyncio.TaskGroup() as tg:
                self._enqueue(tg, result, root)
        except ExceptionGroup as group:
            error = first_error(group, ScanError)
            if error is None:
                raise
            raise error

        logger.debug(
            "Scanned %s: %d files, %d directories",
            root,
            len(result.files),
            len(result.directories),
        )
        return result

    def _enqueue(self, tg: asyncio.TaskGroup, result: ScanResult, directory: Path) -> None:
        result.pending.add(directory)
        tg.create_task(self._enumerate(tg, result, directory))

    async def _enumerate(self, tg: asyncio.TaskGroup, result: ScanResult, directory: Path) -> None:
        try:
            names = await self._fs.list_directory(directory)
        except OSError as e:
            raise ScanError(directory, e) from e

        if names:
            # Fan-in: the directory is done once every entry is classified.
            async with asyncio.TaskGroup() as entries:
                for name in names:
                    entries.create_task(self._classify_entry(tg, result, directory / name))

        result.pending.discard(directory)

    async def _classify_entry(self, tg: asyncio.TaskGroup, result: ScanResult, path: Path) -> None:
        try:
            kind = await self._classifier.classify(path)
        except OSError as e:
            raise ScanError(path, e) from e

        if kind is EntryKind.DIRECTORY:
            result.directories.add(path)
            self._enqueue(tg, result, path)
        else:
            result.files.add(path)
