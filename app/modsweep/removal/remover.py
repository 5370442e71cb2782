"""Deletion of a scanned subtree, files first and directories deepest-first.

Directory depth is never computed. Instead every directory is re-listed
right before it is deleted and only removed once that fresh listing is
empty; directories that still hold entries are requeued. Since all files
are gone before the first re-check, a directory can only become empty
after every directory below it has been removed.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Iterable
from pathlib import Path

from modsweep.removal.errors import DirectoryNotDrainedError, RemovalError, first_error
from modsweep.removal.fsio import AsyncFilesystem
from modsweep.removal.models import ScanResult

logger = logging.getLogger(__name__)

# Progress hooks receive the path that was just deleted.
DeleteHook = Callable[[Path], None]


class SubtreeRemover:
    """Removes the files and directories found by one scan.

    Args:
        filesystem: Filesystem to delete through.
        on_file_deleted: Called after each successful file delete.
        on_directory_deleted: Called after each successful directory delete.
    """

    def __init__(
        self,
        filesystem: AsyncFilesystem,
        *,
        on_file_deleted: DeleteHook | None = None,
        on_directory_deleted: DeleteHook | None = None,
    ) -> None:
        self._fs = filesystem
        self._on_file_deleted = on_file_deleted
        self._on_directory_deleted = on_directory_deleted

    async def remove_scan(self, result: ScanResult) -> None:
        """Remove everything recorded in a complete ScanResult."""
        await self.remove(result.files, result.directories)

    async def remove(self, files: Iterable[Path], directories: Iterable[Path]) -> None:
        """Delete ``files``, then drain ``directories`` as they become empty.

        The target root is not touched; only the given paths are deleted.
        Nothing is rolled back on failure.

        Raises:
            RemovalError: If a delete or an emptiness re-check fails, or if
                a directory is still not empty after a full pass in which
                no directory could be removed.
        """
        await self._delete_files(files)

        queue = deque(directories)
        if not queue:
            return

        logger.debug("Files removed, draining %d directories", len(queue))
        await self._drain_directories(queue)

    async def _delete_files(self, files: Iterable[Path]) -> None:
        try:
            async with asyncio.TaskGroup() as tg:
                for path in files:
                    tg.create_task(self._delete_file(path))
        except ExceptionGroup as group:
            error = first_error(group, RemovalError)
            if error is None:
                raise
            raise error

    async def _delete_file(self, path: Path) -> None:
        try:
            await self._fs.delete_file(path)
        except OSError as e:
            raise RemovalError(path, e) from e
        if self._on_file_deleted is not None:
            self._on_file_deleted(path)

    async def _drain_directories(self, queue: deque[Path]) -> None:
        # Directories requeued in a row without any deletion in between.
        stalled = 0
        while queue:
            directory = queue.popleft()
            try:
                entries = await self._fs.list_directory(directory)
            except OSError as e:
                raise RemovalError(directory, e) from e

            if entries:
                queue.append(directory)
                stalled += 1
                if stalled >= len(queue):
                    stuck = queue[0]
                    cause = DirectoryNotDrainedError("directory never became empty")
                    raise RemovalError(stuck, cause)
                logger.debug("Directory %s not empty yet, requeued", directory)
                continue

            try:
                await self._fs.delete_empty_directory(directory)
            except OSError as e:
                raise RemovalError(directory, e) from e
            stalled = 0
            if self._on_directory_deleted is not None:
                self._on_directory_deleted(directory)
