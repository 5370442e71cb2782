"""File-vs-directory classification of scanned entries."""

from pathlib import Path

from modsweep.removal.fsio import AsyncFilesystem
from modsweep.removal.models import EntryKind


class FileClassifier:
    """Classifies a path with a single metadata query.

    Links are never followed. A symbolic link, live or dangling, is
    classified as LINK so that it gets unlinked and nothing it points at
    is ever listed or deleted.

    Args:
        filesystem: Filesystem to query.
    """

    def __init__(self, filesystem: AsyncFilesystem) -> None:
        self._fs = filesystem

    async def classify(self, path: Path) -> EntryKind:
        """Return the kind of ``path``.

        Raises:
            FileNotFoundError: If the path is gone.
            PermissionError: If the metadata query is not allowed.
            OSError: For any other failed metadata query.
        """
        return await self._fs.stat_path(path)
