"""Errors raised by the scan and removal stages.

Both concrete errors are terminal for the pipeline of the target they
occur in, and both carry the offending path and the underlying OS error.
"""

from pathlib import Path


class SweepError(Exception):
    """Base exception for per-target pipeline failures.

    Attributes:
        path: Filesystem path the failing operation was applied to.
        cause: Underlying exception (usually an OSError).
    """

    action = "process"

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot {self.action} {path}: {_describe(cause)}")


class ScanError(SweepError):
    """Raised when a directory listing or metadata query fails."""

    action = "scan"


class RemovalError(SweepError):
    """Raised when a delete, or the emptiness re-check before one, fails."""

    action = "remove"


class DirectoryNotDrainedError(OSError):
    """A directory stayed non-empty through a full removal pass.

    Used as the cause of a RemovalError when entries that were not part
    of the scan result keep a directory from ever becoming empty.
    """


def first_error(group: BaseExceptionGroup, kind: type[SweepError]) -> SweepError | None:
    """Return the first leaf of ``group`` (searched depth-first) that is a ``kind``."""
    for exc in group.exceptions:
        if isinstance(exc, BaseExceptionGroup):
            found = first_error(exc, kind)
            if found is not None:
                return found
        elif isinstance(exc, kind):
            return exc
    return None


def _describe(cause: BaseException) -> str:
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    return str(cause) or type(cause).__name__
