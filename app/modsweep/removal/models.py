"""Removal domain models.

This module defines the data structures shared by the scan and removal
stages: entry kinds, the per-target scan accumulator, the per-target
pipeline state machine, and the immutable outcome records reported
once a removal run has finished.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from modsweep.removal.errors import SweepError


class EntryKind(str, Enum):
    """Kind of filesystem entry as seen by the classifier.

    Attributes:
        FILE: A non-directory entry that is removed with unlink.
        DIRECTORY: A directory that must be emptied before removal.
        LINK: A symbolic link, live or dangling. Unlinked, never followed.
    """

    FILE = "file"
    DIRECTORY = "directory"
    LINK = "link"


class PipelinePhase(str, Enum):
    """Phase of a single target's scan-then-remove pipeline.

    Attributes:
        SCANNING: Descendants are still being enumerated.
        REMOVING: Scan finished; files and directories are being deleted.
        DONE: Every descendant was removed.
        FAILED: A scan or removal error stopped the pipeline.
    """

    SCANNING = "scanning"
    REMOVING = "removing"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class ScanResult:
    """Accumulator filled in by one scan of one target root.

    Attributes:
        root: Directory the scan started from.
        root_kind: DIRECTORY, or LINK when the target itself is a symbolic
            link. A linked root is never listed and has no descendants.
        files: Every descendant that is not a directory.
        directories: Every descendant directory (the root excluded).
        pending: Directories whose direct entries are still being classified.
    """

    root: Path
    root_kind: EntryKind = EntryKind.DIRECTORY
    files: set[Path] = field(default_factory=set)
    directories: set[Path] = field(default_factory=set)
    pending: set[Path] = field(default_factory=set)

    @property
    def is_complete(self) -> bool:
        """A scan is complete exactly when no directory is pending."""
        return not self.pending


class InvalidTransitionError(RuntimeError):
    """Raised when a TargetState is advanced out of order."""


@dataclass(slots=True)
class TargetState:
    """Explicit state machine for one target's pipeline.

    The coordinator advances each target through
    SCANNING -> REMOVING -> DONE, or into FAILED from either of the
    first two phases. Transitions are only made from the event loop
    thread, so no locking is needed.

    Attributes:
        target: Top-level directory being removed.
        phase: Current pipeline phase.
        result: Scan result once scanning has finished.
        error: Error that moved the pipeline into FAILED.
        files_removed: Number of files deleted so far.
        directories_removed: Number of nested directories deleted so far.
        top_level_removed: Whether the target directory itself was deleted.
    """

    target: Path
    phase: PipelinePhase = PipelinePhase.SCANNING
    result: ScanResult | None = None
    error: SweepError | None = None
    files_removed: int = 0
    directories_removed: int = 0
    top_level_removed: bool = False

    def scan_finished(self, result: ScanResult) -> None:
        """Move from SCANNING to REMOVING with a complete scan result."""
        self._require(PipelinePhase.SCANNING)
        if not result.is_complete:
            msg = f"Scan of {self.target} finished with pending directories"
            raise InvalidTransitionError(msg)
        self.result = result
        self.phase = PipelinePhase.REMOVING

    def removal_finished(self) -> None:
        """Move from REMOVING to DONE."""
        self._require(PipelinePhase.REMOVING)
        self.phase = PipelinePhase.DONE

    def fail(self, error: SweepError) -> None:
        """Move into FAILED from any phase other than FAILED."""
        if self.phase == PipelinePhase.FAILED:
            msg = f"Target {self.target} has already failed"
            raise InvalidTransitionError(msg)
        self.error = error
        self.phase = PipelinePhase.FAILED

    @property
    def finished(self) -> bool:
        return self.phase in (PipelinePhase.DONE, PipelinePhase.FAILED)

    def _require(self, phase: PipelinePhase) -> None:
        if self.phase != phase:
            msg = f"Target {self.target} is {self.phase.value}, expected {phase.value}"
            raise InvalidTransitionError(msg)


@dataclass(frozen=True, slots=True)
class TargetOutcome:
    """Final, immutable summary of one target after a removal run.

    Attributes:
        target: Top-level directory that was processed.
        phase: Phase the pipeline ended in (DONE or FAILED).
        files: Number of files found (dry-run) or removed.
        directories: Number of nested directories found (dry-run) or removed.
        top_level_removed: Whether the target directory itself was deleted.
        error: Human-readable error message for failed targets.
        dry_run: Whether nothing was actually deleted.
    """

    target: Path
    phase: PipelinePhase
    files: int = 0
    directories: int = 0
    top_level_removed: bool = False
    error: str | None = None
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return self.phase == PipelinePhase.DONE

    @classmethod
    def from_state(cls, state: TargetState, *, dry_run: bool = False) -> "TargetOutcome":
        """Freeze a finished TargetState into an outcome record.

        Raises:
            InvalidTransitionError: If the pipeline is still running.
        """
        if not state.finished:
            msg = f"Target {state.target} is still {state.phase.value}"
            raise InvalidTransitionError(msg)
        if dry_run and state.result is not None:
            files = len(state.result.files)
            directories = len(state.result.directories)
        else:
            files = state.files_removed
            directories = state.directories_removed
        return cls(
            target=state.target,
            phase=state.phase,
            files=files,
            directories=directories,
            top_level_removed=state.top_level_removed,
            error=str(state.error) if state.error is not None else None,
            dry_run=dry_run,
        )


@dataclass(frozen=True, slots=True)
class RemovalReport:
    """Aggregate result of a coordinator run."""

    outcomes: tuple[TargetOutcome, ...] = ()

    @property
    def succeeded(self) -> list[TargetOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[TargetOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def ok(self) -> bool:
        """True when every target finished without error."""
        return not self.failed

    def outcome_for(self, target: Path) -> TargetOutcome | None:
        for outcome in self.outcomes:
            if outcome.target == target:
                return outcome
        return None
