"""Fan-out of scan-then-remove pipelines over many target directories.

Runs one independent pipeline per target. A failure in one target is
logged and recorded but never stops the others. Once every pipeline has
finished, successful or not, the now-empty top-level directories of the
successful targets are removed. A target that is a symbolic link is
unlinked; nothing it points at is touched.
"""

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from modsweep.removal.errors import RemovalError, SweepError
from modsweep.removal.fsio import AsyncFilesystem, LocalFilesystem
from modsweep.removal.models import (
    EntryKind,
    PipelinePhase,
    RemovalReport,
    TargetOutcome,
    TargetState,
)
from modsweep.removal.remover import SubtreeRemover
from modsweep.removal.scanner import TreeScanner

logger = logging.getLogger(__name__)


class RemovalCoordinator:
    """Removes a set of target directories concurrently.

    One coordinator handles one ``remove_all`` run at a time.

    Args:
        filesystem: Filesystem to operate on. Defaults to the local disk.
        dry_run: Scan every target and report, but delete nothing.
        max_concurrency: Bound on concurrent filesystem calls when the
            default local filesystem is used.
    """

    def __init__(
        self,
        filesystem: AsyncFilesystem | None = None,
        *,
        dry_run: bool = False,
        max_concurrency: int | None = None,
    ) -> None:
        self._fs = filesystem if filesystem is not None else LocalFilesystem(max_concurrency)
        self._scanner = TreeScanner(self._fs)
        self._dry_run = dry_run
        self._states: list[TargetState] = []
        self._outstanding = 0

    @property
    def outstanding(self) -> int:
        """Number of pipelines that have not finished yet."""
        return self._outstanding

    async def remove_all(self, targets: Iterable[Path]) -> RemovalReport:
        """Run one pipeline per distinct target and report the outcomes.

        Args:
            targets: Top-level directories to remove entirely. Duplicates
                are processed once.

        Returns:
            RemovalReport with one outcome per distinct target, in input order.
        """
        self._states = [TargetState(target=t) for t in dict.fromkeys(targets)]
        self._outstanding = len(self._states)
        if not self._states:
            return RemovalReport()

        await asyncio.gather(*(self._run_pipeline(state) for state in self._states))

        return RemovalReport(
            outcomes=tuple(TargetOutcome.from_state(s, dry_run=self._dry_run) for s in self._states)
        )

    async def _run_pipeline(self, state: TargetState) -> None:
        logger.info("Starting removal of %s", state.target)
        try:
            result = await self._scanner.scan(state.target)
            state.scan_finished(result)
            if not self._dry_run:
                remover = SubtreeRemover(
                    self._fs,
                    on_file_deleted=lambda _path: self._count_file(state),
                    on_directory_deleted=lambda _path: self._count_directory(state),
                )
                await remover.remove_scan(result)
            state.removal_finished()
        except SweepError as e:
            state.fail(e)
            logger.warning("Error within %s: %s", state.target, e)

        await self._pipeline_finished(state)

    async def _pipeline_finished(self, state: TargetState) -> None:
        self._outstanding -= 1
        if state.phase == PipelinePhase.DONE:
            logger.info(
                "Finished removing %s, %d remaining in this queue",
                state.target,
                self._outstanding,
            )
        if self._outstanding == 0:
            await self._remove_top_level()

    async def _remove_top_level(self) -> None:
        if self._dry_run:
            return
        for state in self._states:
            if state.phase != PipelinePhase.DONE:
                logger.info("Leaving %s in place after failure", state.target)
                continue
            try:
                await self._delete_target(state)
            except OSError as e:
                error = RemovalError(state.target, e)
                state.fail(error)
                logger.warning("Error within %s: %s", state.target, error)
                continue
            state.top_level_removed = True
            logger.info("Removed %s", state.target)

    async def _delete_target(self, state: TargetState) -> None:
        # A linked target is the link itself; whatever it points at stays.
        if state.result is not None and state.result.root_kind is EntryKind.LINK:
            await self._fs.delete_file(state.target)
        else:
            await self._fs.delete_empty_directory(state.target)

    @staticmethod
    def _count_file(state: TargetState) -> None:
        state.files_removed += 1

    @staticmethod
    def _count_directory(state: TargetState) -> None:
        state.directories_removed += 1
