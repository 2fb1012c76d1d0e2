"""
Command orchestrator for one duplicate-finding run.
This is the single source of business logic used by the CLI; it does no
console formatting and reports through events only.
"""
from typing import List, Optional, Callable
import logging

from dupsweep.core.models import ScanParams, DeletionPlan, RunSummary, RunState
from dupsweep.core.scanner import FileScannerImpl
from dupsweep.core.hasher import HasherImpl, HashlibAlgorithm
from dupsweep.core.grouper import FileGrouperImpl
from dupsweep.core.sorter import Sorter
from dupsweep.core.stages import HashingStage, PrefilterStage
from dupsweep.core.resolver import Resolver, build_plans, total_reclaimable
from dupsweep.core.state import RunStateMachine
from dupsweep.core.events import EventBus, RunFinished
from dupsweep.services.file_service import FileService

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[List[DeletionPlan], int], bool]


class DeduplicationCommand:
    """
    Orchestrates the whole workflow in two calls:
    1. find_duplicates(): enumerate, (prefilter,) hash, group, plan
    2. resolve(confirmed): delete the candidates, or not, then finish

    Usage:
        command = DeduplicationCommand(params)
        command.events.add_listener(renderer)
        plans = command.find_duplicates()
        summary = command.resolve(confirmed=ask_user(plans))

    or in one go with a confirmation callback:
        summary = command.run(confirm=lambda plans, total_bytes: True)
    """

    def __init__(
            self,
            params: ScanParams,
            events: Optional[EventBus] = None,
            stopped_flag: Optional[Callable[[], bool]] = None,
    ):
        self.params = params
        self.events = events or EventBus()
        self.stopped_flag = stopped_flag
        self.state = RunStateMachine(self.events)
        self.summary = RunSummary()
        self.plans: List[DeletionPlan] = []

    def _stopped(self) -> bool:
        return bool(self.stopped_flag and self.stopped_flag())

    def find_duplicates(self) -> List[DeletionPlan]:
        """
        Runs every read-only stage and returns the deletion plans.
        Nothing on disk is modified.

        Raises:
            RuntimeError: If the root directory is missing or not a directory.
        """
        params = self.params

        self.state.advance(RunState.ENUMERATING)
        scanner = FileScannerImpl(
            root_dir=params.root_dir,
            excluded_dirs=params.excluded_dirs,
            min_size=params.min_size_bytes,
            max_size=params.max_size_bytes,
            extensions=params.extensions,
            events=self.events,
        )
        try:
            records = scanner.scan(stopped_flag=self.stopped_flag)
        except RuntimeError:
            self.state.advance(RunState.DONE)
            raise
        self.summary.files_scanned = len(records)
        self.summary.traversal_errors = len(scanner.traversal_errors)
        if self._stopped():
            return self._cancel()

        self.state.advance(RunState.HASHING)
        if params.prefilter:
            prefilter = PrefilterStage(events=self.events).process(records, stopped_flag=self.stopped_flag)
            if prefilter.cancelled:
                return self._cancel()
            self.summary.hash_failures += len(prefilter.failures)
            self.summary.files_skipped = prefilter.skipped
            records = prefilter.records

        hasher = HasherImpl(HashlibAlgorithm(params.algorithm), chunk_size=params.chunk_size)
        hashing = HashingStage(hasher, workers=params.workers, events=self.events).process(
            records, stopped_flag=self.stopped_flag
        )
        if hashing.cancelled:
            return self._cancel()
        self.summary.files_hashed = len(hashing.records)
        self.summary.hash_failures += len(hashing.failures)

        self.state.advance(RunState.GROUPING)
        groups = FileGrouperImpl().group_by_digest(hashing.records)
        groups = Sorter.order_groups(groups, params.keep_policy)
        self.plans = build_plans(groups, events=self.events)
        self.summary.duplicate_groups = len(self.plans)
        self.summary.bytes_reclaimable = total_reclaimable(self.plans)
        logger.debug(
            f"{len(self.plans)} duplicate groups, {self.summary.bytes_reclaimable} bytes reclaimable"
        )

        if self.plans:
            self.state.advance(RunState.AWAITING_CONFIRMATION)
        return self.plans

    def resolve(self, confirmed: bool) -> RunSummary:
        """
        Deletes every candidate if confirmed, otherwise leaves the tree untouched.
        Always ends the run and publishes the summary.
        """
        if self.state.is_done:
            return self.summary

        if not self.plans or not confirmed:
            if self.plans:
                logger.debug("Deletion declined")
            return self._finish()

        self.summary.confirmed = True
        self.state.advance(RunState.DELETING)
        resolver = Resolver(FileService.remover_for(self.params.delete_method), events=self.events)
        try:
            resolver.execute(self.plans, self.summary, stopped_flag=self.stopped_flag)
        except KeyboardInterrupt:
            self.summary.interrupted = True
            self._finish()
            raise
        return self._finish()

    def run(self, confirm: ConfirmCallback) -> RunSummary:
        """Full run; confirm is asked once, and only if there is something to delete."""
        plans = self.find_duplicates()
        if self.state.is_done:
            return self.summary
        confirmed = bool(plans) and confirm(plans, self.summary.bytes_reclaimable)
        return self.resolve(confirmed)

    def _cancel(self) -> List[DeletionPlan]:
        logger.debug("Run cancelled before confirmation")
        self.summary.interrupted = True
        self.plans = []
        self._finish()
        return []

    def _finish(self) -> RunSummary:
        if not self.state.is_done:
            self.state.advance(RunState.DONE)
            self.events.emit(RunFinished(summary=self.summary))
        return self.summary
