"""
core/resolver.py
Turns duplicate groups into deletion plans and carries them out.

Deletion is all-or-nothing at the decision level (one confirmation for the
whole batch) but per-file at the execution level: a file that cannot be
removed is recorded and the remaining candidates are still attempted.
"""

from typing import List, Optional, Callable, Sequence
import logging

from dupsweep.core.models import DuplicateGroup, DeletionPlan, RunSummary
from dupsweep.core.interfaces import FileRemover
from dupsweep.core.events import EventBus, GroupFound, FileDeleted, DeletionFailed

logger = logging.getLogger(__name__)


def build_plans(groups: Sequence[DuplicateGroup], events: Optional[EventBus] = None) -> List[DeletionPlan]:
    """
    One plan per group with 2+ files: first file survives, the rest are candidates.
    """
    plans = []
    for group in groups:
        if not group.is_duplicate():
            continue
        plan = DeletionPlan(group)
        plans.append(plan)
        if events:
            events.emit(GroupFound(plan=plan))
    return plans


def total_reclaimable(plans: Sequence[DeletionPlan]) -> int:
    """Sum of candidate sizes across all plans."""
    return sum(plan.reclaimable_bytes for plan in plans)


class Resolver:
    """
    Executes confirmed plans. Counters in the summary are updated after each
    file, so an interrupted run still reports exactly what was removed.
    """

    def __init__(self, remover: FileRemover, events: Optional[EventBus] = None):
        self.remover = remover
        self.events = events or EventBus()

    def execute(self, plans: Sequence[DeletionPlan], summary: RunSummary,
                stopped_flag: Optional[Callable[[], bool]] = None) -> RunSummary:
        for plan in plans:
            for record in plan.candidates:
                if stopped_flag and stopped_flag():
                    logger.warning("Deletion interrupted, remaining candidates left in place")
                    summary.interrupted = True
                    return summary
                self._delete_one(record.path, record.size, summary)
        return summary

    def _delete_one(self, path: str, size: int, summary: RunSummary) -> None:
        try:
            self.remover(path)
        except OSError as e:
            message = e.strerror or str(e)
            logger.warning(f"Failed to delete {path}: {message}")
            summary.deletions_failed += 1
            self.events.emit(DeletionFailed(path=path, error=message))
            return
        summary.files_deleted += 1
        summary.bytes_reclaimed += size
        logger.debug(f"Deleted {path} ({size} bytes)")
        self.events.emit(FileDeleted(path=path, size=size))
