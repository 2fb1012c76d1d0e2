"""
core/events.py
Structured events emitted by the pipeline.

The core never prints. Everything a user may want to see (stage changes,
recovered per-file errors, groups found, deletions) is published as an event
to registered listeners, and a presentation layer decides how to render it.
"""

from dataclasses import dataclass
from typing import Callable, List, Union
import logging

from dupsweep.core.models import DeletionPlan, RunState, RunSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageChanged:
    state: RunState


@dataclass(frozen=True)
class Progress:
    stage: RunState
    current: int
    total: int


@dataclass(frozen=True)
class TraversalFailed:
    path: str
    error: str


@dataclass(frozen=True)
class HashFailed:
    path: str
    error: str


@dataclass(frozen=True)
class GroupFound:
    plan: DeletionPlan


@dataclass(frozen=True)
class FileDeleted:
    path: str
    size: int


@dataclass(frozen=True)
class DeletionFailed:
    path: str
    error: str


@dataclass(frozen=True)
class RunFinished:
    summary: RunSummary


Event = Union[
    StageChanged, Progress, TraversalFailed, HashFailed,
    GroupFound, FileDeleted, DeletionFailed, RunFinished,
]
Listener = Callable[[Event], None]


class EventBus:
    """Fan-out of pipeline events to any number of listeners."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def emit(self, event: Event) -> None:
        # A broken listener must not abort a run that may be mid-deletion
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(f"Error in event listener for {type(event).__name__}")
