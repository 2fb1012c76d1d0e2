"""
Core engine — scanner, hasher, grouper, resolver and the models they share.

- FileScannerImpl: recursive directory traversal with name-based exclusions
- HasherImpl + HashlibAlgorithm: streamed cryptographic content digests
- PrefilterStage / HashingStage: optional xxHash prefilter, bounded thread pool
- FileGrouperImpl + Sorter: digest grouping and survivor selection
- Resolver: per-file deletion of confirmed candidates

No console output here: progress and recovered errors are published as events.
"""

from .scanner import FileScannerImpl
from .hasher import HasherImpl, HashlibAlgorithm, XXFrontHasher
from .grouper import FileGrouperImpl
from .sorter import Sorter
from .stages import HashingStage, PrefilterStage, StageResult
from .resolver import Resolver, build_plans, total_reclaimable
from .state import RunStateMachine
from .events import EventBus
from .models import (
    FileRecord, DuplicateGroup, DeletionPlan, RunSummary, ScanParams,
    KeepPolicy, DeleteMethod, RunState, DedupConfig)

__all__ = [
    "FileScannerImpl",
    "HasherImpl",
    "HashlibAlgorithm",
    "XXFrontHasher",
    "FileGrouperImpl",
    "Sorter",
    "HashingStage",
    "PrefilterStage",
    "StageResult",
    "Resolver",
    "build_plans",
    "total_reclaimable",
    "RunStateMachine",
    "EventBus",
    "FileRecord",
    "DuplicateGroup",
    "DeletionPlan",
    "RunSummary",
    "ScanParams",
    "KeepPolicy",
    "DeleteMethod",
    "RunState",
    "DedupConfig",
]
