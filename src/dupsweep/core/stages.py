"""
core/stages.py
Hashing stages of the duplicate finder pipeline.

STAGES
------
PrefilterStage : Optional. Size grouping, then xxHash64 of the first chunk.
                 Files unique on either key cannot have a duplicate and are
                 dropped before any strong hashing.
HashingStage   : Full-content cryptographic digest of every remaining file,
                 sequentially or on a bounded thread pool.

ORDERING
--------
Both stages return records in the order they received them. The thread pool
completes tasks in any order, so every task carries its input index and the
results are sorted back by that index. Grouping and survivor selection are
therefore identical whatever the worker count.

FAILURES
--------
An OSError on one file (permission, vanished, locked) drops that file, is
logged as a warning, published as a HashFailed event and counted. The stage
carries on with the next file.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional, Callable, Sequence, Tuple
import logging

from dupsweep.core.models import FileRecord, RunState
from dupsweep.core.grouper import FileGrouperImpl
from dupsweep.core.hasher import HasherImpl, XXFrontHasher
from dupsweep.core.events import EventBus, HashFailed, Progress

logger = logging.getLogger(__name__)


@dataclass
class StageResult:
    records: List[FileRecord] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)
    skipped: int = 0
    cancelled: bool = False


class _StageBase:
    def __init__(self, events: Optional[EventBus] = None):
        self.events = events or EventBus()

    def _fail(self, result: StageResult, record: FileRecord, error: OSError) -> None:
        message = error.strerror or str(error)
        logger.warning(f"Cannot hash {record.path}: {message}")
        result.failures.append((record.path, message))
        self.events.emit(HashFailed(path=record.path, error=message))


class PrefilterStage(_StageBase):
    """
    Rules out files that cannot have a duplicate, cheaply.
    """

    def __init__(self, grouper: Optional[FileGrouperImpl] = None,
                 front_hasher: Optional[XXFrontHasher] = None,
                 events: Optional[EventBus] = None):
        super().__init__(events)
        self.grouper = grouper or FileGrouperImpl()
        self.front_hasher = front_hasher or XXFrontHasher()

    def process(self, records: Sequence[FileRecord],
                stopped_flag: Optional[Callable[[], bool]] = None) -> StageResult:
        result = StageResult()
        keep = set()

        for size_group in self.grouper.group_by_size(records).values():
            if stopped_flag and stopped_flag():
                result.cancelled = True
                return result

            front_groups = {}
            for record in size_group:
                try:
                    front = self.front_hasher.compute_front_hash(record)
                except OSError as e:
                    self._fail(result, record, e)
                    continue
                front_groups.setdefault(front, []).append(record)

            for group in front_groups.values():
                if len(group) >= 2:
                    keep.update(r.path for r in group)

        failed = {path for path, _ in result.failures}
        result.records = [r for r in records if r.path in keep]
        result.skipped = len(records) - len(result.records) - len(failed)
        logger.debug(f"Prefilter kept {len(result.records)} of {len(records)} files")
        return result


class HashingStage(_StageBase):
    """
    Attaches a full-content digest to every record it can read.
    """

    def __init__(self, hasher: Optional[HasherImpl] = None, workers: int = 1,
                 events: Optional[EventBus] = None):
        super().__init__(events)
        if workers < 1:
            raise ValueError("Workers must be at least 1")
        self.hasher = hasher or HasherImpl()
        self.workers = workers

    def process(self, records: Sequence[FileRecord],
                stopped_flag: Optional[Callable[[], bool]] = None) -> StageResult:
        if self.workers == 1:
            return self._process_sequential(records, stopped_flag)
        return self._process_parallel(records, stopped_flag)

    def _process_sequential(self, records, stopped_flag) -> StageResult:
        result = StageResult()
        total = len(records)
        for done, record in enumerate(records, 1):
            if stopped_flag and stopped_flag():
                result.cancelled = True
                return result
            try:
                result.records.append(self.hasher.hash_record(record))
            except OSError as e:
                self._fail(result, record, e)
            self.events.emit(Progress(stage=RunState.HASHING, current=done, total=total))
        return result

    def _process_parallel(self, records, stopped_flag) -> StageResult:
        result = StageResult()
        total = len(records)
        indexed: List[Tuple[int, FileRecord]] = []

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {
                executor.submit(self.hasher.hash_record, record): (index, record)
                for index, record in enumerate(records)
            }
            try:
                for done, future in enumerate(as_completed(futures), 1):
                    if stopped_flag and stopped_flag():
                        self._cancel_pending(futures)
                        result.cancelled = True
                        return result
                    index, record = futures[future]
                    try:
                        indexed.append((index, future.result()))
                    except OSError as e:
                        self._fail(result, record, e)
                    self.events.emit(Progress(stage=RunState.HASHING, current=done, total=total))
            except BaseException:
                # Ctrl+C or an unexpected error: leaving the with block must not
                # wait for the queued files to be hashed
                self._cancel_pending(futures)
                raise

        indexed.sort(key=lambda item: item[0])
        result.records = [record for _, record in indexed]
        # Failures are reported in input order too, for a stable report
        order = {record.path: index for index, record in enumerate(records)}
        result.failures.sort(key=lambda item: order[item[0]])
        return result

    @staticmethod
    def _cancel_pending(futures) -> None:
        cancelled = sum(1 for future in futures if future.cancel())
        logger.debug(f"Cancelled {cancelled} queued hashing tasks")
