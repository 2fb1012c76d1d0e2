"""
core/grouper.py
Groups file records by size, quick hash or content digest.
All groupings keep insertion order, both for keys and for the files under each key.
"""

from typing import List, Dict, Any, Callable, Sequence
import logging

from dupsweep.core.interfaces import FileGrouper
from dupsweep.core.models import FileRecord, DuplicateGroup

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    Keys purely on values, never on the order in which hashing finished:
    feed it records in enumeration order and groups come out in that order.
    """

    def group_by_digest(self, records: Sequence[FileRecord]) -> List[DuplicateGroup]:
        """
        Builds one DuplicateGroup per digest shared by 2+ records, ordered by
        each digest's first appearance. Records without a digest are ignored.
        """
        hashed = [r for r in records if r.digest is not None]
        if len(hashed) != len(records):
            logger.debug(f"Ignoring {len(records) - len(hashed)} records without digest")
        buckets = self._group_by(hashed, lambda r: r.digest)
        return [DuplicateGroup(digest=digest, files=tuple(files)) for digest, files in buckets.items()]

    def group_by_size(self, records: Sequence[FileRecord]) -> Dict[int, List[FileRecord]]:
        """Groups records by their size."""
        return self._group_by(records, lambda r: r.size)

    @staticmethod
    def _group_by(records: Sequence[FileRecord], key_func: Callable[[FileRecord], Any]) -> Dict[Any, List[FileRecord]]:
        """
        Helper method to group records by any computed key.
        Returns only keys shared by at least two records.
        """
        groups: Dict[Any, List[FileRecord]] = {}
        for record in records:
            groups.setdefault(key_func(record), []).append(record)
        return {key: group for key, group in groups.items() if len(group) >= 2}
