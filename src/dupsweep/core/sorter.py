"""
core/sorter.py
Survivor selection: orders the files of each duplicate group so that the
file to keep comes first. Python's sort is stable, so files that tie under
a policy stay in the order they were found.
"""
from typing import Callable, Dict, List, Any

from dupsweep.core.models import DuplicateGroup, FileRecord, KeepPolicy


class Sorter:
    """
    Applies a KeepPolicy to duplicate groups:
    - FIRST_SEEN: input order untouched (DEFAULT)
    - LEXICAL: lexically smallest path first
    - OLDEST: earliest modification time first
    - SHORTEST_PATH: fewest path components first, then shortest filename
    """

    _KEYS: Dict[KeepPolicy, Callable[[FileRecord], Any]] = {
        KeepPolicy.LEXICAL: lambda f: f.path,
        KeepPolicy.OLDEST: lambda f: f.mtime,
        KeepPolicy.SHORTEST_PATH: lambda f: (f.path_depth, len(f.name)),
    }

    @staticmethod
    def order_group(group: DuplicateGroup, policy: KeepPolicy = KeepPolicy.FIRST_SEEN) -> DuplicateGroup:
        key_func = Sorter._KEYS.get(policy)
        if key_func is None:
            return group
        return DuplicateGroup(digest=group.digest, files=tuple(sorted(group.files, key=key_func)))

    @staticmethod
    def order_groups(groups: List[DuplicateGroup], policy: KeepPolicy = KeepPolicy.FIRST_SEEN) -> List[DuplicateGroup]:
        return [Sorter.order_group(group, policy) for group in groups]
