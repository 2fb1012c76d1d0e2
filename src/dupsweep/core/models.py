"""
core/models.py
Data models for file scanning, hashing and duplicate resolution.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple
from enum import Enum
import os

from dupsweep.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class KeepPolicy(Enum):
    """
    Which file of a duplicate group survives.
    Sorting is stable, so every policy falls back to first-seen order on ties.
    """
    FIRST_SEEN = "first-seen"
    LEXICAL = "lexical"
    OLDEST = "oldest"
    SHORTEST_PATH = "shortest-path"

    @property
    def display_name(self) -> str:
        """Human-readable name for report output."""
        mapping = {
            KeepPolicy.FIRST_SEEN: "first seen",
            KeepPolicy.LEXICAL: "lexically smallest path",
            KeepPolicy.OLDEST: "oldest modification time",
            KeepPolicy.SHORTEST_PATH: "shortest path",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class DeleteMethod(Enum):
    DELETE = "delete"
    TRASH = "trash"


class RunState(str, Enum):
    IDLE = "Idle"
    ENUMERATING = "Enumerating"
    HASHING = "Hashing"
    GROUPING = "Grouping"
    AWAITING_CONFIRMATION = "AwaitingConfirmation"
    DELETING = "Deleting"
    DONE = "Done"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    Immutable snapshot of one regular file.
    The digest stays None until the hasher returns a copy carrying it.
    """
    path: str
    size: int  # in bytes
    mtime: float = 0.0
    digest: Optional[bytes] = None

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.path}")
        if self.digest is not None and not isinstance(self.digest, bytes):
            raise ValueError("Digest must be bytes or None")

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def path_depth(self) -> int:
        return self.path.rstrip(os.sep).count(os.sep)

    def with_digest(self, digest: bytes) -> "FileRecord":
        """Returns a copy of this record with the content digest attached."""
        return replace(self, digest=digest)

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    Files sharing one content digest, in a stable order.

    Digest equality is treated as content equality. This is a policy: no
    byte-for-byte comparison is made after hashing.
    """
    digest: bytes
    files: Tuple[FileRecord, ...]

    def __post_init__(self):
        if not self.files:
            raise ValueError("A duplicate group cannot be empty")
        for record in self.files:
            if record.digest != self.digest:
                raise ValueError(f"Digest mismatch for {record.path}")

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def size(self) -> int:
        return self.files[0].size

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup digest={self.digest.hex()[:12]}, count={len(self.files)}>"


@dataclass(frozen=True)
class DeletionPlan:
    """
    Read-only keep/delete split of one duplicate group.
    The first file of the group survives, the rest are deletion candidates.
    """
    group: DuplicateGroup
    reclaimable_bytes: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "reclaimable_bytes", sum(f.size for f in self.candidates)
        )

    @property
    def digest(self) -> bytes:
        return self.group.digest

    @property
    def survivor(self) -> FileRecord:
        return self.group.files[0]

    @property
    def candidates(self) -> Tuple[FileRecord, ...]:
        return self.group.files[1:]


@dataclass
class RunSummary:
    """
    Counters accumulated across one run and emitted once at the end.
    """
    files_scanned: int = 0
    files_hashed: int = 0
    files_skipped: int = 0
    hash_failures: int = 0
    traversal_errors: int = 0
    duplicate_groups: int = 0
    bytes_reclaimable: int = 0
    files_deleted: int = 0
    bytes_reclaimed: int = 0
    deletions_failed: int = 0
    confirmed: bool = False
    interrupted: bool = False


# =============================
# Parameters
# =============================

class DedupConfig:
    DEFAULT_CHUNK_SIZE = 1024 * 1024
    PREFILTER_CHUNK_SIZE = 64 * 1024
    DEFAULT_EXCLUDED_DIRS = ("_Trash",)
    DEFAULT_ALGORITHM = "sha256"
    SUPPORTED_ALGORITHMS = ("sha256", "sha512", "blake2b", "sha3_256")
    DIGEST_DISPLAY_LENGTH = 16
    MAX_WORKERS = 32


@dataclass
class ScanParams:
    """Parameters for one run, validated on creation. Interface-agnostic."""
    root_dir: str
    excluded_dirs: List[str] = field(default_factory=lambda: list(DedupConfig.DEFAULT_EXCLUDED_DIRS))
    min_size_bytes: int = 0
    max_size_bytes: Optional[int] = None
    extensions: List[str] = field(default_factory=list)
    algorithm: str = DedupConfig.DEFAULT_ALGORITHM
    chunk_size: int = DedupConfig.DEFAULT_CHUNK_SIZE
    workers: int = 1
    keep_policy: KeepPolicy = KeepPolicy.FIRST_SEEN
    prefilter: bool = False
    delete_method: DeleteMethod = DeleteMethod.DELETE

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        if self.algorithm not in DedupConfig.SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm: '{self.algorithm}'")

        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")

        if not 1 <= self.workers <= DedupConfig.MAX_WORKERS:
            raise ValueError(f"Workers must be between 1 and {DedupConfig.MAX_WORKERS}")

        # Directory names are matched on basename, so paths make no sense here
        names = [name.strip(os.sep) for name in self.excluded_dirs]
        for name in names:
            if not name or os.sep in name:
                raise ValueError(f"Excluded entry must be a directory name, got: '{name}'")
        self.excluded_dirs = names

        # Normalize extensions: ensure they start with dot and are lowercase
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext:
                normalized.append(ext)
        self.extensions = normalized

    @staticmethod
    def from_human_readable(
            root_dir: str,
            min_size_str: str = "0",
            max_size_str: str = "",
            excluded_dirs: Optional[List[str]] = None,
            extensions: Optional[List[str]] = None,
            **options,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable size strings.
        An empty max size means no upper bound.
        """
        min_size = ConvertUtils.human_to_bytes(min_size_str)
        max_size = ConvertUtils.human_to_bytes(max_size_str) if max_size_str else None

        return ScanParams(
            root_dir=root_dir,
            min_size_bytes=min_size,
            max_size_bytes=max_size,
            excluded_dirs=list(DedupConfig.DEFAULT_EXCLUDED_DIRS) if excluded_dirs is None else excluded_dirs,
            extensions=extensions or [],
            **options,
        )
