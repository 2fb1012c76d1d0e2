"""
core/interfaces.py

Protocols for the pluggable parts of the duplicate finder pipeline.

Key Components:
---------------
- HashAlgorithm: Incremental digest factory (SHA-256, BLAKE2b, ...).
- Hasher: Computes the full-content digest of a FileRecord.
- FileScanner: Enumerates FileRecord objects under a root directory.
- FileGrouper: Groups hashed records into DuplicateGroup objects.
- FileRemover: Removes a single file (permanent delete or system trash).
"""

from typing import Protocol, List, Optional, Callable, Sequence
from dupsweep.core.models import FileRecord, DuplicateGroup


class HashState(Protocol):
    """The part of a hashlib-style object the hasher relies on."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    Allows plugging in different hashing functions without affecting the
    rest of the pipeline. Implementations must be deterministic and unsalted.
    """
    name: str
    digest_size: int

    def new(self) -> HashState:
        """Returns a fresh incremental hash state."""
        ...


class Hasher(Protocol):
    """Interface for computing the content digest of a file."""
    def compute_digest(self, record: FileRecord) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(self, stopped_flag: Optional[Callable[[], bool]] = None) -> List[FileRecord]:
        """
        Scan files from the configured directory.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.

        Returns:
            Records in deterministic traversal order.
        """
        ...


class FileGrouper(Protocol):
    def group_by_digest(self, records: Sequence[FileRecord]) -> List[DuplicateGroup]:
        """Group hashed records by digest, keeping only groups of 2+ files."""
        ...


class FileRemover(Protocol):
    def __call__(self, path: str) -> None:
        """Remove one file. Raises OSError on failure."""
        ...
