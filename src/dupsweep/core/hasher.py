"""
core/hasher.py
File hashing built on hashlib (content digests) and xxHash (quick prefilter).

This implementation ensures predictable behavior:
- Full-content digests are streamed in bounded chunks, never read whole
- Digests are deterministic: no salt, no key, no per-run state
- Read errors surface as OSError; callers decide how to recover
"""

import hashlib
import logging
from typing import Optional

import xxhash

from dupsweep.core.models import FileRecord, DedupConfig
from dupsweep.core.interfaces import HashAlgorithm, HashState, Hasher

logger = logging.getLogger(__name__)


class HashlibAlgorithm(HashAlgorithm):
    """
    Cryptographic hash algorithm backed by hashlib.
    Only algorithms with a digest of 256 bits or more are accepted.
    """

    def __init__(self, name: str = DedupConfig.DEFAULT_ALGORITHM):
        if name not in DedupConfig.SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm: '{name}'")
        self.name = name
        self.digest_size = hashlib.new(name).digest_size

    def new(self) -> HashState:
        return hashlib.new(self.name)

    def __repr__(self):
        return f"<HashlibAlgorithm {self.name}>"


class HasherImpl(Hasher):
    """
    Computes the full-content digest of a file with the injected algorithm.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None,
                 chunk_size: int = DedupConfig.DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or HashlibAlgorithm()
        self.chunk_size = chunk_size

    def compute_digest(self, record: FileRecord) -> bytes:
        """
        Streams the whole file through the hash. The handle is closed
        before returning or raising.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        state = self.algorithm.new()
        with open(record.path, 'rb') as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                state.update(chunk)
        return state.digest()

    def hash_record(self, record: FileRecord) -> FileRecord:
        """Returns a copy of the record carrying its content digest."""
        return record.with_digest(self.compute_digest(record))


class XXFrontHasher:
    """
    xxHash64 of the first bytes of a file. Cheap, non-cryptographic:
    used only to rule files out before strong hashing.
    """

    def __init__(self, chunk_size: int = DedupConfig.PREFILTER_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def compute_front_hash(self, record: FileRecord) -> bytes:
        """
        Raises:
            OSError: If the file cannot be opened or read.
        """
        with open(record.path, 'rb') as f:
            chunk = f.read(self.chunk_size)
        return xxhash.xxh64(chunk).digest()
