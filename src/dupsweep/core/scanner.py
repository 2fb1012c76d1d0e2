"""
core/scanner.py
Recursive file enumeration for the duplicate finder.
Features:
- Walks the tree top-down with os.walk, in sorted order within each directory
- Skips any subtree whose directory basename is excluded (exact, case-sensitive)
- Treats symbolic links as opaque: never followed, never enumerated
- Records unreadable directories and entries, then carries on
"""

import os
import stat
import time
import logging
from typing import List, Optional, Callable, Iterable

from dupsweep.core.models import FileRecord
from dupsweep.core.interfaces import FileScanner
from dupsweep.core.events import EventBus, TraversalFailed

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans a directory tree and returns one FileRecord per regular file.

    Attributes:
        root_dir: Root directory to scan
        excluded_dirs: Directory basenames whose subtrees are skipped
        min_size: Minimum file size in bytes (optional)
        max_size: Maximum file size in bytes (optional)
        extensions: Allowed file extensions (e.g., [".txt", ".jpg"]), empty means all
        traversal_errors: (path, message) pairs recorded during the last scan
    """

    def __init__(
        self,
        root_dir: str,
        excluded_dirs: Optional[Iterable[str]] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        extensions: Optional[List[str]] = None,
        events: Optional[EventBus] = None,
    ):
        self.root_dir = root_dir
        self.excluded_dirs = frozenset(excluded_dirs or ())
        self.min_size = min_size
        self.max_size = max_size
        self.extensions = [ext.lower() for ext in extensions] if extensions else []
        self.events = events or EventBus()
        self.traversal_errors: List[tuple] = []

    def scan(self, stopped_flag: Optional[Callable[[], bool]] = None) -> List[FileRecord]:
        """
        Single-pass scan. Raises RuntimeError if the root is missing or not a directory.
        Returns an empty list if cancelled.
        """
        root_path = os.path.abspath(self.root_dir)
        logger.debug(f"Starting scan of {root_path}, excluded: {sorted(self.excluded_dirs)}")

        if not os.path.exists(root_path):
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not os.path.isdir(root_path):
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        self.traversal_errors = []
        found_files: List[FileRecord] = []
        start_time = time.time()

        for root, dirs, files in os.walk(root_path, onerror=self._on_walk_error, followlinks=False):
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                return []

            # Pruning dirs in place keeps os.walk out of excluded subtrees
            dirs[:] = sorted(d for d in dirs if self._accept_dir(root, d))

            for filename in sorted(files):
                record = self._process_file(os.path.join(root, filename))
                if record is not None:
                    found_files.append(record)

        logger.debug(f"Scan completed in {time.time() - start_time:.2f}s, {len(found_files)} files")
        return found_files

    def _on_walk_error(self, error: OSError) -> None:
        path = error.filename or self.root_dir
        self._record_error(path, error)

    def _record_error(self, path: str, error: OSError) -> None:
        message = error.strerror or str(error)
        logger.warning(f"Cannot read {path}: {message}")
        self.traversal_errors.append((path, message))
        self.events.emit(TraversalFailed(path=path, error=message))

    def _accept_dir(self, parent: str, name: str) -> bool:
        if name in self.excluded_dirs:
            logger.debug(f"Skipping excluded directory: {os.path.join(parent, name)}")
            return False
        path = os.path.join(parent, name)
        if os.path.islink(path):
            logger.debug(f"Not following symbolic link: {path}")
            return False
        return True

    def _process_file(self, path: str) -> Optional[FileRecord]:
        """
        Returns a FileRecord for a regular file that passes the filters, else None.
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            self._record_error(path, e)
            return None

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        if not self._size_passes(st.st_size):
            logger.debug(f"Skipping {path} (size {st.st_size} bytes outside range)")
            return None

        if not self._extension_passes(path):
            logger.debug(f"Skipping {path} (extension not allowed)")
            return None

        return FileRecord(path=path, size=st.st_size, mtime=st.st_mtime)

    def _size_passes(self, size: int) -> bool:
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True

    def _extension_passes(self, path: str) -> bool:
        if not self.extensions:
            return True
        ext = os.path.splitext(path)[1].lower()
        return ext in self.extensions
