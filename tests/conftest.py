"""
Shared fixtures for duplicate finder tests.
Creates isolated temporary directories with controlled test files.
"""
import hashlib
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'dupsweep' is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dupsweep.core.models import FileRecord


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def abc_tree(temp_dir) -> Dict[str, Path]:
    """
    The minimal duplicate scenario:
    - a.txt and b.txt are byte-identical
    - c.txt differs
    """
    files = {
        "a": temp_dir / "a.txt",
        "b": temp_dir / "b.txt",
        "c": temp_dir / "c.txt",
    }
    files["a"].write_bytes(b"same content " * 100)
    files["b"].write_bytes(b"same content " * 100)
    files["c"].write_bytes(b"other content " * 100)
    return files


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for deduplication scenarios:
    - 2 identical files (1KB of 'A') plus a third copy in a subdirectory
    - 2 identical files (2KB of 'B')
    - 2 unique files (different content)
    - 1 empty file
    - 1 copy of 'A' content inside the default excluded directory (_Trash)
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    trash = temp_dir / "_Trash"
    trash.mkdir()
    files["trashed"] = trash / "dup1_copy.txt"
    files["trashed"].write_bytes(content_a)

    return files


def make_record(path: str, content: bytes = b"x", mtime: float = 0.0) -> FileRecord:
    """In-memory record with a real SHA-256 digest of the given content."""
    return FileRecord(path=path, size=len(content), mtime=mtime,
                      digest=hashlib.sha256(content).digest())


def snapshot(root: Path) -> Dict[str, bytes]:
    """Relative path -> content for every file under root."""
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*")) if p.is_file()
    }
