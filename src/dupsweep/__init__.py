"""
dupsweep — content-based duplicate file finder.

Core features:
- Full-content cryptographic hashing (SHA-256 by default), streamed in chunks
- Deterministic keep/delete plan with a named survivor policy
- One confirmation for the whole batch before anything is deleted
- Permanent deletion or system trash (via send2trash)
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dupsweep")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    from pathlib import Path

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API — only what users should import directly
from dupsweep.commands import DeduplicationCommand
from dupsweep.core import ScanParams, KeepPolicy, DeleteMethod, FileRecord, DuplicateGroup, DeletionPlan, RunSummary
from dupsweep.utils.convert_utils import ConvertUtils
from dupsweep.services import FileService

__all__ = [
    "DeduplicationCommand",
    "ScanParams",
    "KeepPolicy",
    "DeleteMethod",
    "FileRecord",
    "DuplicateGroup",
    "DeletionPlan",
    "RunSummary",
    "ConvertUtils",
    "FileService",
    "__version__",
]
