"""
services/file_service.py
File removal for confirmed deletion plans: permanent delete or system trash.
Every failure is raised as OSError so callers can recover per file.
"""
import os
from pathlib import Path
from send2trash import send2trash

from dupsweep.core.models import DeleteMethod
from dupsweep.core.interfaces import FileRemover


class FileService:
    """
    Cross-platform file removal.
    """

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Permanently removes a regular file."""
        path = Path(file_path)

        if not os.path.lexists(path):
            raise FileNotFoundError(f"File not found: {path}")
        if path.is_symlink() or not path.is_file():
            raise IsADirectoryError(f"Not a regular file: {path}")

        os.remove(path)

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except OSError:
            raise
        except Exception as e:
            raise OSError(f"Failed to move to trash: {e}") from e

    @classmethod
    def remover_for(cls, method: DeleteMethod) -> FileRemover:
        """Returns the removal function matching a DeleteMethod."""
        if method == DeleteMethod.TRASH:
            return cls.move_to_trash
        return cls.delete_file

