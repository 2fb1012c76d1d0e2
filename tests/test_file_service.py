"""
Tests for file removal — permanent delete and system trash.
Both must signal failure with OSError so one bad file never stops a batch.
"""
import os
import sys
from unittest import mock

import pytest

from dupsweep.core.models import DeleteMethod
from dupsweep.services.file_service import FileService


class TestDeleteFile:

    def test_removes_file(self, tmp_path):
        f = tmp_path / "dup.txt"
        f.write_text("content")

        FileService.delete_file(str(f))

        assert not f.exists()

    def test_missing_file_raises_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileService.delete_file(str(tmp_path / "gone.txt"))

    def test_refuses_directories(self, tmp_path):
        d = tmp_path / "dir"
        d.mkdir()
        with pytest.raises(OSError):
            FileService.delete_file(str(d))
        assert d.exists()

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_refuses_symlinks(self, tmp_path):
        target = tmp_path / "target.txt"
        target.write_text("keep")
        link = tmp_path / "link.txt"
        link.symlink_to(target)

        with pytest.raises(OSError):
            FileService.delete_file(str(link))
        assert target.exists() and link.is_symlink()


class TestMoveToTrash:

    def test_sends_resolved_path_to_trash(self, tmp_path):
        f = tmp_path / "dup.txt"
        f.write_text("content")

        with mock.patch("dupsweep.services.file_service.send2trash") as mock_send:
            FileService.move_to_trash(str(f))

        mock_send.assert_called_once_with(str(f.resolve()))

    def test_missing_file_raises_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileService.move_to_trash(str(tmp_path / "gone.txt"))

    def test_non_os_errors_are_wrapped_as_oserror(self, tmp_path):
        f = tmp_path / "dup.txt"
        f.write_text("content")

        with mock.patch("dupsweep.services.file_service.send2trash", side_effect=RuntimeError("no trash")):
            with pytest.raises(OSError, match="Failed to move to trash"):
                FileService.move_to_trash(str(f))

        assert f.exists()


class TestRemoverFor:

    def test_delete_method(self):
        assert FileService.remover_for(DeleteMethod.DELETE) == FileService.delete_file

    def test_trash_method(self):
        assert FileService.remover_for(DeleteMethod.TRASH) == FileService.move_to_trash
