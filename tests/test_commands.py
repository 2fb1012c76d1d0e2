"""
End-to-end tests for DeduplicationCommand on real temporary trees.
These pin down the properties that protect user data: what is kept, what is
deleted, and that nothing is touched without confirmation.
"""
import hashlib
from pathlib import Path
from unittest import mock

import pytest

from dupsweep.commands import DeduplicationCommand
from dupsweep.core.models import ScanParams, KeepPolicy, DeleteMethod, RunState
from dupsweep.core.scanner import FileScannerImpl
from dupsweep.core.events import StageChanged, RunFinished
from dupsweep.services.file_service import FileService
from conftest import snapshot


def command_for(root: Path, **options) -> DeduplicationCommand:
    return DeduplicationCommand(ScanParams(root_dir=str(root), **options))


def record_states(command):
    states = []
    command.events.add_listener(lambda e: isinstance(e, StageChanged) and states.append(e.state))
    return states


class TestFindDuplicates:

    def test_abc_gives_one_group_survivor_a_candidate_b(self, temp_dir, abc_tree):
        command = command_for(temp_dir)

        plans = command.find_duplicates()

        assert len(plans) == 1
        assert plans[0].survivor.path == str(abc_tree["a"])
        assert [r.path for r in plans[0].candidates] == [str(abc_tree["b"])]
        assert plans[0].digest == hashlib.sha256(abc_tree["a"].read_bytes()).digest()

    def test_no_duplicates_gives_no_plans(self, temp_dir):
        for i in range(3):
            (temp_dir / f"f{i}").write_bytes(str(i).encode())
        command = command_for(temp_dir)

        assert command.find_duplicates() == []
        summary = command.resolve(confirmed=True)

        assert summary.duplicate_groups == 0
        assert summary.bytes_reclaimable == 0
        assert command.state.is_done

    def test_excluded_directory_never_seen_even_if_identical(self, temp_dir, test_files):
        command = command_for(temp_dir)

        plans = command.find_duplicates()

        all_paths = {r.path for p in plans for r in p.group.files}
        assert str(test_files["trashed"]) not in all_paths
        assert command.summary.files_scanned == len(test_files) - 1

    def test_summary_counts(self, temp_dir, test_files):
        command = command_for(temp_dir)

        plans = command.find_duplicates()

        summary = command.summary
        # Groups: three copies of 'A' (1KB), two of 'B' (2KB)
        assert summary.duplicate_groups == 2 == len(plans)
        assert summary.files_hashed == summary.files_scanned == 8
        assert summary.bytes_reclaimable == 2 * 1024 + 2048
        assert summary.hash_failures == 0

    def test_vanished_file_counts_as_hash_failure(self, temp_dir, abc_tree):
        """A file removed after enumeration is excluded and counted, run completes."""
        command = command_for(temp_dir)
        original = FileScannerImpl.scan

        def scan_then_delete(self, stopped_flag=None):
            records = original(self, stopped_flag)
            abc_tree["a"].unlink()
            return records

        with mock.patch.object(FileScannerImpl, "scan", scan_then_delete):
            plans = command.find_duplicates()

        assert plans == []
        assert command.summary.files_scanned == 3
        assert command.summary.files_hashed == 2
        assert command.summary.hash_failures == 1

    def test_prefilter_counts_vanished_unique_size_file_as_skipped(self, temp_dir, abc_tree):
        """A unique size rules the file out before it is ever opened."""
        abc_tree["c"].write_bytes(b"different length")
        command = command_for(temp_dir, prefilter=True)
        original = FileScannerImpl.scan

        def scan_then_delete(self, stopped_flag=None):
            records = original(self, stopped_flag)
            abc_tree["c"].unlink()
            return records

        with mock.patch.object(FileScannerImpl, "scan", scan_then_delete):
            plans = command.find_duplicates()

        assert len(plans) == 1
        assert command.summary.files_skipped == 1
        assert command.summary.hash_failures == 0

    def test_parallel_run_gives_same_plans(self, temp_dir, test_files):
        sequential = command_for(temp_dir).find_duplicates()
        parallel = command_for(temp_dir, workers=6).find_duplicates()
        assert parallel == sequential

    def test_prefilter_gives_same_plans_and_counts_skipped(self, temp_dir, test_files):
        plain = command_for(temp_dir)
        quick = command_for(temp_dir, prefilter=True)

        assert quick.find_duplicates() == plain.find_duplicates()
        # unique1, unique2, and the empty file have unique sizes
        assert quick.summary.files_skipped == 3
        assert quick.summary.files_hashed == 5

    def test_keep_policy_changes_survivor(self, temp_dir):
        (temp_dir / "b").mkdir()
        (temp_dir / "z.txt").write_bytes(b"dup")
        (temp_dir / "b" / "a.txt").write_bytes(b"dup")

        first = command_for(temp_dir).find_duplicates()[0]
        lexical = command_for(temp_dir, keep_policy=KeepPolicy.LEXICAL).find_duplicates()[0]

        assert first.survivor.path == str(temp_dir / "z.txt")
        assert lexical.survivor.path == str(temp_dir / "b" / "a.txt")

    def test_invalid_root_is_fatal(self, temp_dir):
        command = command_for(temp_dir / "missing")
        with pytest.raises(RuntimeError):
            command.find_duplicates()


class TestResolve:

    def test_decline_leaves_tree_byte_for_byte_unchanged(self, temp_dir, test_files):
        before = snapshot(temp_dir)
        command = command_for(temp_dir)
        command.find_duplicates()

        summary = command.resolve(confirmed=False)

        assert snapshot(temp_dir) == before
        assert summary.bytes_reclaimed == 0
        assert summary.files_deleted == 0
        assert not summary.confirmed

    def test_accept_deletes_exactly_the_candidates(self, temp_dir, test_files):
        command = command_for(temp_dir)
        plans = command.find_duplicates()
        survivors = {r.path for p in plans for r in [p.survivor]}
        candidates = {r.path for p in plans for r in p.candidates}
        planned_bytes = command.summary.bytes_reclaimable

        summary = command.resolve(confirmed=True)

        remaining = {str(p) for p in temp_dir.rglob("*") if p.is_file()}
        assert candidates.isdisjoint(remaining)
        assert survivors <= remaining
        expected = {str(p) for p in test_files.values()} - candidates
        assert remaining == expected
        assert summary.bytes_reclaimed == planned_bytes
        assert summary.files_deleted == len(candidates)
        assert summary.confirmed

    def test_accept_on_abc_removes_only_b(self, temp_dir, abc_tree):
        command = command_for(temp_dir)
        command.find_duplicates()

        command.resolve(confirmed=True)

        assert abc_tree["a"].exists()
        assert not abc_tree["b"].exists()
        assert abc_tree["c"].exists()

    def test_trash_method_uses_send2trash_path(self, temp_dir, abc_tree):
        command = command_for(temp_dir, delete_method=DeleteMethod.TRASH)
        command.find_duplicates()

        with mock.patch.object(FileService, "move_to_trash") as mock_trash, \
                mock.patch.object(FileService, "delete_file") as mock_delete:
            command.resolve(confirmed=True)

        mock_trash.assert_called_once_with(str(abc_tree["b"]))
        mock_delete.assert_not_called()

    def test_resolve_is_terminal(self, temp_dir, abc_tree):
        """No re-entrant confirmation: after Done, a later 'yes' does nothing."""
        command = command_for(temp_dir)
        command.find_duplicates()
        command.resolve(confirmed=False)

        command.resolve(confirmed=True)

        assert abc_tree["b"].exists()

    def test_keyboard_interrupt_during_deletion_keeps_summary_accurate(self, temp_dir, test_files):
        command = command_for(temp_dir)
        command.find_duplicates()
        calls = []

        def remove_then_interrupt(path):
            if calls:
                raise KeyboardInterrupt
            calls.append(path)
            Path(path).unlink()

        with mock.patch.object(FileService, "delete_file", side_effect=remove_then_interrupt):
            with pytest.raises(KeyboardInterrupt):
                command.resolve(confirmed=True)

        assert command.summary.files_deleted == 1
        assert command.summary.bytes_reclaimed == Path(test_files["dup1_a"]).stat().st_size
        assert command.summary.interrupted
        assert command.state.is_done


class TestRunLifecycle:

    def test_states_with_confirmation(self, temp_dir, abc_tree):
        command = command_for(temp_dir)
        states = record_states(command)

        command.run(confirm=lambda plans, total: True)

        assert states == [
            RunState.ENUMERATING, RunState.HASHING, RunState.GROUPING,
            RunState.AWAITING_CONFIRMATION, RunState.DELETING, RunState.DONE,
        ]

    def test_states_when_declined(self, temp_dir, abc_tree):
        command = command_for(temp_dir)
        states = record_states(command)

        command.run(confirm=lambda plans, total: False)

        assert states[-2:] == [RunState.AWAITING_CONFIRMATION, RunState.DONE]
        assert RunState.DELETING not in states

    def test_confirm_asked_once_with_plans_and_total(self, temp_dir, test_files):
        confirm = mock.Mock(return_value=False)
        command = command_for(temp_dir)

        command.run(confirm=confirm)

        confirm.assert_called_once()
        plans, total = confirm.call_args.args
        assert len(plans) == 2
        assert total == command.summary.bytes_reclaimable

    def test_confirm_not_asked_without_duplicates(self, temp_dir):
        (temp_dir / "only.txt").write_bytes(b"x")
        confirm = mock.Mock()

        command_for(temp_dir).run(confirm=confirm)

        confirm.assert_not_called()

    def test_summary_emitted_once_on_every_branch(self, temp_dir, abc_tree):
        for answer in (True, False):
            command = command_for(temp_dir)
            finished = []
            command.events.add_listener(lambda e: isinstance(e, RunFinished) and finished.append(e))

            command.run(confirm=lambda plans, total: answer)

            assert len(finished) == 1
            assert finished[0].summary is command.summary

    def test_cancel_before_confirmation_deletes_nothing(self, temp_dir, test_files):
        before = snapshot(temp_dir)
        command = DeduplicationCommand(ScanParams(root_dir=str(temp_dir)), stopped_flag=lambda: True)

        summary = command.run(confirm=lambda plans, total: True)

        assert snapshot(temp_dir) == before
        assert summary.interrupted
        assert command.state.is_done
