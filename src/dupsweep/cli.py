#!/usr/bin/env python3
"""
dupsweep CLI — find duplicate files by content and delete the extra copies.
The whole plan is shown first; nothing is deleted without a single explicit
confirmation for the batch.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, NoReturn

from dupsweep.core.models import ScanParams, DeletionPlan, RunSummary, DeleteMethod, DedupConfig, RunState
from dupsweep.core.events import (
    Event, StageChanged, Progress, TraversalFailed, HashFailed,
    GroupFound, FileDeleted, DeletionFailed,
)
from dupsweep.commands import DeduplicationCommand
from dupsweep.translator import DictTranslator, LANGUAGES
from dupsweep.utils.convert_utils import ConvertUtils
from dupsweep.aliases import (
    KEEP_ALIASES, KEEP_CHOICES, KEEP_HELP_TEXT, ALGORITHM_HELP_TEXT, EPILOG_TEXT
)

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller. Renders pipeline events to the console."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.show_plan: bool = True
        self.translator = DictTranslator("en")
        self.command: Optional[DeduplicationCommand] = None
        self._group_index = 0

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupsweep",
            description="dupsweep — content-based duplicate file finder",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "root",
            nargs="?",
            default=os.getcwd(),
            help="Directory to scan. Default: current working directory"
        )

        # Filtering options
        parser.add_argument(
            "--excluded-dirs", "-e",
            nargs="+",
            default=list(DedupConfig.DEFAULT_EXCLUDED_DIRS),
            metavar='NAME',
            dest="excluded_dirs",
            help="Directory names (exact, case-sensitive) to skip anywhere in the tree.\n"
                 f"Replaces the default: {' '.join(DedupConfig.DEFAULT_EXCLUDED_DIRS)}"
        )
        parser.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        parser.add_argument(
            "--max-size", "-M",
            default="",
            type=str,
            metavar='',
            help="Maximum file size (e.g., 10MB, 1GB). Default: no limit"
        )
        parser.add_argument(
            "--extensions", "-x",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            help="File extensions (space separated) to include (e.g., .jpg .png)"
        )

        # Hashing options
        parser.add_argument(
            "--algorithm",
            choices=DedupConfig.SUPPORTED_ALGORITHMS,
            default=DedupConfig.DEFAULT_ALGORITHM,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            type=int,
            default=1,
            help="Number of hashing threads. Default: 1 (sequential)"
        )
        parser.add_argument(
            "--prefilter",
            action="store_true",
            help="Rule out files with a unique size or first chunk before full hashing"
        )

        # Resolution options
        parser.add_argument(
            "--keep",
            choices=KEEP_CHOICES,
            default="first-seen",
            help=KEEP_HELP_TEXT
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move duplicates to the system trash instead of deleting them"
        )
        action = parser.add_mutually_exclusive_group()
        action.add_argument(
            "--dry-run", "-n",
            action="store_true",
            dest="dry_run",
            help="Only report duplicates, never ask and never delete"
        )
        action.add_argument(
            "--yes", "-y",
            action="store_true",
            help="Delete without asking (for automation/scripts)"
        )

        # Output options
        parser.add_argument(
            "--lang",
            choices=LANGUAGES,
            default="en",
            help="Language of messages and of the yes/no prompt. Default: en"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress warnings, and the per-group report when --dry-run or --yes is given.\n"
                 "The report is always shown before a confirmation prompt"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show stages, progress and every deleted file"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate arguments that argparse cannot check. The root is the only fatal one."""
        root_path = Path(args.root)
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.root}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.root}")

        if not 1 <= args.workers <= DedupConfig.MAX_WORKERS:
            self.error_exit(f"--workers must be between 1 and {DedupConfig.MAX_WORKERS}")

        for size in (args.min_size, args.max_size):
            if size and not self._is_valid_size(size):
                self.error_exit(f"Invalid size format: {size}")

    @staticmethod
    def _is_valid_size(size_str: str) -> bool:
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(
                root_dir=str(Path(args.root).resolve()),
                min_size_str=args.min_size,
                max_size_str=args.max_size,
                excluded_dirs=args.excluded_dirs,
                extensions=args.extensions,
                algorithm=args.algorithm,
                workers=args.workers,
                keep_policy=KEEP_ALIASES[args.keep],
                prefilter=args.prefilter,
                delete_method=DeleteMethod.TRASH if args.trash else DeleteMethod.DELETE,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    # ----- event rendering -----

    def on_event(self, event: Event) -> None:
        """Console renderer for pipeline events."""
        tr = self.translator.tr
        if isinstance(event, GroupFound):
            self._group_index += 1
            if self.show_plan:
                self.print_plan(self._group_index, event.plan)
        elif isinstance(event, (TraversalFailed, HashFailed)):
            self.warning(f"Skipped {event.path}: {event.error}")
        elif isinstance(event, DeletionFailed):
            self.warning(f"Failed to delete {event.path}: {event.error}")
        elif isinstance(event, FileDeleted):
            if self.verbose:
                print(tr("deleted_file", path=event.path))
        elif isinstance(event, StageChanged):
            if self.verbose and event.state != RunState.DONE:
                print(f"[{event.state.value}]", file=sys.stderr)
        elif isinstance(event, Progress):
            if self.verbose and event.total:
                sys.stderr.write(f"\r  [{event.stage.value}] {event.current}/{event.total}")
                if event.current == event.total:
                    sys.stderr.write("\n")
                sys.stderr.flush()

    def print_plan(self, index: int, plan: DeletionPlan) -> None:
        tr = self.translator.tr
        digest_id = ConvertUtils.digest_to_id(plan.digest, DedupConfig.DIGEST_DISPLAY_LENGTH)
        print()
        print(tr("group_header", index=index, digest=digest_id,
                 size=ConvertUtils.bytes_to_human(plan.group.size),
                 count=plan.group.duplicate_count))
        print("-" * 60)
        print(f"   {tr('keep_label')} {plan.survivor.path}")
        if self.verbose:
            print(f"          {tr('keep_reason', reason=self.command.params.keep_policy.display_name)}")
        for record in plan.candidates:
            print(f"   {tr('delete_label')} {record.path}")

    def print_summary(self, summary: RunSummary) -> None:
        tr = self.translator.tr
        print()
        print("=" * 60)
        print(tr("summary_title"))
        print(tr("summary_scanned", count=summary.files_scanned))
        print(tr("summary_hashed", count=summary.files_hashed))
        if summary.files_skipped:
            print(tr("summary_skipped", count=summary.files_skipped))
        if summary.hash_failures:
            print(tr("summary_hash_failures", count=summary.hash_failures))
        if summary.traversal_errors:
            print(tr("summary_traversal_errors", count=summary.traversal_errors))
        print(tr("summary_groups", count=summary.duplicate_groups))
        print(tr("summary_deleted", count=summary.files_deleted))
        if summary.deletions_failed:
            print(tr("summary_delete_failures", count=summary.deletions_failed))
        print(tr("summary_reclaimed",
                 mb=ConvertUtils.bytes_to_unit(summary.bytes_reclaimed, "MB"),
                 gb=ConvertUtils.bytes_to_unit(summary.bytes_reclaimed, "GB")))
        if summary.interrupted:
            print(tr("summary_interrupted"))

    # ----- confirmation -----

    def ask_confirmation(self, plans: List[DeletionPlan], total_bytes: int) -> bool:
        """Single yes/no prompt for the whole batch. End of input counts as no."""
        tr = self.translator.tr
        count = sum(len(plan.candidates) for plan in plans)
        key = "confirm_prompt_trash" if self.command.params.delete_method == DeleteMethod.TRASH else "confirm_prompt"
        try:
            answer = input(tr(key, count=count, size=ConvertUtils.bytes_to_human(total_bytes)))
        except EOFError:
            answer = ""
        return self.translator.is_affirmative(answer)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    @staticmethod
    def configure_logging(verbose: bool, quiet: bool) -> None:
        level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
        logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    def run(self, args=None) -> RunSummary:
        """Main entry point. Returns the run summary."""
        args = self.parse_args(args)
        self.verbose = args.verbose
        self.quiet = args.quiet
        # The plan is always shown when the user will be asked to confirm it
        self.show_plan = not self.quiet or not (args.dry_run or args.yes)
        self.translator = DictTranslator(args.lang)
        tr = self.translator.tr
        self.configure_logging(self.verbose, self.quiet)

        self.validate_args(args)
        params = self.create_params(args)

        self.command = DeduplicationCommand(params)
        self.command.events.add_listener(self.on_event)

        if not self.quiet:
            print(tr("scanning", root=params.root_dir))

        try:
            plans = self.command.find_duplicates()
        except RuntimeError as e:
            self.error_exit(str(e))

        summary = self.command.summary
        if not plans:
            print(tr("no_duplicates"))
            self.command.resolve(confirmed=False)
        else:
            print()
            print(tr("found_groups", groups=len(plans), files=sum(len(p.candidates) for p in plans)))
            print(tr("reclaimable", size=ConvertUtils.bytes_to_human(summary.bytes_reclaimable)))
            if args.dry_run:
                print(tr("dry_run"))
                confirmed = False
            elif args.yes:
                confirmed = True
            else:
                confirmed = self.ask_confirmation(plans, summary.bytes_reclaimable)
                if not confirmed:
                    print(tr("declined"))
            if confirmed and not self.quiet:
                print(tr("deleting", count=sum(len(p.candidates) for p in plans)))
            self.command.resolve(confirmed=confirmed)

        self.print_summary(summary)
        print(tr("completed", seconds=time.time() - self.start_time))
        return summary


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        if app.command is not None:
            app.command.summary.interrupted = True
            app.print_summary(app.command.summary)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
