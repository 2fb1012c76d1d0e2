from dupsweep.core.models import KeepPolicy, DedupConfig

KEEP_ALIASES = {
    "first-seen": KeepPolicy.FIRST_SEEN,
    "first": KeepPolicy.FIRST_SEEN,
    "lexical": KeepPolicy.LEXICAL,
    "oldest": KeepPolicy.OLDEST,
    "shortest-path": KeepPolicy.SHORTEST_PATH,
}

KEEP_CHOICES = list(KEEP_ALIASES.keys())

KEEP_HELP_TEXT = (
    "Which file of each duplicate group is kept:\n"
    "  first-seen    : first file met while walking the tree (default)\n"
    "  lexical       : lexically smallest path\n"
    "  oldest        : earliest modification time\n"
    "  shortest-path : closest to the root, then shortest filename\n"
    "Ties always fall back to first-seen order.\n"
)

ALGORITHM_HELP_TEXT = (
    "Content hash algorithm: " + ", ".join(DedupConfig.SUPPORTED_ALGORITHMS) +
    f". Default: {DedupConfig.DEFAULT_ALGORITHM}"
)

EPILOG_TEXT = """
Examples:
  Find duplicates in the current directory and ask before deleting
  %(prog)s

  Report only, never delete
  %(prog)s ~/Downloads --dry-run

  Skip two directory names, keep the oldest copy, move the rest to trash
  %(prog)s ~/Pictures -e _Trash .thumbnails --keep oldest --trash

  Hash on 4 threads after a quick size/front-chunk prefilter, no prompt (for scripts)
  %(prog)s /data --workers 4 --prefilter --yes > report.txt
"""
