translations = {
    "affirmative_answers": ("y", "yes"),
    "scanning": "Scanning directory: {root}",
    "no_duplicates": "No duplicates found.",
    "found_groups": "Found {groups} duplicate groups ({files} files to delete)",
    "group_header": "Group {index} | Hash: {digest} | Size: {size} | Files: {count}",
    "keep_label": "[KEEP]",
    "delete_label": "[DEL] ",
    "keep_reason": "Reason: {reason}",
    "reclaimable": "Space that can be reclaimed: {size}",
    "confirm_prompt": "Delete {count} files and reclaim {size}? [y/N]: ",
    "confirm_prompt_trash": "Move {count} files to trash and reclaim {size}? [y/N]: ",
    "declined": "Deletion cancelled by user. No files were touched.",
    "dry_run": "Dry run: no files were touched.",
    "deleting": "Deleting {count} files...",
    "deleted_file": "  deleted {path}",
    "summary_title": "Summary",
    "summary_scanned": "Files scanned: {count}",
    "summary_hashed": "Files hashed: {count}",
    "summary_skipped": "Files ruled out by prefilter: {count}",
    "summary_hash_failures": "Hash failures: {count}",
    "summary_traversal_errors": "Unreadable directories or entries: {count}",
    "summary_groups": "Duplicate groups: {count}",
    "summary_deleted": "Files deleted: {count}",
    "summary_delete_failures": "Deletions failed: {count}",
    "summary_reclaimed": "Space reclaimed: {mb:.2f} MB ({gb:.2f} GB)",
    "summary_interrupted": "Run was interrupted; counts above reflect what was done.",
    "completed": "Completed in {seconds:.2f} seconds.",
}
