# dupetree/core/finder.py
"""
Duplicate file and directory scan.

Walks a tree, fingerprints every qualifying file (optionally in parallel),
then reports files sharing a fingerprint and directories whose direct files
form the same multiset of fingerprints.
"""
import logging
from typing import Dict, List, Optional, Sequence, Union

from .config import ScanOptions
from .dispatcher import Executor, hash_entries, make_executor
from .duplicate_detector import group_duplicate_files, group_duplicate_directories
from .models import (
    BYTES_PER_MB, DuplicateFileGroup, DuplicateDirectoryGroup, MemberFile,
    DuplicatedFileRow, DuplicatedDirectoryRow, ScanReport
)
from .scanner import walk_tree, validate_root

logger = logging.getLogger(__name__)

MAX_INDIVIDUAL_WARNINGS = 20


def build_file_rows(root: str, groups: List[DuplicateFileGroup]) -> Optional[List[DuplicatedFileRow]]:
    if not groups:
        return None
    rows = []
    for group in groups:
        members = sorted(group.files, key=lambda f: f.path)
        rows.append(DuplicatedFileRow(
            path=root,
            dup_group=group.group_id,
            files=[MemberFile(file_abs=f.path, file_rel=f.rel_path, modified=f.modified) for f in members],
            file_ext=", ".join(ext for ext in group.extensions if ext),
            n_files=group.total_files,
            file_size_bytes=group.size,
            file_size_mb=round(group.size / BYTES_PER_MB, 2),
            content_hash=group.fingerprint
        ))
    return rows


def build_directory_rows(groups: List[DuplicateDirectoryGroup]) -> Optional[List[DuplicatedDirectoryRow]]:
    if not groups:
        return None
    rows = [
        DuplicatedDirectoryRow(
            dir=directory.rel_path,
            dir_abs=directory.path,
            n_files=directory.n_files,
            n_dup_dirs=group.n_dup_dirs,
            dup_group=group.group_id
        )
        for group in groups
        for directory in group.directories
    ]
    return sorted(rows, key=lambda r: (-r.n_files, r.dup_group, r.dir))


def log_entry_errors(errors: Dict[str, str], limit: int = MAX_INDIVIDUAL_WARNINGS) -> None:
    """Logs one warning per skipped entry, coalescing everything past ``limit``."""
    for i, message in enumerate(errors.values()):
        if i == limit:
            logger.warning("... and %d more entries skipped (see ScanReport.errors)", len(errors) - limit)
            break
        logger.warning(message)


def find_duplicates(
    path: str,
    size_threshold: Optional[float] = None,
    extensions: Union[None, str, Sequence[str]] = None,
    n_workers: Optional[int] = None,
    verbose: Optional[bool] = None,
    *,
    algorithm: Optional[str] = None,
    executor_kind: Optional[str] = None,
    executor: Optional[Executor] = None,
    options: Optional[ScanOptions] = None
) -> ScanReport:
    """
    Finds duplicated files and directories under ``path``.

    Args:
        path (str): Root directory to scan.
        size_threshold (float): Minimum file size in MB. Smaller files are
            dropped before hashing, so they take no part in directory
            comparison either.
        extensions (Sequence[str]): Case-insensitive allow-list, without the
            leading dot. None means all files.
        n_workers (int): Degree of parallelism for hashing (1 = sequential).
        verbose (bool): Print a summary of both tables and show progress.
        algorithm (str): Hash algorithm for content fingerprints.
        executor_kind (str): "thread" or "process" pool when n_workers > 1.
        executor (Executor): Use this executor instead of building one.
        options (ScanOptions): Pre-built options; explicit arguments still
            take precedence over its values.

    Returns:
        ScanReport: Both tables (``None`` where nothing was found) plus every
        non-fatal error encountered along the way.

    Raises:
        InvalidArgument: For malformed options, before touching the filesystem.
        InvalidPath: If ``path`` is not an existing, readable directory.
    """
    explicit = dict(
        size_threshold=size_threshold, extensions=extensions, n_workers=n_workers,
        verbose=verbose, algorithm=algorithm, executor_kind=executor_kind
    )
    if options is not None:
        base = {k: getattr(options, k) for k in explicit}
        base.update({k: v for k, v in explicit.items() if v is not None})
        opts = ScanOptions(**base).validate()
    else:
        opts = ScanOptions.resolve(**explicit)

    root = validate_root(path)
    logger.info("Scanning %s for duplicates", root)

    walked = walk_tree(root, extensions=opts.extensions, min_size_bytes=opts.min_size_bytes)
    report = ScanReport(
        scanned_directory=root,
        total_files_scanned=len(walked.files),
        total_size_scanned_bytes=walked.total_size_bytes,
        errors=dict(walked.errors)
    )

    if walked.files:
        if executor is None:
            executor = make_executor(opts.n_workers, opts.executor_kind)
        # Barrier: grouping starts only once every fingerprint is known
        report.errors.update(hash_entries(walked.files, executor, opts.algorithm, show_progress=opts.verbose))

        report.file_groups = group_duplicate_files(walked.files)
        report.directory_groups = group_duplicate_directories(walked.directories)
        report.duplicated_files = build_file_rows(root, report.file_groups)
        report.duplicated_dirs = build_directory_rows(report.directory_groups)

    log_entry_errors(report.errors)
    logger.info("Found %d duplicated file groups and %d duplicated directory groups",
                len(report.file_groups), len(report.directory_groups))

    if opts.verbose:
        from ..ui.console_reporter import print_report
        print_report(report)
    return report
