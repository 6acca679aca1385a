# dupetree/ui/console_reporter.py
from typing import List, Optional, Sequence, TextIO
import sys

from dupetree.core.models import ScanReport, DuplicatedFileRow, DuplicatedDirectoryRow

MAX_FILE_ROWS = 50


def human_readable_size(size: float) -> str:
    """Convert byte size to human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def info_chunk(title: str, line_char: str = "-", line_char_rep: int = 32, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    separator = line_char * line_char_rep
    print(separator, file=out)
    print(title, file=out)
    print(separator, file=out)


def _format_table(headers: Sequence[str], rows: List[Sequence[str]]) -> List[str]:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    for row in rows:
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)))
    return lines


def format_directory_table(rows: List[DuplicatedDirectoryRow]) -> List[str]:
    headers = ("dup_group", "dir", "n_files", "n_dup_dirs", "dir_abs")
    cells = [
        (str(r.dup_group), r.dir, str(r.n_files), str(r.n_dup_dirs), r.dir_abs)
        for r in rows
    ]
    return _format_table(headers, cells)


def format_file_table(rows: List[DuplicatedFileRow], limit: int = MAX_FILE_ROWS) -> List[str]:
    headers = ("dup_group", "n_files", "file_ext", "file_size_mb", "content_hash", "files")
    cells = [
        (str(r.dup_group), str(r.n_files), r.file_ext, f"{r.file_size_mb:.2f}", r.content_hash,
         "; ".join(m.file_rel for m in r.files))
        for r in rows[:limit]
    ]
    lines = _format_table(headers, cells)
    if len(rows) > limit:
        lines.append(f"# ... with {len(rows) - limit} more groups")
    return lines


def print_report(report: ScanReport, out: Optional[TextIO] = None) -> None:
    """Prints a short summary of both tables, or an explicit 'no duplicates' line."""
    out = out or sys.stdout

    if not report.has_duplicates:
        print(f"No duplicates found in {report.scanned_directory} "
              f"({report.total_files_scanned} files scanned).", file=out)
        return

    if report.duplicated_dirs:
        info_chunk("  >>  Duplicated directories", out=out)
        for line in format_directory_table(report.duplicated_dirs):
            print(line, file=out)

    if report.duplicated_files:
        info_chunk("  >>  Duplicated files", out=out)
        for line in format_file_table(report.duplicated_files):
            print(line, file=out)
        print(f"{len(report.duplicated_files)} groups, {report.total_duplicate_files} files, "
              f"potential savings: {human_readable_size(report.potential_total_savings_bytes)}", file=out)

    if report.errors:
        print(f"{len(report.errors)} entries could not be read and were skipped.", file=out)
