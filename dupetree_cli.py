import argparse
import sys
from datetime import datetime
from typing import List, Optional

from dupetree.core import find_duplicates, ScanOptions, InvalidArgument, InvalidPath
from dupetree.core.config import SUPPORTED_ALGORITHMS, EXECUTOR_KINDS
from dupetree.logging_setup import setup_logging
from dupetree.ui import generate_html_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dupetree",
        description="dupetree: find duplicated files and directories by content.")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    scan = subparsers.add_parser("scan", help="Scan a directory tree for duplicates.")
    scan.add_argument("scan_directory", metavar="DIRECTORY", type=str, help="The root directory to scan for duplicates.")
    scan.add_argument("-s", "--size-threshold", type=float, default=None,
                      help="Minimum file size in MB (default: 0, or $DUPETREE_SIZE_THRESHOLD).")
    scan.add_argument("-e", "--ext", dest="extensions", action="append", default=None, metavar="EXT",
                      help="Only consider files with this extension (repeatable, no leading dot).")
    scan.add_argument("-w", "--workers", dest="n_workers", type=int, default=None,
                      help="Number of parallel hashing workers (default: 1).")
    scan.add_argument("--executor", dest="executor_kind", choices=EXECUTOR_KINDS, default=None,
                      help="Worker pool type when --workers > 1.")
    scan.add_argument("--algorithm", choices=SUPPORTED_ALGORITHMS, default=None, help="Content hash algorithm.")
    scan.add_argument("-o", "--output", type=str, default=None, help="Also save an HTML report to this path.")
    scan.add_argument("-q", "--quiet", action="store_true", help="Do not print the summary tables.")
    scan.add_argument("--log-file", type=str, default=None, help="Also write log messages to this file.")
    scan.add_argument("--debug", action="store_true", help="Enable debug logging.")

    check = subparsers.add_parser("check", help="Check the integrity of archives, JSON and image files.")
    check.add_argument("files", metavar="FILE", nargs="+")

    ftype = subparsers.add_parser("type", help="Show the detected type of files.")
    ftype.add_argument("files", metavar="FILE", nargs="+")
    return parser


def run_scan(args: argparse.Namespace) -> int:
    setup_logging(verbose=args.debug, log_file=args.log_file)
    print(f"dupetree started at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    try:
        options = ScanOptions.resolve(
            size_threshold=args.size_threshold,
            extensions=args.extensions,
            n_workers=args.n_workers,
            verbose=False if args.quiet else None,
            algorithm=args.algorithm,
            executor_kind=args.executor_kind)
        report = find_duplicates(args.scan_directory, options=options)
    except (InvalidArgument, InvalidPath) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # A verbose scan has already printed the console report
    if not options.verbose and not report.has_duplicates:
        print("No duplicates found.")
    elif not options.verbose:
        print(f"Found {len(report.file_groups)} duplicated file groups and "
              f"{len(report.directory_groups)} duplicated directory groups.")

    if args.output:
        if not generate_html_report(report, args.output):
            return 1
        print(f"HTML report saved to {args.output}")
    return 0


def run_check(args: argparse.Namespace) -> int:
    from dupetree.core.validators import check_file
    setup_logging()
    all_ok = True
    for path in args.files:
        try:
            ok = check_file(path)
        except InvalidArgument as e:
            print(f"SKIP     {path}: {e}", file=sys.stderr)
            all_ok = False
            continue
        print(f"{'OK' if ok else 'INVALID':<8} {path}")
        all_ok = all_ok and ok
    return 0 if all_ok else 1


def run_type(args: argparse.Namespace) -> int:
    from dupetree.core.file_classifier import classify_file, file_type
    status = 0
    for path in args.files:
        try:
            print(f"{path}: [{classify_file(path)}] {file_type(path)}")
        except InvalidPath as e:
            print(f"Error: {e}", file=sys.stderr)
            status = 1
    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    handlers = {"scan": run_scan, "check": run_check, "type": run_type}
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
