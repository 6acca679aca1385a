# dupetree/core/scanner.py
import os
import stat
import hashlib
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Optional, Sequence

from .models import FileEntry, DirectoryEntry
from .errors import InvalidPath, InvalidArgument, UnreadableEntry, HashFailure

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 65536


@dataclass
class WalkResult:
    root: str
    files: List[FileEntry] = field(default_factory=list)
    directories: List[DirectoryEntry] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict) # path: error_message

    @property
    def total_size_bytes(self) -> int:
        return sum(f.size for f in self.files)


def calculate_digest(file_path: str, algorithm: str = "md5", block_size: int = DEFAULT_BLOCK_SIZE) -> str:
    """
    Computes the content fingerprint of a file, reading it in full.

    Raises:
        HashFailure: If the file cannot be opened or read to the end.
    """
    digest = hashlib.new(algorithm)
    try:
        with open(file_path, 'rb') as f:
            for block in iter(lambda: f.read(block_size), b''):
                digest.update(block)
    except OSError as e:
        raise HashFailure(file_path, e.strerror or str(e))
    return digest.hexdigest()


def validate_root(root: str) -> str:
    """Returns the absolute, normalized root or raises InvalidPath."""
    if not isinstance(root, (str, os.PathLike)) or not os.fspath(root):
        raise InvalidPath("The scan path must be a non-empty path string", root)
    root = os.path.abspath(os.fspath(root))
    if not os.path.exists(root):
        raise InvalidPath("The scan path does not exist", root)
    if not os.path.isdir(root):
        raise InvalidPath("The scan path is not a directory", root)
    if not os.access(root, os.R_OK | os.X_OK):
        raise InvalidPath("The scan path is not readable", root)
    return root


def matched_extension(file_name: str, extensions: Optional[Sequence[str]]) -> Optional[str]:
    """
    Returns the extension recorded for file_name, or None when the filter rejects it.

    With a filter, the longest allowed suffix that matches is returned, so a
    dotfile named ``.csv`` or an archive ``a.tar.gz`` keep the extension they
    were selected by. Without a filter the last suffix is used ("" if none).
    """
    lowered = file_name.lower()
    if not extensions:
        _, file_ext = os.path.splitext(lowered)
        return file_ext.lstrip(".")
    matches = [ext for ext in extensions if lowered.endswith("." + ext)]
    if not matches:
        return None
    return max(matches, key=len)


def matches_extension(file_name: str, extensions: Optional[Sequence[str]]) -> bool:
    return matched_extension(file_name, extensions) is not None


def _stat_file(file_path: str) -> os.stat_result:
    return os.lstat(file_path)


def _relative(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace(os.sep, "/")


def walk_tree(root: str, extensions: Optional[Sequence[str]] = None, min_size_bytes: int = 0) -> WalkResult:
    """
    Recursively enumerates the qualifying files under root.

    Args:
        root (str): Directory to walk.
        extensions (Optional[Sequence[str]]): Normalized allow-list (lower-case, no dot).
            None or empty accepts every file.
        min_size_bytes (int): Files smaller than this are not candidates.

    Returns:
        WalkResult: Files in traversal order and the directories holding at
        least one qualifying file directly. Unreadable entries are recorded
        in ``errors`` and skipped.
    """
    root = validate_root(root)
    if isinstance(min_size_bytes, bool) or not isinstance(min_size_bytes, int) or min_size_bytes < 0:
        raise InvalidArgument("Minimum size must be a non-negative integer", "min_size_bytes", min_size_bytes)

    result = WalkResult(root=root)

    def on_error(error: OSError) -> None:
        failed = UnreadableEntry(error.filename or root, error.strerror or str(error))
        result.errors[failed.path] = str(failed)
        logger.debug(str(failed))

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=False):
        dirnames.sort()
        directory: Optional[DirectoryEntry] = None

        for filename in sorted(filenames):
            file_ext = matched_extension(filename, extensions)
            if file_ext is None:
                continue
            file_path = os.path.join(dirpath, filename)
            try:
                st = _stat_file(file_path)
            except OSError as e:
                failed = UnreadableEntry(file_path, e.strerror or str(e))
                result.errors[file_path] = str(failed)
                logger.debug(str(failed))
                continue

            if stat.S_ISLNK(st.st_mode) or not stat.S_ISREG(st.st_mode):
                continue
            if st.st_size < min_size_bytes:
                continue

            entry = FileEntry(
                path=file_path,
                rel_path=_relative(file_path, root),
                size=st.st_size,
                modified=datetime.fromtimestamp(st.st_mtime),
                extension=file_ext
            )
            result.files.append(entry)

            if directory is None:
                directory = DirectoryEntry(rel_path=_relative(dirpath, root), path=dirpath)
                result.directories.append(directory)
            directory.files.append(entry)

    logger.debug("Walked %s: %d candidate files in %d directories",
                 root, len(result.files), len(result.directories))
    return result
