# dupetree/core/__init__.py
from .errors import DupeTreeError, InvalidPath, InvalidArgument, UnreadableEntry, HashFailure
from .models import (
    FileEntry, DirectoryEntry, DuplicateFileGroup, DuplicateDirectoryGroup,
    MemberFile, DuplicatedFileRow, DuplicatedDirectoryRow, ScanReport
)
from .config import ScanOptions
from .scanner import walk_tree, calculate_digest, WalkResult
from .dispatcher import Executor, SequentialExecutor, PoolExecutor, make_executor, hash_entries
from .duplicate_detector import group_duplicate_files, group_duplicate_directories
from .finder import find_duplicates
