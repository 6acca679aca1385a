# dupetree/__init__.py
from .core import (
    find_duplicates, ScanOptions, ScanReport,
    DupeTreeError, InvalidPath, InvalidArgument, UnreadableEntry, HashFailure
)

__version__ = "0.3.0"
