# dupetree/core/models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Tuple

BYTES_PER_MB = 1024 * 1024


@dataclass
class FileEntry:
    path: str # absolute
    rel_path: str # relative to the scanned root
    size: int # in bytes
    modified: datetime
    extension: str = "" # lower-cased, without the leading dot
    fingerprint: Optional[str] = None # filled in once hashing completes

    def __hash__(self):
        return hash(self.path)

    def __eq__(self, other):
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.path == other.path


@dataclass
class DirectoryEntry:
    rel_path: str # "." for the scanned root itself
    path: str
    files: List[FileEntry] = field(default_factory=list) # direct qualifying files only

    def fingerprints(self) -> Tuple[str, ...]:
        # A sorted tuple compares equal exactly when the multisets do
        return tuple(sorted(f.fingerprint for f in self.files if f.fingerprint))

    @property
    def n_files(self) -> int:
        return sum(1 for f in self.files if f.fingerprint)


@dataclass
class DuplicateFileGroup:
    group_id: int
    fingerprint: str
    files: List[FileEntry] = field(default_factory=list) # discovery order

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def extensions(self) -> List[str]:
        seen: List[str] = []
        for f in self.files:
            if f.extension not in seen:
                seen.append(f.extension)
        return seen

    @property
    def size(self) -> int:
        return self.files[0].size if self.files else 0

    @property
    def total_size_bytes(self) -> int:
        return sum(f.size for f in self.files)

    @property
    def potential_savings_bytes(self) -> int:
        if not self.files:
            return 0
        # Assuming we keep one file
        return self.total_size_bytes - self.size


@dataclass
class DuplicateDirectoryGroup:
    group_id: int
    directories: List[DirectoryEntry] = field(default_factory=list)

    @property
    def n_files(self) -> int:
        return self.directories[0].n_files if self.directories else 0

    @property
    def n_dup_dirs(self) -> int:
        return len(self.directories)


@dataclass
class MemberFile:
    file_abs: str
    file_rel: str
    modified: datetime


@dataclass
class DuplicatedFileRow:
    path: str # scanned root
    dup_group: int
    files: List[MemberFile]
    file_ext: str
    n_files: int
    file_size_bytes: int
    file_size_mb: float
    content_hash: str


@dataclass
class DuplicatedDirectoryRow:
    dir: str
    dir_abs: str
    n_files: int
    n_dup_dirs: int
    dup_group: int


@dataclass
class ScanReport:
    scanned_directory: str
    duplicated_files: Optional[List[DuplicatedFileRow]] = None
    duplicated_dirs: Optional[List[DuplicatedDirectoryRow]] = None
    file_groups: List[DuplicateFileGroup] = field(default_factory=list)
    directory_groups: List[DuplicateDirectoryGroup] = field(default_factory=list)
    total_files_scanned: int = 0
    total_size_scanned_bytes: int = 0
    errors: Dict[str, str] = field(default_factory=dict) # path: error_message

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicated_files) or bool(self.duplicated_dirs)

    @property
    def total_duplicate_files(self) -> int:
        return sum(group.total_files for group in self.file_groups)

    @property
    def potential_total_savings_bytes(self) -> int:
        return sum(group.potential_savings_bytes for group in self.file_groups)
