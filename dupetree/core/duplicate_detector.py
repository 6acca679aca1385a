# dupetree/core/duplicate_detector.py
from typing import List, Dict, Set, Tuple
from collections import defaultdict
from .models import FileEntry, DirectoryEntry, DuplicateFileGroup, DuplicateDirectoryGroup


def group_duplicate_files(files: List[FileEntry]) -> List[DuplicateFileGroup]:
    """
    Partitions fingerprinted files by content and keeps partitions of 2+ files.

    Groups are ordered by descending file size (ties keep first-discovery
    order) and numbered from 1. Entries without a fingerprint are ignored.
    """
    hashes: Dict[str, List[FileEntry]] = defaultdict(list)
    seen: Set[FileEntry] = set()

    for file_entry in files:
        if not file_entry.fingerprint or file_entry in seen:
            continue
        seen.add(file_entry)
        hashes[file_entry.fingerprint].append(file_entry)

    partitions = [(file_hash, members) for file_hash, members in hashes.items() if len(members) > 1]
    # sorted() is stable, so equal sizes stay in discovery order
    partitions = sorted(partitions, key=lambda item: -item[1][0].size)

    return [
        DuplicateFileGroup(group_id=i, fingerprint=file_hash, files=members)
        for i, (file_hash, members) in enumerate(partitions, 1)
    ]


def group_duplicate_directories(directories: List[DirectoryEntry]) -> List[DuplicateDirectoryGroup]:
    """
    Partitions directories by the multiset of their direct files' fingerprints.

    Directories without any fingerprinted direct file never take part.
    Groups are ordered by descending file count, then first discovery, and
    numbered from 1 independently of the file groups.
    """
    partitions: Dict[Tuple[str, ...], List[DirectoryEntry]] = defaultdict(list)

    for directory in directories:
        key = directory.fingerprints()
        if not key:
            continue
        partitions[key].append(directory)

    candidates = [members for members in partitions.values() if len(members) > 1]
    candidates = sorted(candidates, key=lambda members: -members[0].n_files)

    return [
        DuplicateDirectoryGroup(group_id=i, directories=sorted(members, key=lambda d: d.rel_path))
        for i, members in enumerate(candidates, 1)
    ]
