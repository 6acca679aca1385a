# dupetree/core/file_classifier.py
import os
import magic
from typing import Optional
from .errors import InvalidPath

# Basic extension mapping, keys without the leading dot
EXTENSION_TO_TYPE_MAP = {
    # Images and rasters
    'jpg': 'image', 'jpeg': 'image', 'png': 'image', 'gif': 'image',
    'bmp': 'image', 'tif': 'image', 'tiff': 'image', 'webp': 'image',
    # Documents
    'doc': 'document', 'docx': 'document', 'pdf': 'document', 'txt': 'document',
    'odt': 'document', 'xls': 'document', 'xlsx': 'document', 'md': 'document',
    # Archives
    'zip': 'archive', 'tar': 'archive', 'gz': 'archive', 'tgz': 'archive',
    'bz2': 'archive', 'xz': 'archive', '7z': 'archive',
    # Code
    'py': 'code', 'r': 'code', 'sh': 'code', 'c': 'code', 'cpp': 'code',
    'js': 'code', 'html': 'code', 'css': 'code',
    # Data
    'json': 'data', 'xml': 'data', 'csv': 'data', 'tsv': 'data', 'yaml': 'data',
    'yml': 'data', 'nc': 'data', 'feather': 'data', 'parquet': 'data',
    'rds': 'data', 'rdata': 'data', 'qs2': 'data', 'pkl': 'data',
}


def _existing_file(path: str) -> str:
    if path is None or not os.path.isfile(path):
        raise InvalidPath("File does not exist", path)
    return path


def file_type(path: str) -> str:
    """Returns libmagic's human-readable description of a file, e.g. 'Zip archive data'."""
    return magic.from_file(_existing_file(path))


def mime_type(path: str) -> str:
    return magic.from_file(_existing_file(path), mime=True)


def classify_by_mime(mime: Optional[str], extension: Optional[str] = None) -> str:
    if not mime:
        return 'unknown'
    primary_type = mime.split('/')[0]
    if primary_type in ['image', 'video', 'audio']:
        return primary_type
    if primary_type == 'text':
        # Prefer extension map for code or data files reported as text/*
        return EXTENSION_TO_TYPE_MAP.get(extension or '', 'document')
    if 'zip' in mime or 'compressed' in mime or 'archive' in mime or 'tar' in mime:
        return 'archive'
    if 'xml' in mime or 'json' in mime:
        return 'data'
    if 'octet-stream' in mime:
        return EXTENSION_TO_TYPE_MAP.get(extension or '', 'binary_unknown')
    return 'unknown'


def classify_file(path: str) -> str:
    """
    Classifies a file based on its extension, falling back to its magic number.
    """
    extension = os.path.splitext(path)[1].lower().lstrip('.')
    if extension in EXTENSION_TO_TYPE_MAP:
        return EXTENSION_TO_TYPE_MAP[extension]
    try:
        mime = magic.from_file(path, mime=True)
    except magic.MagicException:
        return 'unknown'
    except OSError:
        return 'unknown'
    return classify_by_mime(mime, extension)
