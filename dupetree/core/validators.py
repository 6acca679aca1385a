# dupetree/core/validators.py
"""
File integrity checks.

Each validator tries to fully read or parse one kind of file and answers
True or False; problems are logged, never raised. ``check_file`` is the
single place that picks a validator from the file extension.
"""
import gzip
import json
import logging
import os
import tarfile
import zipfile
import zlib
from typing import Dict, List, Optional

import magic

from .errors import InvalidArgument

logger = logging.getLogger(__name__)


class FileValidator:
    name = "generic"
    extensions: List[str] = []

    def validate(self, path: str) -> bool:
        if not os.path.isfile(path):
            logger.info("File does not exist: %s", path)
            return False
        if os.path.getsize(path) == 0:
            logger.info("File is empty: %s", path)
            return False
        try:
            return self._check(path)
        except (OSError, EOFError, ValueError, zipfile.BadZipFile, zlib.error, tarfile.TarError,
                magic.MagicException) as e:
            logger.info("Error during %s validation of %s: %s", self.name, path, e)
            return False

    def _check(self, path: str) -> bool:
        raise NotImplementedError


class ZipValidator(FileValidator):
    name = "zip"
    extensions = ["zip"]

    def _check(self, path):
        with zipfile.ZipFile(path) as zf:
            bad_member = zf.testzip()
        if bad_member is not None:
            logger.info("Corrupted member %s in %s", bad_member, path)
            return False
        return True


class GzipValidator(FileValidator):
    name = "gzip"
    extensions = ["gz"]

    def _check(self, path):
        with gzip.open(path, 'rb') as f:
            for _ in iter(lambda: f.read(65536), b''):
                pass
        return True


class TarValidator(FileValidator):
    name = "tar"
    extensions = ["tar", "tar.gz", "tgz", "tar.bz2", "tar.xz"]

    def _check(self, path):
        with tarfile.open(path, 'r:*') as tf:
            for member in tf:
                if member.isfile():
                    extracted = tf.extractfile(member)
                    if extracted is not None:
                        for _ in iter(lambda: extracted.read(65536), b''):
                            pass
        return True


class JsonValidator(FileValidator):
    name = "json"
    extensions = ["json"]

    def _check(self, path):
        with open(path, 'r', encoding='utf-8') as f:
            json.load(f)
        return True


class ImageValidator(FileValidator):
    """Checks the file signature matches an image format (TIFF, PNG, JPEG...)."""
    name = "image"
    extensions = ["tif", "tiff", "png", "jpg", "jpeg", "gif", "bmp", "webp"]

    def _check(self, path):
        mime = magic.from_file(path, mime=True)
        if not mime or not mime.startswith("image/"):
            logger.info("Not an image (%s): %s", mime, path)
            return False
        return True


VALIDATORS: List[FileValidator] = [
    TarValidator(), ZipValidator(), GzipValidator(), JsonValidator(), ImageValidator()
]


def _build_index(validators: List[FileValidator]) -> Dict[str, FileValidator]:
    index: Dict[str, FileValidator] = {}
    for validator in validators:
        for ext in validator.extensions:
            index.setdefault(ext, validator)
    return index


_BY_EXTENSION = _build_index(VALIDATORS)


def validator_for(path: str) -> Optional[FileValidator]:
    # Longest match first so "x.tar.gz" goes to tar, not gzip
    lowered = os.path.basename(path).lower()
    for ext in sorted(_BY_EXTENSION, key=len, reverse=True):
        if lowered.endswith("." + ext):
            return _BY_EXTENSION[ext]
    return None


def check_file(path: str) -> bool:
    """
    Validates a file with the checker matching its extension.

    Raises:
        InvalidArgument: If no validator handles the file's extension.
    """
    validator = validator_for(path)
    if validator is None:
        raise InvalidArgument("No validator for this file type", "path", path)
    return validator.validate(path)
