# tests/core/test_validators.py
import unittest
import gzip
import io
import json
import os
import tarfile
import tempfile
import zipfile
from unittest import mock

from dupetree.core.validators import (
    check_file, validator_for, ZipValidator, GzipValidator, TarValidator, JsonValidator, ImageValidator
)
from dupetree.core.errors import InvalidArgument


class TestValidators(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def write_bytes(self, name, content):
        with open(self.path(name), 'wb') as f:
            f.write(content)
        return self.path(name)

    def test_dispatch_by_extension(self):
        self.assertIsInstance(validator_for("a.zip"), ZipValidator)
        self.assertIsInstance(validator_for("a.json.gz"), GzipValidator)
        self.assertIsInstance(validator_for("A.TAR.GZ"), TarValidator)
        self.assertIsInstance(validator_for("a.tgz"), TarValidator)
        self.assertIsInstance(validator_for("a.json"), JsonValidator)
        self.assertIsInstance(validator_for("map.tiff"), ImageValidator)
        self.assertIsNone(validator_for("a.rds"))

    def test_unsupported_extension(self):
        with self.assertRaises(InvalidArgument):
            check_file(self.write_bytes("model.rds", b"x"))

    def test_zip(self):
        good = self.path("good.zip")
        with zipfile.ZipFile(good, 'w', zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("file1.txt", "content1")
            zf.writestr("dir/file2.txt", "content2")
        self.assertTrue(check_file(good))

        with open(good, 'rb') as f:
            data = f.read()
        truncated = self.write_bytes("truncated.zip", data[: len(data) // 2])
        self.assertFalse(check_file(truncated))
        self.assertFalse(check_file(self.write_bytes("text.zip", b"not a zip at all")))

    def test_gzip(self):
        good = self.write_bytes("good.gz", gzip.compress(b"hello" * 1000))
        self.assertTrue(check_file(good))
        with open(good, 'rb') as f:
            data = f.read()
        self.assertFalse(check_file(self.write_bytes("bad.gz", data[:-10])))

    def test_tar(self):
        good = self.path("good.tar.gz")
        with tarfile.open(good, 'w:gz') as tf:
            payload = b"content"
            info = tarfile.TarInfo("file.txt")
            info.size = len(payload)
            tf.addfile(info, io.BytesIO(payload))
        self.assertTrue(check_file(good))
        self.assertFalse(check_file(self.write_bytes("bad.tar", b"garbage" * 10)))

    def test_json(self):
        good = self.path("good.json")
        with open(good, 'w') as f:
            json.dump({"a": [1, 2, 3]}, f)
        self.assertTrue(check_file(good))
        self.assertFalse(check_file(self.write_bytes("bad.json", b'{"a": [1, 2')))

    def test_missing_and_empty_files(self):
        self.assertFalse(check_file(self.path("missing.zip")))
        self.assertFalse(check_file(self.write_bytes("empty.json", b"")))

    @mock.patch('dupetree.core.validators.magic')
    def test_image_signature(self, mock_magic):
        tif = self.write_bytes("map.tif", b"II*\x00fake")
        mock_magic.from_file.return_value = "image/tiff"
        self.assertTrue(check_file(tif))
        mock_magic.from_file.return_value = "text/plain"
        self.assertFalse(check_file(tif))
        mock_magic.from_file.assert_called_with(tif, mime=True)


if __name__ == '__main__':
    unittest.main()
