# tests/core/test_file_classifier.py
import unittest
import os
import tempfile
from unittest import mock # For mocking 'magic' module

from dupetree.core.file_classifier import (
    classify_file, classify_by_mime, file_type, mime_type, EXTENSION_TO_TYPE_MAP
)
from dupetree.core.errors import InvalidPath


class TestFileClassifier(unittest.TestCase):

    def test_classify_by_extension(self):
        for ext, type_val in EXTENSION_TO_TYPE_MAP.items():
            # Path does not need to exist for extension classification
            self.assertEqual(classify_file(f"testfile.{ext}"), type_val, f"Failed for extension {ext}")

    def test_extension_is_case_insensitive(self):
        self.assertEqual(classify_file("MAP.TIF"), "image")
        self.assertEqual(classify_file("archive.Zip"), "archive")

    @mock.patch('dupetree.core.file_classifier.magic')
    def test_classify_by_magic_image(self, mock_magic):
        mock_magic.from_file.return_value = "image/jpeg"

        self.assertEqual(classify_file("testfile_no_ext"), "image")
        mock_magic.from_file.assert_called_once_with("testfile_no_ext", mime=True)

    @mock.patch('dupetree.core.file_classifier.magic')
    def test_known_extension_skips_magic(self, mock_magic):
        self.assertEqual(classify_file("data.csv"), "data")
        mock_magic.from_file.assert_not_called()

    @mock.patch('dupetree.core.file_classifier.magic')
    def test_classify_by_magic_unknown_mime(self, mock_magic):
        mock_magic.from_file.return_value = "application/octet-stream"
        self.assertEqual(classify_file("testfile.bin"), "binary_unknown")
        mock_magic.from_file.assert_called_with("testfile.bin", mime=True)

    @mock.patch('dupetree.core.file_classifier.magic')
    def test_classify_magic_exception(self, mock_magic):
        mock_magic.MagicException = type("MagicException", (Exception,), {})
        mock_magic.from_file.side_effect = mock_magic.MagicException("Magic error")
        self.assertEqual(classify_file("testfile_error"), "unknown")

    @mock.patch('dupetree.core.file_classifier.magic')
    def test_classify_unknown_no_magic(self, mock_magic):
        mock_magic.from_file.return_value = None # Simulate magic not finding a type
        self.assertEqual(classify_file("testfile.unknownext"), "unknown")

    def test_classify_by_mime(self):
        self.assertEqual(classify_by_mime("text/plain", "py"), "code")
        self.assertEqual(classify_by_mime("text/plain", "weird"), "document")
        self.assertEqual(classify_by_mime("application/zip"), "archive")
        self.assertEqual(classify_by_mime("application/x-tar"), "archive")
        self.assertEqual(classify_by_mime("application/json"), "data")
        self.assertEqual(classify_by_mime("application/octet-stream", "exe"), "binary_unknown")
        self.assertEqual(classify_by_mime("application/vnd.foo"), "unknown")
        self.assertEqual(classify_by_mime("video/mp4"), "video")


class TestFileType(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "notes")
        with open(self.path, 'w') as f:
            f.write("plain text\n")

    @mock.patch('dupetree.core.file_classifier.magic')
    def test_file_type_description(self, mock_magic):
        mock_magic.from_file.return_value = "ASCII text"
        self.assertEqual(file_type(self.path), "ASCII text")
        mock_magic.from_file.assert_called_once_with(self.path)

    @mock.patch('dupetree.core.file_classifier.magic')
    def test_mime_type(self, mock_magic):
        mock_magic.from_file.return_value = "text/plain"
        self.assertEqual(mime_type(self.path), "text/plain")
        mock_magic.from_file.assert_called_once_with(self.path, mime=True)

    def test_missing_file(self):
        with self.assertRaises(InvalidPath):
            file_type(os.path.join(self.tmp.name, "missing"))
        with self.assertRaises(InvalidPath):
            mime_type(None)


if __name__ == '__main__':
    unittest.main()
