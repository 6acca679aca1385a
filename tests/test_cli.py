# tests/test_cli.py
import unittest
import io
import os
import tempfile
import zipfile
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

import dupetree_cli


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.root = self.tmp.name
        env = {k: v for k, v in os.environ.items() if not k.startswith("DUPETREE_")}
        patcher = mock.patch.dict(os.environ, env, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = dupetree_cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def write(self, name, content):
        path = os.path.join(self.root, name)
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_scan_with_duplicates(self):
        self.write("a.txt", "dupe")
        self.write("b.txt", "dupe")
        report_path = os.path.join(self.root, "report.html")
        code, out, _ = self.run_cli("scan", self.root, "-o", report_path, "-w", "2")
        self.assertEqual(code, 0)
        self.assertIn(">>  Duplicated files", out)
        self.assertTrue(os.path.exists(report_path))

    def test_scan_no_duplicates(self):
        self.write("a.txt", "one")
        self.write("b.txt", "two")
        code, out, _ = self.run_cli("scan", self.root, "--quiet")
        self.assertEqual(code, 0)
        self.assertIn("No duplicates found.", out)

    def test_scan_quiet_summary(self):
        self.write("a.csv", "dupe")
        self.write("b.csv", "dupe")
        code, out, _ = self.run_cli("scan", self.root, "-q", "-e", "csv", "--algorithm", "sha256")
        self.assertEqual(code, 0)
        self.assertIn("Found 1 duplicated file groups", out)

    def test_verbose_disabled_by_environment(self):
        self.write("a.txt", "one")
        self.write("b.txt", "two")
        with mock.patch.dict(os.environ, {"DUPETREE_VERBOSE": "0"}):
            code, out, _ = self.run_cli("scan", self.root)
        self.assertEqual(code, 0)
        self.assertIn("No duplicates found.", out)

        self.write("c.txt", "one")
        with mock.patch.dict(os.environ, {"DUPETREE_VERBOSE": "false"}):
            code, out, _ = self.run_cli("scan", self.root)
        self.assertEqual(code, 0)
        self.assertIn("Found 1 duplicated file groups", out)
        self.assertNotIn(">>  Duplicated files", out)

    def test_invalid_path_exit_code(self):
        code, _, err = self.run_cli("scan", os.path.join(self.root, "missing"))
        self.assertEqual(code, 1)
        self.assertIn("does not exist", err)

    def test_invalid_worker_count_exit_code(self):
        code, _, err = self.run_cli("scan", self.root, "--workers", "0")
        self.assertEqual(code, 1)
        self.assertIn("n_workers", err)

    def test_check_command(self):
        good = os.path.join(self.root, "good.zip")
        with zipfile.ZipFile(good, 'w') as zf:
            zf.writestr("f.txt", "content")
        bad = self.write("bad.json", "{oops")

        code, out, _ = self.run_cli("check", good)
        self.assertEqual(code, 0)
        self.assertIn("OK", out)

        code, out, _ = self.run_cli("check", good, bad)
        self.assertEqual(code, 1)
        self.assertIn("INVALID", out)

    def test_type_command(self):
        path = self.write("notes.txt", "hello")
        with mock.patch("dupetree.core.file_classifier.magic") as mock_magic:
            mock_magic.from_file.return_value = "ASCII text"
            code, out, _ = self.run_cli("type", path)
        self.assertEqual(code, 0)
        self.assertIn("[document] ASCII text", out)

        code, _, err = self.run_cli("type", os.path.join(self.root, "missing.txt"))
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
