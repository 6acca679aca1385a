# tests/test_logging_setup.py
import unittest
import logging
import os
import tempfile

from dupetree.logging_setup import setup_logging, CONSOLE_HANDLER_NAME


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.logger = logging.getLogger("dupetree")
        saved = (list(self.logger.handlers), self.logger.level, self.logger.propagate)
        self.logger.handlers = []
        self.addCleanup(self.restore, *saved)
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def restore(self, handlers, level, propagate):
        for handler in self.logger.handlers:
            if handler not in handlers:
                handler.close()
        self.logger.handlers = handlers
        self.logger.setLevel(level)
        self.logger.propagate = propagate

    def test_repeated_setup_adds_one_console_handler(self):
        setup_logging()
        setup_logging(verbose=True)
        names = [h.get_name() for h in self.logger.handlers]
        self.assertEqual(names, [CONSOLE_HANDLER_NAME])
        self.assertEqual(self.logger.level, logging.DEBUG)
        self.assertFalse(self.logger.propagate)

    def test_log_file_handler_added_once(self):
        log_path = os.path.join(self.tmp.name, "scan.log")
        setup_logging(log_file=log_path)
        logger = setup_logging(log_file=log_path)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(logger.level, logging.INFO)

        logger.info("Scanning %s", "/data")
        file_handlers[0].flush()
        with open(log_path, encoding="utf-8") as f:
            self.assertIn("[INFO] Scanning /data", f.read())


if __name__ == '__main__':
    unittest.main()
