"""Unit tests for configure_logging and the settings snapshot."""

import logging
import os
import tempfile
import unittest

from stroke_recognition.config import RecognitionSettings
from stroke_recognition.logging_config import LOG_FORMAT, configure_logging


class TestConfigureLogging(unittest.TestCase):
    """Tests for configure_logging function."""

    def setUp(self):
        """Save original logging state."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def tearDown(self):
        """Restore original logging state."""
        for handler in self.root_logger.handlers:
            if handler not in self.original_handlers:
                handler.close()
        self.root_logger.handlers = self.original_handlers
        self.root_logger.setLevel(self.original_level)

    def test_sets_level(self):
        configure_logging(level='DEBUG')
        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level='CHATTY')
        self.assertEqual(self.root_logger.level, logging.INFO)

    def test_adds_console_handler_with_format(self):
        configure_logging(level='INFO')
        stream_handlers = [
            h for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(stream_handlers[0].formatter._fmt, LOG_FORMAT)

    def test_with_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, 'recognition.log')
            configure_logging(level='INFO', log_file=log_file)

            file_handlers = [
                h for h in self.root_logger.handlers
                if isinstance(h, logging.FileHandler)
            ]
            self.assertEqual(len(file_handlers), 1)

            logging.getLogger('stroke_recognition.test').warning("written to file")
            file_handlers[0].flush()
            with open(log_file, encoding='utf-8') as f:
                self.assertIn("written to file", f.read())
            file_handlers[0].close()

    def test_repeated_calls_do_not_duplicate_handlers(self):
        configure_logging(level='INFO')
        configure_logging(level='INFO')
        self.assertEqual(len(self.root_logger.handlers), 1)


class TestRecognitionSettings(unittest.TestCase):

    def test_defaults(self):
        settings = RecognitionSettings().to_dict()
        self.assertTrue(settings['lenient_mode'])
        self.assertEqual(settings['confidence_thresholds'],
                         {'excellent': 0.5, 'fair': 0.2, 'poor': 0.0})
        self.assertEqual(settings['tolerances'],
                         {'position': 0.5, 'angle': 30, 'size': 0.4})
        self.assertTrue(all(settings['child_friendly_features'].values()))


if __name__ == '__main__':
    unittest.main()
