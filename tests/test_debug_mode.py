"""
Tests for debug mode functionality.
"""

import unittest
import os
import sys
from io import StringIO
from unittest.mock import patch
from sfsquery.client import SFSQuery, QueryMode
from sfsquery.config import config
from sfsquery.debug import debug_logger, debug_transport_method
from sfsquery.exceptions import NetworkFailure
from sfsquery.transports.base import BaseTransport, TransportKind


class TestDebugConfiguration(unittest.TestCase):
    """Test debug configuration functionality."""

    def test_debug_mode_disabled_by_default(self):
        """Test that debug mode is disabled by default."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertFalse(config.is_debug_mode())
            self.assertEqual(config.get_debug_level(), 'off')

    def test_debug_mode_enabled_by_environment(self):
        """Test debug mode enabled by environment variable."""
        test_cases = [
            ('true', True),
            ('1', True),
            ('yes', True),
            ('on', True),
            ('false', False),
            ('0', False),
            ('no', False),
            ('off', False),
        ]

        for value, expected in test_cases:
            with patch.dict(os.environ, {'SFSQUERY_DEBUG': value}):
                self.assertEqual(config.is_debug_mode(), expected)

    def test_debug_levels(self):
        """Test different debug levels."""
        with patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true'}):
            os.environ.pop('SFSQUERY_DEBUG_LEVEL', None)
            self.assertEqual(config.get_debug_level(), 'basic')

            for level in ['basic', 'detailed', 'verbose']:
                with patch.dict(os.environ, {'SFSQUERY_DEBUG_LEVEL': level}):
                    self.assertEqual(config.get_debug_level(), level)

            with patch.dict(os.environ, {'SFSQUERY_DEBUG_LEVEL': 'invalid'}):
                self.assertEqual(config.get_debug_level(), 'basic')


class TestDebugLogger(unittest.TestCase):
    """Test debug logger functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.original_stderr = sys.stderr
        self.captured_stderr = StringIO()
        sys.stderr = self.captured_stderr

    def tearDown(self):
        """Clean up test fixtures."""
        sys.stderr = self.original_stderr

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'basic'})
    def test_basic_logging(self):
        """Test basic debug logging."""
        debug_logger.log('basic', 'Test message')

        output = self.captured_stderr.getvalue()
        self.assertIn('[DEBUG', output)
        self.assertIn('Test message', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'false'})
    def test_logging_disabled_when_debug_off(self):
        """Test that logging is disabled when debug mode is off."""
        debug_logger.log('basic', 'Test message')

        self.assertEqual(self.captured_stderr.getvalue(), '')

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'basic'})
    def test_log_level_filtering(self):
        """Test that higher level messages are filtered out."""
        debug_logger.log('detailed', 'Detailed message')
        debug_logger.log('verbose', 'Verbose message')

        output = self.captured_stderr.getvalue()
        self.assertNotIn('Detailed message', output)
        self.assertNotIn('Verbose message', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'detailed'})
    def test_detailed_logging_with_data(self):
        """Test detailed logging with data."""
        debug_logger.log('detailed', 'Test with data', {'frequency': 12, 'ip': {'appears': 1}})

        output = self.captured_stderr.getvalue()
        self.assertIn('Test with data', output)
        self.assertIn('frequency: 12', output)
        self.assertIn('ip: 1 items', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'detailed'})
    def test_long_field_shortened(self):
        """Test that long response bodies are cut at the detailed level."""
        debug_logger.log('detailed', 'Query result:', {'raw_response': 'x' * 500})

        output = self.captured_stderr.getvalue()
        self.assertIn("raw_response: '" + 'x' * 97 + "...'", output)
        self.assertNotIn('x' * 98, output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'verbose'})
    def test_verbose_logging_prints_json(self):
        """Test that the verbose level prints fields as JSON."""
        debug_logger.log('detailed', 'Query result:', {'frequency': 12, 'country': 'fr'})

        output = self.captured_stderr.getvalue()
        self.assertIn('[DEBUG]     "country": "fr",', output)
        self.assertIn('[DEBUG]     "frequency": 12', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'detailed'})
    def test_usable_transports_logged(self):
        """Test that the client lists usable transports and their kinds."""
        transport = MockTransport()
        transport.is_available = lambda: True
        SFSQuery('8.8.8.8', transports=[transport]).query()

        output = self.captured_stderr.getvalue()
        self.assertIn('Usable transports: mock (fetch)', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'basic'})
    def test_transport_logging(self):
        """Test transport call, result and error logging."""
        debug_logger.log_transport_call('urllib', 'http://api.stopforumspam.org/api?json&ip=8.8.8.8')
        debug_logger.log_transport_result('urllib', '{"success":1}', 0.5)
        debug_logger.log_transport_error('socket', NetworkFailure('Connection refused'), 0.2)

        output = self.captured_stderr.getvalue()
        self.assertIn('Transport call #', output)
        self.assertIn('urllib.fetch(http://api.stopforumspam.org/api?json&ip=8.8.8.8)', output)
        self.assertIn('Transport result: urllib -> str(13 chars) (0.500s)', output)
        self.assertIn('Transport error: socket -> NetworkFailure: Connection refused (0.200s)', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'basic'})
    def test_query_logging(self):
        """Test query start/complete logging from the client."""
        sfs = SFSQuery('188.35.167.7', mode=QueryMode.DNS, resolver=lambda hostname: hostname)
        sfs.query()

        output = self.captured_stderr.getvalue()
        self.assertIn('Starting DNS query for: 188.35.167.7', output)
        self.assertIn('Completed DNS query for 188.35.167.7 (ok)', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'basic'})
    def test_failed_query_logging(self):
        """Test that a failed query logs its error."""
        SFSQuery('10.0.0.1', mode=QueryMode.DNS).query()

        output = self.captured_stderr.getvalue()
        self.assertIn('Completed DNS query for 10.0.0.1 (failed: Private, reserved', output)


class MockTransport(BaseTransport):
    """Mock transport for testing the debug decorator."""

    def __init__(self, error=None):
        super().__init__("mock", TransportKind.FETCH, timeout=1.0, user_agent="test")
        self.error = error

    @debug_transport_method
    def fetch(self, url):
        if self.error:
            raise self.error
        return '{"success":1}'


class TestDebugDecorator(unittest.TestCase):
    """Test debug decorator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.original_stderr = sys.stderr
        self.captured_stderr = StringIO()
        sys.stderr = self.captured_stderr

    def tearDown(self):
        """Clean up test fixtures."""
        sys.stderr = self.original_stderr

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'false'})
    def test_decorator_disabled_when_debug_off(self):
        """Test that decorator does nothing when debug is off."""
        result = MockTransport().fetch('http://example.com/')

        self.assertEqual(result, '{"success":1}')
        self.assertEqual(self.captured_stderr.getvalue(), '')

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'basic'})
    def test_decorator_logs_successful_call(self):
        """Test that decorator logs successful fetches."""
        result = MockTransport().fetch('http://example.com/')

        self.assertEqual(result, '{"success":1}')
        output = self.captured_stderr.getvalue()
        self.assertIn('mock.fetch(http://example.com/)', output)
        self.assertIn('Transport result: mock', output)

    @patch.dict(os.environ, {'SFSQUERY_DEBUG': 'true', 'SFSQUERY_DEBUG_LEVEL': 'basic'})
    def test_decorator_logs_errors(self):
        """Test that decorator logs and re-raises errors."""
        with self.assertRaises(NetworkFailure):
            MockTransport(error=NetworkFailure('Connection refused')).fetch('http://example.com/')

        output = self.captured_stderr.getvalue()
        self.assertIn('Transport error: mock -> NetworkFailure: Connection refused', output)


if __name__ == '__main__':
    unittest.main()
