"""Tests for the RESULT log level and the console formatter."""

import io
import logging

import pytest

from browser_shell.logging_config import BrowserShellFormatter, addLoggingLevel, setup_logging


class TestResultLevel:
	def test_result_level_is_registered(self):
		setup_logging()
		assert logging.RESULT == 35
		assert logging.getLevelName(35) == 'RESULT'
		assert callable(logging.getLogger('browser_shell').result)

	def test_registering_twice_raises(self):
		setup_logging()
		with pytest.raises(AttributeError):
			addLoggingLevel('RESULT', 35)

	def test_result_method_respects_level(self):
		setup_logging()
		stream = io.StringIO()
		handler = logging.StreamHandler(stream)
		test_logger = logging.getLogger('browser_shell_tests.result')
		test_logger.propagate = False
		test_logger.addHandler(handler)
		try:
			test_logger.setLevel(logging.ERROR)
			test_logger.result('hidden')
			test_logger.setLevel(logging.INFO)
			test_logger.result('shown %s', 'value')
		finally:
			test_logger.removeHandler(handler)

		assert stream.getvalue() == 'shown value\n'


class TestFormatter:
	def _record(self, name: str) -> logging.LogRecord:
		return logging.LogRecord(name, logging.INFO, __file__, 1, 'opened', None, None)

	def test_package_prefix_is_dropped(self):
		formatter = BrowserShellFormatter('[%(name)s] %(message)s')
		assert formatter.format(self._record('browser_shell.tabs.service')) == '[tabs.service] opened'

	def test_other_loggers_are_untouched(self):
		formatter = BrowserShellFormatter('[%(name)s] %(message)s')
		assert formatter.format(self._record('browser_shell')) == '[browser_shell] opened'
		assert formatter.format(self._record('asyncio')) == '[asyncio] opened'

	def test_setup_is_a_noop_once_handlers_exist(self):
		setup_logging()
		handlers = list(logging.getLogger().handlers)
		logger = setup_logging(log_level='debug')
		assert logger.name == 'browser_shell'
		assert logging.getLogger().handlers == handlers
