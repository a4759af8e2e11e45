import io
import logging

import pytest

from tap_targets.config import CONFIG
from tap_targets.logging_config import setup_logging
from tap_targets.utils import time_execution_async, time_execution_sync, truncate


class TestTruncate:
	def test_short_strings_are_unchanged(self):
		assert truncate('button', 6) == 'button'
		assert truncate('', 1) == ''

	def test_long_strings_end_with_ellipsis(self):
		assert truncate('<button>Buy now</button>', 10) == '<button>B…'

	@pytest.mark.parametrize('length', [1, 2, 5, 699, 700, 701, 2000])
	def test_never_longer_than_limit(self, length):
		text = 'a' * length
		for limit in (1, 7, 700):
			result = truncate(text, limit)
			assert len(result) <= limit
			if length <= limit:
				assert result == text


def test_timing_decorators_return_results():
	@time_execution_sync('--double')
	def double(value):
		return value * 2

	assert double(21) == 42
	assert double.__name__ == 'double'


async def test_async_timing_decorator_returns_results():
	@time_execution_async('--fetch')
	async def fetch():
		return 'ok'

	assert await fetch() == 'ok'


class TestConfig:
	def test_logging_level_reads_environment(self, monkeypatch):
		monkeypatch.setenv('TAP_TARGETS_LOGGING_LEVEL', 'DEBUG')
		assert CONFIG.TAP_TARGETS_LOGGING_LEVEL == 'debug'

		monkeypatch.delenv('TAP_TARGETS_LOGGING_LEVEL')
		assert CONFIG.TAP_TARGETS_LOGGING_LEVEL == 'info'

	@pytest.mark.parametrize(('value', 'expected'), [('true', True), ('1', True), ('False', False), ('', False)])
	def test_setup_logging_flag(self, monkeypatch, value, expected):
		monkeypatch.setenv('TAP_TARGETS_SETUP_LOGGING', value)
		assert CONFIG.TAP_TARGETS_SETUP_LOGGING is expected


class TestSetupLogging:
	def test_single_handler_and_short_names(self):
		package_logger = logging.getLogger('tap_targets')
		saved_handlers = list(package_logger.handlers)
		saved_level = package_logger.level
		saved_propagate = package_logger.propagate
		package_logger.handlers = []
		try:
			stream = io.StringIO()
			setup_logging('debug', stream=stream)
			setup_logging('warning', stream=stream)

			assert len(package_logger.handlers) == 1
			assert package_logger.level == logging.WARNING

			logging.getLogger('tap_targets.gatherer.service').warning('hello')
			assert '[gatherer.service] hello' in stream.getvalue()
			assert logging.getLogger('cdp_use').level == logging.WARNING
		finally:
			package_logger.handlers = saved_handlers
			package_logger.setLevel(saved_level)
			package_logger.propagate = saved_propagate

	def test_unknown_level_falls_back_to_info(self):
		package_logger = logging.getLogger('tap_targets')
		saved_level = package_logger.level
		try:
			setup_logging('chatty', stream=io.StringIO())
			assert package_logger.level == logging.INFO
		finally:
			package_logger.setLevel(saved_level)
