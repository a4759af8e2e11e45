import logging
import sys

from tap_targets.config import CONFIG


class TapTargetsFormatter(logging.Formatter):
	"""Shortens ``tap_targets.gatherer.service`` to ``gatherer.service``."""

	def format(self, record: logging.LogRecord) -> str:
		if isinstance(record.name, str) and record.name.startswith('tap_targets.'):
			record.name = record.name.removeprefix('tap_targets.')
		return super().format(record)


def setup_logging(log_level: str | None = None, stream=None) -> logging.Logger:
	"""Attach a single stream handler to the ``tap_targets`` logger.

	Safe to call more than once, later calls only adjust the level.
	"""
	level_name = (log_level or CONFIG.TAP_TARGETS_LOGGING_LEVEL).upper()
	level = logging.getLevelName(level_name)
	if not isinstance(level, int):
		level = logging.INFO

	package_logger = logging.getLogger('tap_targets')
	package_logger.setLevel(level)

	if not any(getattr(handler, '_tap_targets_handler', False) for handler in package_logger.handlers):
		handler = logging.StreamHandler(stream or sys.stdout)
		handler.setFormatter(TapTargetsFormatter('%(levelname)-8s [%(name)s] %(message)s'))
		handler._tap_targets_handler = True  # type: ignore[attr-defined]
		package_logger.addHandler(handler)
		package_logger.propagate = False

	# cdp traffic is far too chatty at debug
	for third_party in ('cdp_use', 'cdp_use.client', 'websockets'):
		logging.getLogger(third_party).setLevel(logging.WARNING)

	return package_logger
