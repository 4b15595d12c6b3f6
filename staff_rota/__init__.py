import logging
import sys
from typing import Any

from rich.console import Console

__version__ = '0.4.0'
__all__ = ['__version__', 'logger', 'console', 'enable_debug_logging']

SUCCESS = 25


class _LevelColourFormatter(logging.Formatter):
	"""Wraps each record in the ANSI colour of its level."""

	RESET = '\033[0m'
	PALETTE = {
		logging.DEBUG: '\033[90m',
		logging.INFO: RESET,
		SUCCESS: '\033[32m',
		logging.WARNING: '\033[33m',
		logging.ERROR: '\033[31m',
		logging.CRITICAL: '\033[1;31m',
	}

	def format(self, record: logging.LogRecord) -> str:
		colour = self.PALETTE.get(record.levelno, self.RESET)
		return f'{colour}{super().format(record)}{self.RESET}'


class CustomLogger(logging.Logger):
	"""Logger that can report a finished shift or run at SUCCESS level."""

	SUCCESS = SUCCESS

	def __init__(self, name: str, level: int = logging.NOTSET) -> None:
		super().__init__(name, level)
		logging.addLevelName(SUCCESS, 'SUCCESS')

	def success(self, message: str, *args: Any, **kwargs: Any) -> None:
		self.log(SUCCESS, message, *args, **kwargs)

	@classmethod
	def setup_logger(cls, name: str, level: int = logging.INFO) -> 'CustomLogger':
		"""Build the package logger, writing bare coloured messages to stderr."""
		logging.setLoggerClass(cls)
		logger = logging.getLogger(name)
		if not isinstance(logger, cls):
			raise TypeError(f'Logger {name!r} already exists as {type(logger).__name__}')

		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(_LevelColourFormatter('%(message)s'))
		logger.addHandler(handler)
		logger.setLevel(level)
		return logger


logger = CustomLogger.setup_logger('staff_rota')

# Run summaries and schedule previews
console = Console()


def enable_debug_logging() -> None:
	"""Show which lookup strategy matched each row, cell and control."""
	logger.setLevel(logging.DEBUG)
