import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from browser_shell.config import CONFIG


def addLoggingLevel(levelName, levelNum, methodName=None):
	"""
	Register a custom level and a matching Logger method, e.g. RESULT (35) and logger.result().

	Raises AttributeError when the level or method name is already taken, so calling
	it twice is harmless as long as the caller ignores that error.
	"""
	if not methodName:
		methodName = levelName.lower()

	if hasattr(logging, levelName):
		raise AttributeError(f'{levelName} already defined in logging module')
	if hasattr(logging.getLoggerClass(), methodName):
		raise AttributeError(f'{methodName} already defined in logger class')

	def logForLevel(self, message, *args, **kwargs):
		if self.isEnabledFor(levelNum):
			self._log(levelNum, message, args, **kwargs)

	logging.addLevelName(levelNum, levelName)
	setattr(logging, levelName, levelNum)
	setattr(logging.getLoggerClass(), methodName, logForLevel)


class BrowserShellFormatter(logging.Formatter):
	"""Drops the package prefix so records read `[tabs.service]` instead of `[browser_shell.tabs.service]`"""

	def format(self, record):
		if isinstance(record.name, str) and record.name.startswith('browser_shell.'):
			record.name = record.name.removeprefix('browser_shell.')
		return super().format(record)


def setup_logging(log_level: str | None = None, stream=None) -> logging.Logger:
	"""
	Install one console handler shared by the root and browser_shell loggers.

	log_level is result, info or debug and defaults to BROWSER_SHELL_LOGGING_LEVEL.
	In result mode only RESULT and above are printed, without level or logger name.
	Does nothing if the root logger already has handlers.
	"""
	# Try to add RESULT level, but ignore if it already exists
	try:
		addLoggingLevel('RESULT', 35)  # This allows ERROR, FATAL and CRITICAL
	except AttributeError:
		pass

	log_type = (log_level or CONFIG.BROWSER_SHELL_LOGGING_LEVEL).lower()

	# Check if handlers are already set up
	if logging.getLogger().hasHandlers():
		return logging.getLogger('browser_shell')

	root = logging.getLogger()
	root.handlers = []

	console = logging.StreamHandler(stream or sys.stdout)
	if log_type == 'result':
		console.setLevel('RESULT')
		console.setFormatter(BrowserShellFormatter('%(message)s'))
	else:
		console.setFormatter(BrowserShellFormatter('%(levelname)-8s [%(name)s] %(message)s'))
	root.addHandler(console)

	if log_type == 'result':
		root.setLevel('RESULT')
	elif log_type == 'debug':
		root.setLevel(logging.DEBUG)
	else:
		root.setLevel(logging.INFO)

	browser_shell_logger = logging.getLogger('browser_shell')
	browser_shell_logger.propagate = False  # Don't propagate to root logger
	browser_shell_logger.addHandler(console)
	browser_shell_logger.setLevel(root.level)

	for logger_name in ('asyncio', 'dotenv'):
		third_party = logging.getLogger(logger_name)
		third_party.setLevel(logging.ERROR)
		third_party.propagate = False

	return browser_shell_logger
