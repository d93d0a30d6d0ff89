import logging
import os
import re
import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)

# Define generic type variables for return type and parameters
R = TypeVar('R')
P = ParamSpec('P')

_UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9._-]+')


def time_execution_sync(additional_text: str = '') -> Callable[[Callable[P, R]], Callable[P, R]]:
	def decorator(func: Callable[P, R]) -> Callable[P, R]:
		@wraps(func)
		def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
			start_time = time.time()
			result = func(*args, **kwargs)
			execution_time = time.time() - start_time
			# Only log if execution takes more than 0.25 seconds
			if execution_time > 0.25:
				self_has_logger = args and getattr(args[0], 'logger', None)
				if self_has_logger:
					logger = getattr(args[0], 'logger')
				else:
					logger = logging.getLogger(__name__)
				logger.debug(f'⏳ {additional_text.strip("-")}() took {execution_time:.2f}s')
			return result

		return wrapper

	return decorator


def get_browser_shell_version() -> str:
	"""Get the browser-shell package version"""
	try:
		if os.getenv('LIBRARY_VERSION'):
			return os.environ['LIBRARY_VERSION']

		from importlib.metadata import version as get_version

		version = str(get_version('browser-shell'))
		os.environ['LIBRARY_VERSION'] = version
		return version

	except Exception as e:
		logger.debug(f'Error detecting browser-shell version: {type(e).__name__}: {e}')
		return 'unknown'


def safe_filename(name: str, fallback: str = 'page') -> str:
	"""Reduce a display name to characters that are safe in a file name on every platform"""
	cleaned = _UNSAFE_FILENAME_CHARS.sub('-', name.strip()).strip('-.')
	return cleaned or fallback


def _log_pretty_url(s: str, max_len: int | None = 22) -> str:
	"""Truncate/pretty-print a URL with a maximum length, removing the protocol and www. prefix"""
	s = s.replace('https://', '').replace('http://', '').replace('www.', '')
	if max_len is not None and len(s) > max_len:
		return s[:max_len] + '…'
	return s
