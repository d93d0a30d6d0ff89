class BrowserShellError(Exception):
	"""Base class for all browser-shell errors"""


class InvalidTabTransitionError(BrowserShellError):
	"""Error raised when a tab is moved along an edge its state machine does not have"""


class DocumentRevokedError(BrowserShellError):
	"""Error raised when reading a document handle that was revoked or never created"""


class PageNotAvailableError(BrowserShellError):
	"""Error raised when an internal page is disabled in the active shell profile"""
