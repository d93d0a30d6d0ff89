from browser_shell.logging_config import setup_logging

logger = setup_logging()

from browser_shell.bookmarks.service import BookmarkStore
from browser_shell.history.service import HistoryLog
from browser_shell.isolation.documents import DocumentStore
from browser_shell.isolation.service import IsolationLayerBuilder
from browser_shell.isolation.views import Capability, IsolationPolicy
from browser_shell.navigation.service import AddressResolver
from browser_shell.navigation.views import InternalPage
from browser_shell.pages.service import InternalPageRouter
from browser_shell.profile import ShellProfile
from browser_shell.shell.service import ShellController
from browser_shell.tabs.service import TabStore

__all__ = [
	'AddressResolver',
	'BookmarkStore',
	'Capability',
	'DocumentStore',
	'HistoryLog',
	'InternalPage',
	'InternalPageRouter',
	'IsolationLayerBuilder',
	'IsolationPolicy',
	'ShellController',
	'ShellProfile',
	'TabStore',
]
