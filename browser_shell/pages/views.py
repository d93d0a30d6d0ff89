from typing import Literal

from pydantic import BaseModel, ConfigDict

from browser_shell.bookmarks.views import BookmarkEntry
from browser_shell.history.views import HistoryEntry
from browser_shell.navigation.views import InternalPage
from browser_shell.tabs.views import TabStoreSnapshot


class ShellSnapshot(BaseModel):
	"""Read-only state handed to the internal page router"""

	model_config = ConfigDict(frozen=True)

	tabs: TabStoreSnapshot = TabStoreSnapshot()
	bookmarks: tuple[BookmarkEntry, ...] = ()
	history: tuple[HistoryEntry, ...] = ()  # newest first


class PageLink(BaseModel):
	"""Something clickable on an internal page, dispatched back into the stores by ShellController.follow"""

	model_config = ConfigDict(frozen=True)

	label: str
	href: str
	action: Literal['navigate', 'open', 'remove', 'clear'] = 'navigate'


class InternalPageView(BaseModel):
	model_config = ConfigDict(frozen=True)

	page: InternalPage
	title: str
	html: str
	links: tuple[PageLink, ...] = ()
