import logging
from pathlib import Path

from browser_shell.bookmarks.service import BookmarkStore
from browser_shell.export.service import OfflineExporter
from browser_shell.history.service import HistoryLog
from browser_shell.isolation.documents import DocumentStore
from browser_shell.isolation.views import InternalContent
from browser_shell.pages.service import InternalPageRouter
from browser_shell.pages.views import PageLink, ShellSnapshot
from browser_shell.profile import ShellProfile
from browser_shell.shell.views import RenderedStage
from browser_shell.tabs.service import TabStore
from browser_shell.tabs.views import TabInfo

logger = logging.getLogger(__name__)


class ShellController:
	"""
	Turns user commands into TabStore calls and renders the active tab.

	Owns one TabStore, BookmarkStore and HistoryLog for the lifetime of the shell.
	The address bar text follows the active tab, the way a real browser's does.
	"""

	def __init__(self, profile: ShellProfile | None = None):
		self.profile = profile or ShellProfile()
		self.documents = DocumentStore()
		self.history = HistoryLog()
		self.bookmarks = BookmarkStore(self.profile.default_bookmarks)
		self.tabs = TabStore(profile=self.profile, history=self.history, documents=self.documents)
		self.router = InternalPageRouter(self.profile)
		self.exporter = OfflineExporter()
		self.address_text = ''

	def start(self) -> 'ShellController':
		self.tabs.init()
		self._sync_address_bar()
		return self

	# --- Commands ---

	def submit_address(self, text: str | None = None) -> TabInfo | None:
		"""Navigate the active tab to the address bar text (or `text`), opening a tab if there is none"""
		if text is not None:
			self.address_text = text

		active_id = self.tabs.active_id
		if active_id is None:
			if not self.address_text.strip():
				return None
			tab = self.tabs.open(self.address_text)
		else:
			tab = self.tabs.navigate(active_id, self.address_text)

		self._sync_address_bar()
		return tab

	def new_tab(self, text: str | None = None) -> TabInfo:
		tab = self.tabs.open(text)
		self._sync_address_bar()
		return tab

	def close_tab(self, tab_id: str | None = None) -> None:
		tab_id = tab_id or self.tabs.active_id
		if tab_id is not None:
			self.tabs.close(tab_id)
		self._sync_address_bar()

	def select_tab(self, tab_id: str) -> None:
		self.tabs.select(tab_id)
		self._sync_address_bar()

	def reload(self) -> TabInfo | None:
		active_id = self.tabs.active_id
		return self.tabs.reload(active_id) if active_id else None

	def toggle_bookmark(self) -> bool:
		"""Star or un-star the active tab, returns whether it is bookmarked afterwards"""
		tab = self.tabs.active_tab
		if tab is None:
			return False
		return self.bookmarks.toggle(tab.destination, tab.display_name)

	@property
	def is_current_bookmarked(self) -> bool:
		tab = self.tabs.active_tab
		return tab is not None and self.bookmarks.is_bookmarked(tab.destination)

	def remove_bookmark(self, href: str) -> bool:
		return self.bookmarks.remove(href)

	def clear_history(self) -> None:
		self.history.clear()
		logger.info('🧹 Cleared browsing history')

	def follow(self, link: PageLink) -> TabInfo | None:
		"""
		Dispatch a link clicked on an internal page.

		remove and clear act on the bookmark and history stores and leave the tabs
		alone, so they return None.
		"""
		if link.action == 'open':
			return self.new_tab(link.href)
		if link.action == 'remove':
			self.remove_bookmark(link.href)
			return None
		if link.action == 'clear':
			self.clear_history()
			return None
		return self.submit_address(link.href)

	def save_offline(self, directory: Path | None = None) -> Path | None:
		tab = self.tabs.active_tab
		if tab is None:
			return None
		snapshot = self.exporter.snapshot(tab.destination, tab.display_name)
		file_path = snapshot.sync_to_disk_sync(directory or self.profile.downloads_path)
		logger.info(f'💾 Saved {tab.display_name} offline to {file_path}')
		return file_path

	# --- Rendering ---

	def snapshot(self, history_query: str | None = None) -> ShellSnapshot:
		return ShellSnapshot(
			tabs=self.tabs.snapshot(),
			bookmarks=self.bookmarks.snapshot(),
			history=self.history.snapshot(query=history_query),
		)

	def render_active(self) -> RenderedStage | None:
		tab = self.tabs.active_tab
		if tab is None:
			return None

		if isinstance(tab.content, InternalContent):
			view = self.router.render(tab.content.page, self.snapshot())
			return RenderedStage(tab_id=tab.id, title=tab.display_name, href=tab.href, page=view, document=view.html)

		return RenderedStage(
			tab_id=tab.id,
			title=tab.display_name,
			href=tab.href,
			isolated=tab.content,
			document=self.documents.read(tab.content.root.handle),
		)

	def _sync_address_bar(self) -> None:
		tab = self.tabs.active_tab
		self.address_text = tab.href if tab else ''
