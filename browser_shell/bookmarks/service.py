import logging
from collections.abc import Iterable

from browser_shell.bookmarks.views import BookmarkEntry
from browser_shell.navigation.views import Destination
from browser_shell.utils import _log_pretty_url

logger = logging.getLogger(__name__)

MAX_SHORTCUTS = 8


class BookmarkStore:
	"""In-memory bookmarks in insertion order, at most one entry per destination"""

	def __init__(self, entries: Iterable[BookmarkEntry] | None = None):
		self._entries: dict[str, BookmarkEntry] = {}
		for entry in entries or ():
			self._entries.setdefault(entry.href, entry)

	def add(self, destination: Destination, name: str) -> BookmarkEntry:
		existing = self._entries.get(destination.href)
		if existing is not None:
			return existing

		entry = BookmarkEntry(name=name, destination=destination)
		self._entries[entry.href] = entry
		logger.debug(f'⭐ Bookmarked {_log_pretty_url(entry.href)}')
		return entry

	def remove(self, destination: Destination | str) -> bool:
		"""Remove by destination or by href, returns whether anything was removed"""
		href = destination if isinstance(destination, str) else destination.href
		removed = self._entries.pop(href, None)
		if removed is not None:
			logger.debug(f'☆ Removed bookmark {_log_pretty_url(removed.href)}')
		return removed is not None

	def toggle(self, destination: Destination, name: str) -> bool:
		"""Bookmark the destination, or remove it if it is already bookmarked. Returns the new state."""
		if self.is_bookmarked(destination):
			self.remove(destination)
			return False
		self.add(destination, name)
		return True

	def is_bookmarked(self, destination: Destination) -> bool:
		return destination.href in self._entries

	def clear(self) -> None:
		self._entries.clear()

	@property
	def entries(self) -> list[BookmarkEntry]:
		return list(self._entries.values())

	def shortcuts(self, limit: int = MAX_SHORTCUTS) -> list[BookmarkEntry]:
		"""Entries shown as tiles on the new tab page"""
		return self.entries[:limit]

	def snapshot(self) -> tuple[BookmarkEntry, ...]:
		return tuple(self._entries.values())

	def __len__(self) -> int:
		return len(self._entries)

	def __contains__(self, destination: object) -> bool:
		href = getattr(destination, 'href', None)
		return isinstance(href, str) and href in self._entries

	def __iter__(self):
		return iter(self.entries)
