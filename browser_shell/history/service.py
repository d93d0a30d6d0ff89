import logging

from browser_shell.history.views import HistoryEntry
from browser_shell.navigation.views import Destination

logger = logging.getLogger(__name__)


class HistoryLog:
	"""Append-only navigation history. Entries are only ever removed all at once by clear()."""

	def __init__(self):
		self._entries: list[HistoryEntry] = []

	def record(self, destination: Destination, display_name: str) -> HistoryEntry:
		entry = HistoryEntry(destination=destination, display_name=display_name)
		self._entries.append(entry)
		return entry

	def entries(self, query: str | None = None, limit: int | None = None) -> list[HistoryEntry]:
		"""Newest first, optionally filtered by a case-insensitive match on name or address"""
		needle = (query or '').strip().lower()
		matches = [
			entry
			for entry in reversed(self._entries)
			if not needle or needle in entry.display_name.lower() or needle in entry.href.lower()
		]
		return matches if limit is None else matches[:limit]

	def snapshot(self, query: str | None = None, limit: int | None = None) -> tuple[HistoryEntry, ...]:
		return tuple(self.entries(query=query, limit=limit))

	def clear(self) -> None:
		logger.debug(f'🧹 Cleared {len(self._entries)} history entries')
		self._entries = []

	def __len__(self) -> int:
		return len(self._entries)
