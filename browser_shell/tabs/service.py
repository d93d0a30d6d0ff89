from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, PrivateAttr
from uuid_extensions import uuid7str

from browser_shell.exceptions import InvalidTabTransitionError
from browser_shell.history.service import HistoryLog
from browser_shell.isolation.documents import DocumentStore
from browser_shell.isolation.service import IsolationLayerBuilder
from browser_shell.navigation.service import AddressResolver, display_name_for
from browser_shell.navigation.views import Destination, InternalDestination, InternalPage
from browser_shell.profile import ShellProfile
from browser_shell.tabs.views import TAB_TRANSITIONS, Tab, TabInfo, TabState, TabStoreSnapshot
from browser_shell.utils import _log_pretty_url


class TabStore(BaseModel):
	"""
	Ordered collection of tabs plus the active-tab pointer.

	Single writer: every operation is synchronous and finishes before it returns,
	so callers never observe a half-applied change. Once a tab exists there is
	always exactly one ACTIVE tab, and closing the last tab opens a fresh new-tab
	page so the store is never left empty.

	Each tab owns the document handles of its current content descriptor. They are
	revoked when the descriptor is replaced (navigate / reload) or the tab closes.
	"""

	model_config = ConfigDict(
		extra='forbid',
		validate_assignment=False,
		arbitrary_types_allowed=True,
	)

	id: str = Field(default_factory=uuid7str)
	profile: InstanceOf[ShellProfile] = Field(
		default_factory=ShellProfile,
		description='ShellProfile() instance with the isolation policy and address-bar rules to use',
	)
	history: InstanceOf[HistoryLog] = Field(
		default_factory=HistoryLog,
		description='HistoryLog that navigations are recorded into, shared with the internal pages',
	)
	documents: InstanceOf[DocumentStore] = Field(
		default_factory=DocumentStore,
		description='DocumentStore isolation layer documents are allocated in',
	)
	initialized: bool = Field(default=False, description='True once init() or open() has run')

	_tabs: list[Tab] = PrivateAttr(default_factory=list)
	_active_id: str | None = PrivateAttr(default=None)
	_resolver: AddressResolver | None = PrivateAttr(default=None)
	_builder: IsolationLayerBuilder | None = PrivateAttr(default=None)
	_logger: logging.Logger | None = PrivateAttr(default=None)

	def model_post_init(self, __context) -> None:
		self._resolver = AddressResolver(self.profile)
		self._builder = IsolationLayerBuilder(self.documents)

	@property
	def logger(self) -> logging.Logger:
		"""Get instance-specific logger with store ID in the name"""
		if self._logger is None:
			self._logger = logging.getLogger(f'browser_shell.{self}')
		return self._logger

	@property
	def resolver(self) -> AddressResolver:
		assert self._resolver is not None, 'TabStore was not initialized through model_post_init'
		return self._resolver

	@property
	def builder(self) -> IsolationLayerBuilder:
		assert self._builder is not None, 'TabStore was not initialized through model_post_init'
		return self._builder

	def __str__(self) -> str:
		return f'TabStore🗂 {self.id[-4:]}'

	def __repr__(self) -> str:
		return f'TabStore🗂 {self.id[-4:]} (tabs={len(self._tabs)}, profile={self.profile})'

	# --- Lifecycle ---

	def init(self) -> TabStore:
		"""Open the default new tab page if the store has no tabs yet"""
		if not self._tabs:
			self.open()
		self.initialized = True
		return self

	# --- Mutating operations ---

	def open(self, destination: str | Destination | None = None) -> TabInfo:
		"""
		Open a tab and make it active.

		destination may be raw address-bar text, an already resolved Destination,
		or None for the new tab page. Blank text also opens the new tab page.
		Opening an explicit destination counts as a navigation and is recorded in
		the history; the default new tab page is not.
		"""
		resolved = self._coerce_destination(destination)
		explicit = resolved is not None
		resolved = resolved or self.new_tab_destination

		display_name = display_name_for(resolved)
		content = self.builder.build(resolved, self.profile.isolation_policy, title=display_name)

		tab = Tab(id=uuid7str(), destination=resolved, display_name=display_name, content=content)
		self._tabs.append(tab)
		self._activate(tab)
		self.initialized = True

		if explicit:
			self.history.record(resolved, display_name)

		self.logger.info(f'➕ Opened tab [{len(self._tabs) - 1}] {_log_pretty_url(resolved.href)}')
		return tab.info()

	def close(self, tab_id: str) -> None:
		"""
		Close a tab. Unknown or already-closed ids are ignored.

		If the closed tab was active, the first remaining tab becomes active. If no
		tabs remain, a new tab page is opened in its place.
		"""
		tab = self._find(tab_id)
		if tab is None:
			self.logger.debug(f'🤷 close() ignored, no open tab with id {tab_id}')
			return

		was_active = tab.id == self._active_id
		self._tabs.remove(tab)
		released = self.builder.release(tab.content)
		self._transition(tab, TabState.CLOSED)
		if was_active:
			self._active_id = None

		self.logger.info(f'🗑️ Closed tab {_log_pretty_url(tab.destination.href)} (released {released} document handle(s))')

		if not self._tabs:
			self.open()
		elif was_active:
			self._activate(self._tabs[0])

	def navigate(self, tab_id: str, raw_input: str | Destination) -> TabInfo | None:
		"""
		Point a tab at a new destination and record it in the history.

		Unknown ids and blank input are ignored and return None. Navigating a
		background tab leaves the active tab unchanged.
		"""
		tab = self._find(tab_id)
		if tab is None:
			self.logger.debug(f'🤷 navigate() ignored, no open tab with id {tab_id}')
			return None

		resolved = self._coerce_destination(raw_input)
		if resolved is None:
			return None

		display_name = display_name_for(resolved)
		self._replace_content(tab, resolved, display_name)
		self.history.record(resolved, display_name)

		self.logger.info(f'➡️ Navigated tab {tab.id[-4:]} to {_log_pretty_url(resolved.href, 40)}')
		return tab.info()

	def reload(self, tab_id: str) -> TabInfo | None:
		"""Rebuild a tab's content descriptor for its current destination, without a history entry"""
		tab = self._find(tab_id)
		if tab is None:
			return None

		self._replace_content(tab, tab.destination, tab.display_name)
		self.logger.debug(f'🔄 Reloaded tab {tab.id[-4:]} {_log_pretty_url(tab.destination.href)}')
		return tab.info()

	def select(self, tab_id: str) -> None:
		"""Make a tab the active one. Unknown ids are ignored."""
		tab = self._find(tab_id)
		if tab is None:
			self.logger.debug(f'🤷 select() ignored, no open tab with id {tab_id}')
			return
		self._activate(tab)

	# --- Read model ---

	@property
	def tabs(self) -> list[TabInfo]:
		return [tab.info() for tab in self._tabs]

	@property
	def active_id(self) -> str | None:
		return self._active_id

	@property
	def active_tab(self) -> TabInfo | None:
		tab = self._find(self._active_id) if self._active_id else None
		return tab.info() if tab else None

	@property
	def new_tab_destination(self) -> InternalDestination:
		return InternalDestination(page=InternalPage.NEW_TAB, scheme=self.profile.internal_scheme)

	def get_tab(self, tab_id: str) -> TabInfo | None:
		tab = self._find(tab_id)
		return tab.info() if tab else None

	def index_of(self, tab_id: str) -> int | None:
		for index, tab in enumerate(self._tabs):
			if tab.id == tab_id:
				return index
		return None

	def snapshot(self) -> TabStoreSnapshot:
		return TabStoreSnapshot(tabs=tuple(self.tabs), active_id=self._active_id)

	def __len__(self) -> int:
		return len(self._tabs)

	def __contains__(self, tab_id: object) -> bool:
		return isinstance(tab_id, str) and self._find(tab_id) is not None

	# --- Internals ---

	def _find(self, tab_id: str | None) -> Tab | None:
		return next((tab for tab in self._tabs if tab.id == tab_id), None)

	def _coerce_destination(self, destination: str | Destination | None) -> Destination | None:
		if isinstance(destination, str):
			return self.resolver.resolve(destination)
		return destination

	def _replace_content(self, tab: Tab, destination: Destination, display_name: str) -> None:
		# build first so a tab never points at a half-built descriptor, then drop the old handles
		new_content = self.builder.build(destination, self.profile.isolation_policy, title=display_name)
		old_content = tab.content
		tab.destination = destination
		tab.display_name = display_name
		tab.content = new_content
		self.builder.release(old_content)

	def _activate(self, tab: Tab) -> None:
		if tab.id == self._active_id and tab.state == TabState.ACTIVE:
			return

		previous = self._find(self._active_id) if self._active_id else None
		if previous is not None and previous is not tab:
			self._transition(previous, TabState.BACKGROUND)

		self._transition(tab, TabState.ACTIVE)
		self._active_id = tab.id

	def _transition(self, tab: Tab, new_state: TabState) -> None:
		if new_state not in TAB_TRANSITIONS[tab.state]:
			raise InvalidTabTransitionError(f'Tab {tab.id} cannot go from {tab.state.value} to {new_state.value}')
		tab.state = new_state
