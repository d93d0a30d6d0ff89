from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from browser_shell.isolation.views import ContentDescriptor
from browser_shell.navigation.views import Destination


class TabState(StrEnum):
	CREATED = 'created'
	ACTIVE = 'active'
	BACKGROUND = 'background'
	CLOSED = 'closed'


# Created → Active ⇄ Background → Closed
TAB_TRANSITIONS: dict[TabState, frozenset[TabState]] = {
	TabState.CREATED: frozenset({TabState.ACTIVE}),
	TabState.ACTIVE: frozenset({TabState.BACKGROUND, TabState.CLOSED}),
	TabState.BACKGROUND: frozenset({TabState.ACTIVE, TabState.CLOSED}),
	TabState.CLOSED: frozenset(),
}


class Tab(BaseModel):
	"""Mutable tab record owned by a TabStore, the outside world only ever sees TabInfo copies"""

	model_config = ConfigDict(validate_assignment=True)

	id: str
	destination: Destination
	display_name: str
	content: ContentDescriptor
	state: TabState = TabState.CREATED
	created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

	@property
	def handles(self) -> tuple[str, ...]:
		"""Document handles this tab owns through its current content descriptor"""
		return self.content.handles

	def info(self) -> 'TabInfo':
		return TabInfo(
			id=self.id,
			destination=self.destination,
			display_name=self.display_name,
			content=self.content,
			state=self.state,
			created_at=self.created_at,
		)


class TabInfo(BaseModel):
	"""Read-only view of a tab at one point in time"""

	model_config = ConfigDict(frozen=True)

	id: str
	destination: Destination
	display_name: str
	content: ContentDescriptor
	state: TabState
	created_at: datetime

	@property
	def href(self) -> str:
		return self.destination.href

	@property
	def is_active(self) -> bool:
		return self.state == TabState.ACTIVE

	@property
	def handles(self) -> tuple[str, ...]:
		return self.content.handles


class TabStoreSnapshot(BaseModel):
	model_config = ConfigDict(frozen=True)

	tabs: tuple[TabInfo, ...] = ()
	active_id: str | None = None

	@property
	def active_tab(self) -> TabInfo | None:
		return next((tab for tab in self.tabs if tab.id == self.active_id), None)
