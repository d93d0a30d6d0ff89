from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

INTERNAL_SCHEME = 'chrome'


class InternalPage(StrEnum):
	"""Natively rendered pages, addressed as chrome://<value>"""

	NEW_TAB = 'new-tab'
	SETTINGS = 'settings'
	EXTENSIONS = 'extensions'
	BOOKMARKS = 'bookmarks'
	HISTORY = 'history'


INTERNAL_PAGE_NAMES: dict[InternalPage, str] = {
	InternalPage.NEW_TAB: 'New Tab',
	InternalPage.SETTINGS: 'Settings',
	InternalPage.EXTENSIONS: 'Extensions',
	InternalPage.BOOKMARKS: 'Bookmarks',
	InternalPage.HISTORY: 'History',
}


class InternalDestination(BaseModel):
	"""Navigation target served by the InternalPageRouter"""

	model_config = ConfigDict(frozen=True)

	kind: Literal['internal'] = 'internal'
	page: InternalPage
	scheme: str = INTERNAL_SCHEME

	@property
	def href(self) -> str:
		return f'{self.scheme}://{self.page.value}'

	@property
	def is_internal(self) -> bool:
		return True


class UrlDestination(BaseModel):
	"""Navigation target rendered behind isolation layers"""

	model_config = ConfigDict(frozen=True)

	kind: Literal['url'] = 'url'
	url: str

	@property
	def href(self) -> str:
		return self.url

	@property
	def is_internal(self) -> bool:
		return False


Destination = Annotated[InternalDestination | UrlDestination, Field(discriminator='kind')]

NEW_TAB_DESTINATION = InternalDestination(page=InternalPage.NEW_TAB)
