from pydantic import BaseModel, ConfigDict

from browser_shell.navigation.views import Destination


class BookmarkEntry(BaseModel):
	"""A saved destination, unique by destination.href within a BookmarkStore"""

	model_config = ConfigDict(frozen=True)

	name: str
	destination: Destination

	@property
	def href(self) -> str:
		return self.destination.href
