from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from browser_shell.navigation.views import Destination


class HistoryEntry(BaseModel):
	"""One navigation event, never modified after it is recorded"""

	model_config = ConfigDict(frozen=True)

	destination: Destination
	display_name: str
	timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

	@property
	def href(self) -> str:
		return self.destination.href
