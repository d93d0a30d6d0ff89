from pydantic import BaseModel, ConfigDict

from browser_shell.isolation.views import IsolatedContent
from browser_shell.pages.views import InternalPageView


class RenderedStage(BaseModel):
	"""What the shell puts in the content area for the active tab: exactly one of page or isolated is set"""

	model_config = ConfigDict(frozen=True)

	tab_id: str
	title: str
	href: str
	page: InternalPageView | None = None
	isolated: IsolatedContent | None = None
	document: str = ''  # html of the internal page, or of the outermost isolation layer

	@property
	def is_internal(self) -> bool:
		return self.page is not None
