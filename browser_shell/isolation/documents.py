import logging

from pydantic import BaseModel, ConfigDict, Field
from uuid_extensions import uuid7str

from browser_shell.exceptions import DocumentRevokedError

logger = logging.getLogger(__name__)

HANDLE_PREFIX = 'blob:browser-shell/'


class DocumentHandle(BaseModel):
	"""Addressable reference to a document held in a DocumentStore"""

	model_config = ConfigDict(frozen=True)

	url: str = Field(default_factory=lambda: f'{HANDLE_PREFIX}{uuid7str()}')
	mime_type: str = 'text/html'
	size: int = 0


class DocumentStore:
	"""
	In-memory table of synthesized documents addressed by disposable handles.

	Every handle handed out by create() stays live until revoke() is called on it.
	Owners are expected to revoke what they create; len() is the number of live
	documents, so a store that drops back to zero has nothing leaked.
	"""

	def __init__(self):
		self._documents: dict[str, str] = {}
		self._handles: dict[str, DocumentHandle] = {}

	def create(self, content: str, mime_type: str = 'text/html') -> DocumentHandle:
		handle = DocumentHandle(mime_type=mime_type, size=len(content.encode()))
		self._documents[handle.url] = content
		self._handles[handle.url] = handle
		return handle

	def read(self, handle: str | DocumentHandle) -> str:
		url = handle.url if isinstance(handle, DocumentHandle) else handle
		try:
			return self._documents[url]
		except KeyError:
			raise DocumentRevokedError(f'Document handle {url} is not live') from None

	def revoke(self, handle: str | DocumentHandle) -> bool:
		url = handle.url if isinstance(handle, DocumentHandle) else handle
		if url not in self._documents:
			logger.debug(f'🗑️ Document handle {url} was already revoked')
			return False
		del self._documents[url]
		del self._handles[url]
		return True

	def revoke_all(self, handles) -> int:
		return sum(1 for handle in handles if self.revoke(handle))

	def is_live(self, handle: str | DocumentHandle) -> bool:
		url = handle.url if isinstance(handle, DocumentHandle) else handle
		return url in self._documents

	@property
	def live_handles(self) -> list[DocumentHandle]:
		return list(self._handles.values())

	def __len__(self) -> int:
		return len(self._documents)

	def __contains__(self, handle: object) -> bool:
		return isinstance(handle, (str, DocumentHandle)) and self.is_live(handle)
