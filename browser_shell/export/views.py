import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pydantic import BaseModel


class OfflineSnapshot(BaseModel):
	"""Self-contained HTML document produced by "Save page offline" """

	name: str
	content: str = ''
	source_href: str = ''

	@property
	def extension(self) -> str:
		return 'html'

	@property
	def full_name(self) -> str:
		return f'{self.name}.{self.extension}'

	@property
	def get_size(self) -> int:
		return len(self.content)

	def sync_to_disk_sync(self, path: Path) -> Path:
		path.mkdir(parents=True, exist_ok=True)
		file_path = path / self.full_name
		file_path.write_text(self.content, encoding='utf-8')
		return file_path

	async def sync_to_disk(self, path: Path) -> Path:
		with ThreadPoolExecutor() as executor:
			return await asyncio.get_event_loop().run_in_executor(executor, lambda: self.sync_to_disk_sync(path))
