from pathlib import Path
from typing import Annotated, Any, Self

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from browser_shell.bookmarks.views import BookmarkEntry
from browser_shell.config import CONFIG, DEFAULT_SEARCH_TEMPLATE, load_browser_shell_config
from browser_shell.isolation.views import SINGLE_LAYER_POLICY, IsolationPolicy
from browser_shell.navigation.views import INTERNAL_SCHEME, InternalPage, UrlDestination

PRODUCT_NAME = 'Google Chrome'
PRODUCT_VERSION = '65.0.3325.146 (Official Build) (64-bit)'


def validate_search_template(template: str) -> str:
	assert '{query}' in template, f'search_template must contain a {{query}} placeholder: {template!r}'
	assert '://' in template, f'search_template must be an absolute URL: {template!r}'
	return template


def validate_scheme(scheme: str) -> str:
	scheme = scheme.strip().lower().removesuffix('://')
	assert scheme.isascii() and scheme.replace('-', '').replace('+', '').isalnum(), f'Invalid URL scheme: {scheme!r}'
	return scheme


def default_bookmarks() -> list[BookmarkEntry]:
	return [BookmarkEntry(name='Google', destination=UrlDestination(url='https://google.com?igu=1'))]


class ShellProfile(BaseModel):
	"""
	Configuration knobs for one browser shell: which isolation policy remote pages
	get, how address-bar text is resolved, and which internal pages exist.
	"""

	model_config = ConfigDict(
		extra='ignore',
		validate_assignment=True,
		revalidate_instances='always',
		frozen=False,
	)

	isolation_policy: IsolationPolicy = Field(
		default=SINGLE_LAYER_POLICY,
		description='Preset name (single, nested, restricted) or an explicit IsolationPolicy',
	)
	search_template: Annotated[str, AfterValidator(validate_search_template)] = Field(
		default=DEFAULT_SEARCH_TEMPLATE,
		description='Search engine URL, {query} is replaced by the percent-encoded query',
	)
	default_scheme: Annotated[str, AfterValidator(validate_scheme)] = Field(
		default='https',
		description='Scheme prepended to bare hosts typed without one',
	)
	internal_scheme: Annotated[str, AfterValidator(validate_scheme)] = Field(
		default=INTERNAL_SCHEME,
		description='Scheme internal pages are addressed with, e.g. chrome://settings',
	)
	enabled_pages: frozenset[InternalPage] = Field(
		default=frozenset(InternalPage),
		description='Internal pages reachable from the address bar, new-tab is always enabled',
	)
	default_bookmarks: list[BookmarkEntry] = Field(default_factory=default_bookmarks)
	downloads_path: Path = Field(
		default_factory=lambda: CONFIG.XDG_DOWNLOAD_DIR,
		description='Directory offline snapshots are saved to',
	)
	product_name: str = PRODUCT_NAME
	product_version: str = PRODUCT_VERSION

	@field_validator('isolation_policy', mode='before')
	@classmethod
	def parse_isolation_policy(cls, value: Any) -> Any:
		if isinstance(value, str):
			return IsolationPolicy.preset(value)
		return value

	@field_validator('enabled_pages', mode='after')
	@classmethod
	def always_enable_new_tab(cls, value: frozenset[InternalPage]) -> frozenset[InternalPage]:
		# the implicit open() after the last tab closes must always have somewhere to go
		return value | {InternalPage.NEW_TAB}

	@field_validator('downloads_path', mode='after')
	@classmethod
	def expand_downloads_path(cls, value: Path) -> Path:
		return value.expanduser()

	@classmethod
	def from_config(cls, **overrides: Any) -> Self:
		"""Build a profile from config.json + BROWSER_SHELL_* env vars, kwargs win"""
		config = load_browser_shell_config()
		profile_fields = {k: v for k, v in config.get('shell_profile', {}).items() if k in cls.model_fields}
		return cls(**{**profile_fields, **overrides})

	def __str__(self) -> str:
		return f'ShellProfile(policy={self.isolation_policy.name}, pages={len(self.enabled_pages)})'
