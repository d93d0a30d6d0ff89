"""Configuration system for browser-shell with automatic migration support."""

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_TEMPLATE = 'https://www.google.com/search?q={query}&igu=1'
DEFAULT_ISOLATION_POLICY = 'single'


class OldConfig:
	"""Original lazy-loading configuration class for environment variables."""

	# Cache for directory creation tracking
	_dirs_created = False

	@property
	def BROWSER_SHELL_LOGGING_LEVEL(self) -> str:
		return os.getenv('BROWSER_SHELL_LOGGING_LEVEL', 'info').lower()

	# Path configuration
	@property
	def XDG_CONFIG_HOME(self) -> Path:
		return Path(os.getenv('XDG_CONFIG_HOME', '~/.config')).expanduser().resolve()

	@property
	def XDG_DOWNLOAD_DIR(self) -> Path:
		return Path(os.getenv('XDG_DOWNLOAD_DIR', '~/Downloads')).expanduser().resolve()

	@property
	def BROWSER_SHELL_CONFIG_DIR(self) -> Path:
		path = Path(os.getenv('BROWSER_SHELL_CONFIG_DIR', str(self.XDG_CONFIG_HOME / 'browsershell'))).expanduser().resolve()
		self._ensure_dirs()
		return path

	@property
	def BROWSER_SHELL_CONFIG_FILE(self) -> Path:
		return self.BROWSER_SHELL_CONFIG_DIR / 'config.json'

	def _ensure_dirs(self) -> None:
		"""Create directories if they don't exist (only once)"""
		if not self._dirs_created:
			config_dir = (
				Path(os.getenv('BROWSER_SHELL_CONFIG_DIR', str(self.XDG_CONFIG_HOME / 'browsershell'))).expanduser().resolve()
			)
			config_dir.mkdir(parents=True, exist_ok=True)
			self._dirs_created = True


class FlatEnvConfig(BaseSettings):
	"""All environment variables in a flat namespace."""

	model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', case_sensitive=True, extra='allow')

	# Logging
	BROWSER_SHELL_LOGGING_LEVEL: str = Field(default='info')

	# Path configuration
	XDG_CONFIG_HOME: str = Field(default='~/.config')
	BROWSER_SHELL_CONFIG_DIR: str | None = Field(default=None)
	BROWSER_SHELL_CONFIG_PATH: str | None = Field(default=None)

	# Shell profile overrides
	BROWSER_SHELL_ISOLATION_POLICY: str | None = Field(default=None)
	BROWSER_SHELL_SEARCH_TEMPLATE: str | None = Field(default=None)
	BROWSER_SHELL_DOWNLOADS_PATH: str | None = Field(default=None)


class DBStyleEntry(BaseModel):
	"""Database-style entry with UUID and metadata."""

	id: str = Field(default_factory=lambda: str(uuid4()))
	default: bool = Field(default=False)
	created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())


class ShellProfileEntry(DBStyleEntry):
	"""Shell profile configuration entry - accepts any ShellProfile fields."""

	model_config = ConfigDict(extra='allow')

	# Common shell profile fields for reference
	isolation_policy: str | dict[str, Any] | None = None
	search_template: str | None = None
	enabled_pages: list[str] | None = None
	downloads_path: str | None = None


class DBStyleConfigJSON(BaseModel):
	"""Database-style configuration format."""

	shell_profile: dict[str, ShellProfileEntry] = Field(default_factory=dict)


def create_default_config() -> DBStyleConfigJSON:
	"""Create a fresh default configuration."""
	logger.info('Creating fresh default config.json')

	new_config = DBStyleConfigJSON()

	profile_id = str(uuid4())
	new_config.shell_profile[profile_id] = ShellProfileEntry(
		id=profile_id,
		default=True,
		isolation_policy=DEFAULT_ISOLATION_POLICY,
		search_template=DEFAULT_SEARCH_TEMPLATE,
	)

	return new_config


def _write_config(config_path: Path, config: DBStyleConfigJSON) -> None:
	config_path.parent.mkdir(parents=True, exist_ok=True)
	with open(config_path, 'w') as f:
		json.dump(config.model_dump(), f, indent=2)


def load_and_migrate_config(config_path: Path) -> DBStyleConfigJSON:
	"""Load config.json or create fresh one if old format detected."""
	if not config_path.exists():
		new_config = create_default_config()
		_write_config(config_path, new_config)
		return new_config

	try:
		with open(config_path) as f:
			data = json.load(f)

		# Already in DB-style format when every profile is keyed by its id
		profiles = data.get('shell_profile') if isinstance(data, dict) else None
		if isinstance(profiles, dict) and profiles and all(isinstance(v, dict) and 'id' in v for v in profiles.values()):
			return DBStyleConfigJSON(**data)

		logger.info(f'Old config format detected at {config_path}, creating fresh config')
		new_config = create_default_config()
		_write_config(config_path, new_config)
		logger.info(f'Created fresh config.json at {config_path}')
		return new_config

	except Exception as e:
		logger.error(f'Failed to load config from {config_path}: {e}, creating fresh config')
		new_config = create_default_config()
		try:
			_write_config(config_path, new_config)
		except OSError as write_error:
			logger.error(f'Failed to write fresh config: {write_error}')
		return new_config


class Config:
	"""Configuration class that merges all config sources.

	Re-reads environment variables on every access.
	"""

	def __init__(self):
		# Cache for directory creation tracking only
		self._dirs_created = False

	def __getattr__(self, name: str) -> Any:
		"""Dynamically proxy all attributes to fresh instances.

		This ensures env vars are re-read on every access.
		"""
		if name.startswith('_'):
			raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

		old_config = OldConfig()
		if hasattr(old_config, name):
			return getattr(old_config, name)

		env_config = FlatEnvConfig()
		if hasattr(env_config, name):
			return getattr(env_config, name)

		if name == 'load_config':
			return lambda: self._load_config()

		raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

	def _get_config_path(self) -> Path:
		"""Get config path from fresh env config."""
		env_config = FlatEnvConfig()
		if env_config.BROWSER_SHELL_CONFIG_PATH:
			return Path(env_config.BROWSER_SHELL_CONFIG_PATH).expanduser()
		elif env_config.BROWSER_SHELL_CONFIG_DIR:
			return Path(env_config.BROWSER_SHELL_CONFIG_DIR).expanduser() / 'config.json'
		else:
			xdg_config = Path(env_config.XDG_CONFIG_HOME).expanduser()
			return xdg_config / 'browsershell' / 'config.json'

	def _get_db_config(self) -> DBStyleConfigJSON:
		return load_and_migrate_config(self._get_config_path())

	def _get_default_profile(self) -> dict[str, Any]:
		"""Get the default shell profile configuration."""
		db_config = self._get_db_config()
		for profile in db_config.shell_profile.values():
			if profile.default:
				return profile.model_dump(exclude_none=True)

		# Return first profile if no default
		if db_config.shell_profile:
			return next(iter(db_config.shell_profile.values())).model_dump(exclude_none=True)

		return {}

	def _load_config(self) -> dict[str, Any]:
		"""Load configuration with env var overrides."""
		config = {'shell_profile': self._get_default_profile()}

		env_config = FlatEnvConfig()

		if env_config.BROWSER_SHELL_ISOLATION_POLICY:
			config['shell_profile']['isolation_policy'] = env_config.BROWSER_SHELL_ISOLATION_POLICY

		if env_config.BROWSER_SHELL_SEARCH_TEMPLATE:
			config['shell_profile']['search_template'] = env_config.BROWSER_SHELL_SEARCH_TEMPLATE

		if env_config.BROWSER_SHELL_DOWNLOADS_PATH:
			config['shell_profile']['downloads_path'] = env_config.BROWSER_SHELL_DOWNLOADS_PATH

		return config


# Create singleton instance
CONFIG = Config()


def load_browser_shell_config() -> dict[str, Any]:
	"""Load browser-shell configuration."""
	return CONFIG.load_config()
