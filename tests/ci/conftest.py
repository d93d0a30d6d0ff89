"""
Pytest configuration for browser-shell CI tests.

Points every config/download path at a temporary directory so tests never read
or write the user's real ~/.config/browsershell or ~/Downloads.
"""

import os
import tempfile

import pytest
from dotenv import load_dotenv

# Load environment variables before any imports
load_dotenv()

from browser_shell.isolation.views import NESTED_LAYER_POLICY
from browser_shell.profile import ShellProfile
from browser_shell.shell.service import ShellController
from browser_shell.tabs.service import TabStore


@pytest.fixture(autouse=True)
def setup_test_environment():
	"""
	Automatically set up test environment for all tests.
	"""

	# Create temporary directories for test config and downloads
	config_dir = tempfile.mkdtemp(prefix='browsershell_tests_')
	downloads_dir = tempfile.mkdtemp(prefix='browsershell_downloads_')

	original_env = {}
	test_env_vars = {
		'BROWSER_SHELL_CONFIG_DIR': config_dir,
		'XDG_DOWNLOAD_DIR': downloads_dir,
		'BROWSER_SHELL_CONFIG_PATH': None,
		'BROWSER_SHELL_ISOLATION_POLICY': None,
		'BROWSER_SHELL_SEARCH_TEMPLATE': None,
		'BROWSER_SHELL_DOWNLOADS_PATH': None,
	}

	for key, value in test_env_vars.items():
		original_env[key] = os.environ.get(key)
		if value is None:
			os.environ.pop(key, None)
		else:
			os.environ[key] = value

	yield

	# Restore original environment
	for key, value in original_env.items():
		if value is None:
			os.environ.pop(key, None)
		else:
			os.environ[key] = value


@pytest.fixture
def profile():
	return ShellProfile()


@pytest.fixture
def nested_profile():
	return ShellProfile(isolation_policy=NESTED_LAYER_POLICY)


@pytest.fixture
def store(profile):
	return TabStore(profile=profile).init()


@pytest.fixture
def nested_store(nested_profile):
	return TabStore(profile=nested_profile).init()


@pytest.fixture
def shell(profile):
	return ShellController(profile).start()
