import os
import sys

# Get the absolute path to the project root
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from browser_shell.logging_config import setup_logging

setup_logging()
