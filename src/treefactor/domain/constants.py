from __future__ import annotations

"""
Domain Constants.

Application-wide identifiers and limits shared by the configuration, session
and interface layers.
"""

from typing import List

APP_NAME = "Treefactor"
CURRENT_CONFIG_VERSION = "1.0.0"

CONFIG_FILE_NAME = "config.json"
SESSION_FILE_NAME = "session.json"

DEFAULT_JSON_INDENT = 2
MAX_JSON_INDENT = 8

LOG_LEVELS: List[str] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Keys of each app-state section; anything else found on disk is ignored
APP_SETTINGS_KEYS: List[str] = ["log_level", "log_to_file", "json_indent"]
RENDER_KEYS: List[str] = ["show_files", "show_directory_summary"]
