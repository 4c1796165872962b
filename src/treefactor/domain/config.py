from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences using JSON. The state file is
split into 'app_settings' (logging and output formatting) and 'render'
(how trees are drawn). Unknown keys are ignored and missing ones fall back
to defaults.
"""

import json
import logging
import os
from typing import Any, Dict

from treefactor.domain.constants import (
    APP_SETTINGS_KEYS,
    CONFIG_FILE_NAME,
    CURRENT_CONFIG_VERSION,
    DEFAULT_JSON_INDENT,
    RENDER_KEYS,
)
from treefactor.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE = os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default effective settings as a flat dictionary.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Diagnostics
        "log_level": "INFO",
        "log_to_file": False,

        # Serialization
        "json_indent": DEFAULT_JSON_INDENT,

        # Rendering
        "show_files": True,
        "show_directory_summary": False,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default structure of config.json.

    Returns:
        Dict[str, Any]: Versioned state with its settings sections.
    """
    defaults = get_default_config()
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_settings": {k: defaults[k] for k in APP_SETTINGS_KEYS},
        "render": {k: defaults[k] for k in RENDER_KEYS},
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Missing or corrupted files yield the defaults; every known section is
    merged over its defaults.

    Returns:
        Dict[str, Any]: The loaded state.
    """
    default_state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return default_state

    state = default_state
    for section, keys in (("app_settings", APP_SETTINGS_KEYS), ("render", RENDER_KEYS)):
        loaded = data.get(section)
        if isinstance(loaded, dict):
            state[section].update({k: v for k, v in loaded.items() if k in keys})

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """
    Retrieve the effective settings as a flat dictionary.
    """
    state = load_app_state()
    config = get_default_config()
    config.update(state["app_settings"])
    config.update(state["render"])
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Save flat settings back into their app-state sections.
    """
    state = load_app_state()
    for key, value in config.items():
        if key in APP_SETTINGS_KEYS:
            state["app_settings"][key] = value
        elif key in RENDER_KEYS:
            state["render"][key] = value
    save_app_state(state)
