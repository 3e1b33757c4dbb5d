# tedit/utils/utils.py
"""
tedit.utils.utils.py
====================

Configuration helpers for the tedit editor.

- Embedded defaults: `DEFAULT_CONFIG` is a hardcoded configuration so the editor
  can ALWAYS start, even without any file on disk.
- User overrides: `~/.config/tedit/config.toml` is parsed with `toml` and
  recursively merged over the defaults. A missing or corrupt file is logged and
  ignored.
- Helper utilities: `deep_merge` for nested dictionaries.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("tedit")

CONFIG_DIR_NAME = "tedit"
CONFIG_FILE_NAME = "config.toml"

# Direct, hardcoded fallback configuration.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "show_status_bar": True,
    },
    "keybindings": {
        "save_file": "ctrl+s",
        "quit": ["ctrl+c", "ctrl+q"],
    },
    "logging": {
        "log_file": "editor.log",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        # stderr shares the terminal with curses; keep it quiet by default.
        "log_to_console": False,
        "separate_error_log": False,
    },
}


def get_user_config_path() -> Path:
    """Location of the user's config file (which may not exist)."""
    return Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(user_config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's TOML file over them.

    Args:
        user_config_path: Override for the user config location (tests).

    Returns:
        The merged configuration dictionary.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    path = user_config_path or get_user_config_path()
    if path.is_file():
        try:
            user_config = toml.load(path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {path}")
        except (OSError, toml.TomlDecodeError) as e:
            logger.error(f"Could not parse user config '{path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
