"""
Settings Module

Provides persistent storage for analyzer configuration using JSON.
Settings are stored in config.json in the working directory.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "engine": "tesseract",
    "engine_options": {
        "languages": "kor+eng",
        "tessdata_dir": "resources/tessdata",
    },
    "template_dir": "assets/templates",
    "upscale_factor": 3.0,
    "level_min": 1,
    "level_max": 300,
    "debug_enabled": False,
    "layout": None,
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    defaults = copy.deepcopy(DEFAULT_SETTINGS)

    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return defaults

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return defaults

    if not isinstance(settings, dict):
        logger.warning(f"Settings file {path} is not a JSON object, using defaults")
        return defaults

    # Merge with defaults to handle missing keys
    result = defaults
    result.update(settings)
    logger.debug(f"Settings loaded: {result}")
    return result


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2, ensure_ascii=False)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
