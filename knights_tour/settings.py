"""
Settings Module for Knight's Tour Solver

Provides persistent storage for run preferences using JSON.
Settings are stored in config.json in the working directory unless
another path is given.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "board_size": 5,
    "strategies": None,  # None = every registered strategy
    "timeout_sec": None,
    "parallel": False,
    "seed": None,
    "annealing": {
        "initial_temperature": 10.0,
        "cooling_rate": 0.99,
        "min_temperature": 0.001,
        "iterations_per_temperature": 100,
    },
    "frontier_max_expansions": 50000,
    "debug_enabled": False,
}


def _defaults() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (default: config.json)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return _defaults()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("top-level value must be an object")

        # Merge with defaults to handle missing keys
        result = _defaults()
        annealing = settings.pop("annealing", None)
        result.update(settings)
        if isinstance(annealing, dict):
            result["annealing"].update(annealing)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return _defaults()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (default: config.json)
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
