"""Settings persistence: load/save hex settings as JSON (hex_settings.json in the working directory by default)."""

import os
import json
import logging
from typing import Optional
from hextiles.models import HexSettings

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "HEXTILES_SETTINGS"


def _settings_path() -> str:
    return os.environ.get(SETTINGS_ENV_VAR) or os.path.join(os.getcwd(), "hex_settings.json")


def load_hex_settings(path: Optional[str] = None) -> HexSettings:
    """Load hex settings, falling back to the defaults when the file doesn't exist."""
    path = path or _settings_path()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("No hex settings at %s, using defaults", path)
        return HexSettings()
    return HexSettings.from_dict(data)


def save_hex_settings(settings: HexSettings, path: Optional[str] = None) -> None:
    path = path or _settings_path()
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2)
