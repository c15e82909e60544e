"""
Config Module
File-based settings: config/settings.json (or $TASKGRAPH_SETTINGS).
The "layout" section holds LayoutSettings; missing or broken files fall back to defaults.
Uses orjson for faster JSON parsing.
"""

import os
from pathlib import Path

import aiofiles
import orjson
from loguru import logger
from pydantic import ValidationError

from layout.constants import LayoutSettings

CONFIG_DIR = Path(__file__).parent
SETTINGS_FILE = "settings.json"
SETTINGS_ENV = "TASKGRAPH_SETTINGS"


def get_settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV)
    return Path(override) if override else CONFIG_DIR / SETTINGS_FILE


async def get_settings() -> dict:
    """Get full settings from settings.json."""
    file_path = get_settings_path()
    try:
        async with aiofiles.open(file_path, "rb") as f:
            data = await f.read()
            settings = orjson.loads(data)
    except FileNotFoundError:
        return {}
    except orjson.JSONDecodeError as e:
        logger.warning("Invalid JSON in {}: {}", file_path, e)
        return {}
    if not isinstance(settings, dict):
        logger.warning("Ignoring non-object settings in {}", file_path)
        return {}
    return settings


async def get_layout_settings() -> LayoutSettings:
    raw = await get_settings()
    try:
        return LayoutSettings.model_validate(raw.get("layout") or {})
    except ValidationError as e:
        logger.warning("Invalid layout settings, using defaults: {}", e)
        return LayoutSettings()


async def save_settings(settings: dict) -> dict:
    """Overwrite settings.json. Atomic write."""
    file_path = get_settings_path()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    content = orjson.dumps(settings, option=orjson.OPT_INDENT_2).decode("utf-8")
    async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
        await f.write(content)
    tmp_path.replace(file_path)
    return {"success": True}
