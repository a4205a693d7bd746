"""Plugin settings read from <plugin_dir>/settings.yaml.

Missing file, unreadable YAML or values that fail validation all fall back to
PluginSettings() so a bad settings file never blocks enable().
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.yaml"


class WelcomeSettings(BaseModel):
    storage_key: str = Field(default="welcome.count", min_length=1)
    banner_width: int = Field(default=60, ge=1, le=200)


class LoggingSettings(BaseModel):
    """Root logger setup for a standalone plugin process."""

    file: str = "logs/plugin.log"
    level: str = "INFO"
    # None = console output only in the dev environment
    log_to_console: bool | None = None
    max_bytes: int = Field(default=5 * 1024 * 1024, ge=0)
    backup_count: int = Field(default=3, ge=0)


class PluginSettings(BaseModel):
    environment: str = "dev"
    welcome: WelcomeSettings = Field(default_factory=WelcomeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(plugin_dir: Path) -> PluginSettings:
    """Read and validate settings.yaml from plugin_dir. Never raises."""
    path = plugin_dir / SETTINGS_FILE
    if not path.exists():
        return PluginSettings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Unreadable %s, using defaults: %s", path, e)
        return PluginSettings()
    if data is None:
        return PluginSettings()
    if not isinstance(data, dict):
        logger.warning("%s must be a YAML object, using defaults", path)
        return PluginSettings()
    try:
        return PluginSettings.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid %s, using defaults: %s", path, e)
        return PluginSettings()
