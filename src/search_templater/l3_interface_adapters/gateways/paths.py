"""Shared path constants for configuration and persisted settings."""

from __future__ import annotations

from platformdirs import user_config_path, user_log_path

CONFIG_DIR = user_config_path('search-templater')
SETTINGS_PATH = CONFIG_DIR / 'settings.yaml'
LOG_DIR = user_log_path('search-templater')

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]
