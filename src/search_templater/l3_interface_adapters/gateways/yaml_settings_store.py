"""Gateway: YAML-file settings store implementing the SettingsStore port."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from search_templater.l1_entities.template import ExtensionSettings
from search_templater.l2_use_cases.utils.template_settings import normalize_settings

log = logging.getLogger('templater.store')

SettingsCallback = Callable[[ExtensionSettings], None]


class YamlSettingsStore:
    """Persists settings as camelCase YAML; every read is normalized."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._observers: list[SettingsCallback] = []
        self._last_mtime: float | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _read_raw(self) -> Any:
        if not self._path.exists():
            return None
        self._last_mtime = self._path.stat().st_mtime
        try:
            return yaml.safe_load(self._path.read_text(encoding='utf-8'))
        except yaml.YAMLError as e:
            log.warning('Settings file %s is not valid YAML, using defaults: %s', self._path, e)
            return None
        except UnicodeDecodeError as e:
            log.warning('Settings file %s is not UTF-8 text, using defaults: %s', self._path, e)
            return None

    async def load(self) -> ExtensionSettings:
        return normalize_settings(self._read_raw())

    async def save(self, settings: ExtensionSettings) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        text = yaml.safe_dump(settings.to_wire(), allow_unicode=True, sort_keys=False)
        self._path.write_text(text, encoding='utf-8')
        self._last_mtime = self._path.stat().st_mtime
        log.debug('Saved %d templates to %s', len(settings.templates), self._path)
        self._notify(normalize_settings(settings))

    def observe(self, callback: SettingsCallback) -> None:
        self._observers.append(callback)

    def poll(self) -> bool:
        """Notify observers if the file changed behind our back. Returns True when it did."""
        if not self._path.exists():
            return False
        mtime = self._path.stat().st_mtime
        if mtime == self._last_mtime:
            return False
        log.debug('Settings file %s changed externally', self._path)
        self._notify(normalize_settings(self._read_raw()))
        return True

    async def ensure_defaults(self) -> ExtensionSettings:
        if self._path.exists():
            return await self.load()
        settings = normalize_settings(None)
        try:
            await self.save(settings)
        except OSError as e:
            log.warning('Could not write default settings to %s: %s', self._path, e)
        return settings

    def _notify(self, settings: ExtensionSettings) -> None:
        for callback in self._observers:
            callback(settings)
