"""Gateway: JSON import/export file format for settings."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from search_templater.l1_entities.errors import SettingsImportError
from search_templater.l1_entities.template import ExtensionSettings
from search_templater.l2_use_cases.utils.template_settings import normalize_settings

EXPORT_DEFAULT_KEY = 'default'


def dump_settings_json(settings: ExtensionSettings) -> str:
    """Serialize settings to the export format (templates use the ``default`` spelling)."""
    return json.dumps(settings.to_wire(default_key=EXPORT_DEFAULT_KEY), indent=2, ensure_ascii=False) + '\n'


def parse_settings_json(text: str) -> ExtensionSettings:
    """Parse an exported file. Either ``isDefault`` or ``default`` is accepted per template."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SettingsImportError(f'Settings file is not valid JSON: {e}') from e
    if not isinstance(data, dict):
        raise SettingsImportError('Settings file must contain a JSON object')
    return normalize_settings(data)


def export_filename(now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime('%Y-%m-%dT%H-%M-%S')
    return f'search-templater-settings-{stamp}.json'


def read_settings_file(path: Path) -> str:
    """Read an exported file as text. Raises SettingsImportError when it is not UTF-8."""
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise SettingsImportError(f'Settings file is not UTF-8 text: {e}') from e
