"""Use case: read-normalize-write edits to the persisted settings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from search_templater.l1_entities.template import ExtensionSettings, TemplateSettings
from search_templater.l2_use_cases.ports.settings_store import SettingsStore
from search_templater.l2_use_cases.utils.template_settings import (
    create_template_defaults,
    default_settings,
    get_template_by_id,
    normalize_settings,
)

log = logging.getLogger('templater.settings')


class ManageSettingsUseCase:
    """Every edit reads a normalized copy, produces a new normalized copy, and writes it."""

    def __init__(self, store: SettingsStore) -> None:
        self._store = store

    async def load(self) -> ExtensionSettings:
        return await self._store.load()

    async def save(self, raw: Mapping[str, Any] | ExtensionSettings) -> ExtensionSettings:
        settings = normalize_settings(raw)
        await self._store.save(settings)
        return settings

    async def reset(self) -> ExtensionSettings:
        log.info('Resetting settings to built-in defaults')
        return await self.save(default_settings())

    async def add_template(self, overrides: Mapping[str, Any] | None = None) -> TemplateSettings:
        """Append a new template built from the blueprint. Returns it as stored."""
        current = await self.load()
        template = create_template_defaults(overrides)
        settings = await self.save(current.model_copy(update={'templates': [*current.templates, template]}))
        return settings.templates[-1]

    async def remove_template(self, template_id: str) -> ExtensionSettings | None:
        """Remove a template. Returns None when *template_id* is unknown.

        Removing the last template restores the built-in set.
        """
        current = await self.load()
        if get_template_by_id(current.templates, template_id) is None:
            return None
        remaining = [t for t in current.templates if t.id != template_id]
        return await self.save(current.model_copy(update={'templates': remaining}))

    async def set_default_template(self, template_id: str) -> ExtensionSettings | None:
        current = await self.load()
        if get_template_by_id(current.templates, template_id) is None:
            return None
        templates = [t.model_copy(update={'is_default': t.id == template_id}) for t in current.templates]
        return await self.save(current.model_copy(update={'templates': templates}))
