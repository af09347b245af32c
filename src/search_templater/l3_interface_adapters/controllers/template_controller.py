"""TemplateController: holds the settings snapshot and routes menu, command and message requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from search_templater.l1_entities.execution import (
    BuiltUrl,
    ExecuteTemplateMessage,
    ExecuteTemplateOverrides,
    ExecuteTemplateResponse,
    ExecutionOutcome,
)
from search_templater.l1_entities.template import ExtensionSettings, TemplateSettings
from search_templater.l2_use_cases.execute_template_use_case import ExecuteTemplateUseCase, prepare_url
from search_templater.l2_use_cases.manage_settings_use_case import ManageSettingsUseCase
from search_templater.l2_use_cases.ports.navigator import Navigator
from search_templater.l2_use_cases.ports.notifier import Notifier
from search_templater.l2_use_cases.ports.settings_store import SettingsStore
from search_templater.l2_use_cases.utils.runtime_resolver import compose_execution_template
from search_templater.l2_use_cases.utils.template_settings import (
    collect_template_warnings,
    default_settings,
    find_default_template,
    get_template_by_id,
)
from search_templater.l3_interface_adapters.gateways.json_settings_codec import dump_settings_json, parse_settings_json

log = logging.getLogger('templater.controller')

MENU_PARENT_ID = 'search-templater:parent'
MENU_PROMPT_ID = 'search-templater:prompt'
MENU_EDIT_ID = 'search-templater:edit'
_TEMPLATE_MENU_PREFIX = 'search-templater:template:'

EMPTY_SELECTION_MESSAGE = 'Select some text first, then run the template.'
NO_DEFAULT_TEMPLATE_MESSAGE = 'No default template is configured. Pick one in the template settings.'


@dataclass(frozen=True)
class MenuEntry:
    id: str
    title: str
    parent_id: str | None = None


def template_menu_id(template_id: str) -> str:
    return f'{_TEMPLATE_MENU_PREFIX}{template_id}'


def parse_template_menu_id(menu_id: str) -> str | None:
    if not menu_id.startswith(_TEMPLATE_MENU_PREFIX):
        return None
    return menu_id.removeprefix(_TEMPLATE_MENU_PREFIX)


def build_menu_entries(settings: ExtensionSettings) -> list[MenuEntry]:
    """Parent entry, one entry per enabled template, then the prompt and edit entries."""
    entries = [MenuEntry(MENU_PARENT_ID, settings.parent_menu_title)]
    entries.extend(
        MenuEntry(template_menu_id(t.id), t.label, MENU_PARENT_ID) for t in settings.templates if t.enabled
    )
    entries.append(MenuEntry(MENU_PROMPT_ID, 'Enter a query and run…', MENU_PARENT_ID))
    entries.append(MenuEntry(MENU_EDIT_ID, 'Edit templates…', MENU_PARENT_ID))
    return entries


class TemplateController:
    """Bridges surfaces (menus, commands, RPC messages, CLI) to the use cases.

    The settings snapshot is replaced wholesale whenever the store reports a change;
    each execution works on the template copy it was handed.
    """

    def __init__(
        self,
        store: SettingsStore,
        navigator: Navigator,
        notifier: Notifier,
    ) -> None:
        self._notifier = notifier
        self._execute_uc = ExecuteTemplateUseCase(navigator, notifier)
        self._settings_uc = ManageSettingsUseCase(store)

        self.settings: ExtensionSettings = default_settings()
        self.menu_entries: list[MenuEntry] = build_menu_entries(self.settings)
        store.observe(self.on_settings_changed)
        self._store = store

    async def bootstrap(self) -> ExtensionSettings:
        self.on_settings_changed(await self._store.ensure_defaults())
        return self.settings

    def on_settings_changed(self, settings: ExtensionSettings) -> None:
        self.settings = settings.model_copy(deep=True)
        self.menu_entries = build_menu_entries(self.settings)
        log.debug('Settings snapshot updated: %d templates', len(self.settings.templates))

    def find_template(self, template_id: str) -> TemplateSettings | None:
        return get_template_by_id(self.settings.templates, template_id.strip())

    # --- execution ---

    async def _execute(
        self,
        template: TemplateSettings,
        text: str,
        overrides: ExecuteTemplateOverrides | None = None,
    ) -> ExecuteTemplateResponse:
        outcome = await self._execute_uc.execute(template, text, self.settings.hard_limit, overrides)
        return ExecuteTemplateResponse.from_outcome(outcome)

    async def run_template(
        self,
        template_id: str,
        text: str,
        overrides: ExecuteTemplateOverrides | None = None,
    ) -> ExecuteTemplateResponse | None:
        """Run a stored template on *text*. Returns None when there is no text to run."""
        template = self.find_template(template_id)
        if template is None:
            log.info('Template %s not found', template_id)
            return ExecuteTemplateResponse.from_outcome(ExecutionOutcome.REJECTED_NOT_FOUND)
        if not text:
            await self._notifier.alert(EMPTY_SELECTION_MESSAGE)
            return None
        return await self._execute(template, text, overrides)

    async def run_default(self, text: str) -> ExecuteTemplateResponse | None:
        """Run the default template. Returns None when nothing could be run."""
        template = find_default_template(self.settings)
        if template is None:
            await self._notifier.alert(NO_DEFAULT_TEMPLATE_MESSAGE)
            return None
        if not text:
            await self._notifier.alert(EMPTY_SELECTION_MESSAGE)
            return None
        return await self._execute(template, text)

    async def on_menu_click(self, menu_id: str, selection_text: str) -> ExecuteTemplateResponse | None:
        """Handle a template menu click; other menu ids are left to the surface."""
        template_id = parse_template_menu_id(menu_id)
        if template_id is None:
            return None
        # A menu built from an older snapshot may name a deleted template; that is not-found.
        return await self.run_template(template_id, selection_text)

    async def handle_message(self, message: ExecuteTemplateMessage) -> ExecuteTemplateResponse:
        """RPC entry point: stored template by id, inline bundle, or both."""
        try:
            template_id = message.template_id.strip()
            stored = self.find_template(template_id) if template_id else None
            template = compose_execution_template(stored, message.inline_template)
            if template is None:
                return ExecuteTemplateResponse.from_outcome(ExecutionOutcome.REJECTED_NOT_FOUND)
            return await self._execute(template, message.text, message.overrides)
        except Exception as e:
            log.error('execute-template message failed: %s', e, exc_info=True)
            return ExecuteTemplateResponse.from_outcome(ExecutionOutcome.REJECTED_UNEXPECTED)

    def preview(self, template_id: str, text: str) -> tuple[BuiltUrl, list[str]] | None:
        """Build the URL without navigating. Returns (built, warnings) or None if not found."""
        template = self.find_template(template_id)
        if template is None:
            return None
        return prepare_url(template, text), collect_template_warnings(template)

    # --- settings editing ---

    async def add_template(self, overrides: dict | None = None) -> TemplateSettings:
        return await self._settings_uc.add_template(overrides)

    async def remove_template(self, template_id: str) -> bool:
        return await self._settings_uc.remove_template(template_id) is not None

    async def set_default_template(self, template_id: str) -> bool:
        return await self._settings_uc.set_default_template(template_id) is not None

    async def reset(self) -> ExtensionSettings:
        return await self._settings_uc.reset()

    def export_json(self) -> str:
        return dump_settings_json(self.settings)

    async def import_json(self, text: str) -> ExtensionSettings:
        """Normalize and persist an exported file. Raises SettingsImportError on malformed input."""
        return await self._settings_uc.save(parse_settings_json(text))
