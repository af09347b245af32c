"""Dependency container: composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from search_templater.l2_use_cases.ports.navigator import Navigator
from search_templater.l2_use_cases.ports.notifier import Notifier
from search_templater.l3_interface_adapters.controllers.template_controller import TemplateController
from search_templater.l3_interface_adapters.gateways.browser_navigator import (
    BrowserNavigator,
    ConsoleNotifier,
    DryRunNavigator,
)
from search_templater.l3_interface_adapters.gateways.paths import SETTINGS_PATH
from search_templater.l3_interface_adapters.gateways.yaml_settings_store import YamlSettingsStore
from search_templater.l4_frameworks_and_drivers.infra_config import InfraConfig


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, infra: InfraConfig | None = None) -> None:
        self.infra = infra or InfraConfig()

        settings_path = Path(self.infra.settings_path).expanduser() if self.infra.settings_path else SETTINGS_PATH
        self.store = YamlSettingsStore(settings_path)
        self.navigator: Navigator = DryRunNavigator() if self.infra.navigation.dry_run else BrowserNavigator()
        self.notifier: Notifier = ConsoleNotifier()

        self.controller = TemplateController(
            store=self.store,
            navigator=self.navigator,
            notifier=self.notifier,
        )
