"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from collections.abc import Callable
from itertools import count

import pytest

from search_templater.l1_entities.template import ExtensionSettings
from search_templater.l2_use_cases.utils.template_settings import default_settings, normalize_settings

# --- Protocol-conforming Fakes ---


class FakeNavigator:
    """Fake navigator: records URLs instead of opening tabs."""

    def __init__(self, error: Exception | None = None) -> None:
        self.navigate_calls: list[str] = []
        self._error = error

    async def navigate(self, url: str) -> None:
        if self._error is not None:
            raise self._error
        self.navigate_calls.append(url)


class FakeNotifier:
    def __init__(self) -> None:
        self.alerts: list[str] = []

    async def alert(self, message: str) -> None:
        self.alerts.append(message)


class FakeSettingsStore:
    """In-memory settings store with observer notification."""

    def __init__(self, settings: ExtensionSettings | None = None) -> None:
        self._settings = settings
        self._observers: list[Callable[[ExtensionSettings], None]] = []
        self.save_calls: list[ExtensionSettings] = []

    async def load(self) -> ExtensionSettings:
        return normalize_settings(self._settings)

    async def save(self, settings: ExtensionSettings) -> None:
        self.save_calls.append(settings)
        self._settings = settings
        for callback in self._observers:
            callback(normalize_settings(settings))

    def observe(self, callback: Callable[[ExtensionSettings], None]) -> None:
        self._observers.append(callback)

    async def ensure_defaults(self) -> ExtensionSettings:
        if self._settings is None:
            await self.save(default_settings())
        return await self.load()

    def push_external_change(self, raw: dict) -> None:
        """Simulate another process writing storage."""
        self._settings = normalize_settings(raw)
        for callback in self._observers:
            callback(normalize_settings(raw))


def sequential_ids(prefix: str = 'template-gen-') -> Callable[[], str]:
    counter = count(1)
    return lambda: f'{prefix}{next(counter)}'


# --- Standard Fixtures ---


@pytest.fixture
def fake_navigator() -> FakeNavigator:
    return FakeNavigator()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def fake_store() -> FakeSettingsStore:
    return FakeSettingsStore()


@pytest.fixture
def default_config() -> ExtensionSettings:
    return default_settings()


@pytest.fixture
def sample_settings_raw() -> dict:
    return {
        'hardLimit': 500,
        'parentMenuTitle': 'Ask ChatGPT',
        'templates': [
            {
                'id': 'plain',
                'label': 'Plain',
                'url': 'https://chatgpt.com/?prompt={TEXT}',
                'queryTemplate': '{TEXT}',
                'enabled': True,
                'hintsSearch': False,
                'temporaryChat': False,
                'model': 'gpt-5',
                'isDefault': True,
            },
            {
                'id': 'explain',
                'label': 'Explain',
                'url': 'https://chatgpt.com/?q={TEXT}',
                'queryTemplate': 'Explain this: {TEXT}',
                'enabled': True,
                'hintsSearch': True,
                'temporaryChat': True,
                'model': 'custom',
                'customModel': '  my-model  ',
            },
            {
                'id': 'hidden',
                'label': 'Hidden',
                'url': 'https://chatgpt.com/?q={TEXT}',
                'queryTemplate': '{TEXT}',
                'enabled': False,
                'model': 'gpt-5.1',
            },
        ],
    }
