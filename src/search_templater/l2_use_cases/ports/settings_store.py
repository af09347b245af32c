"""Port: persistent settings storage with change notification."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from search_templater.l1_entities.template import ExtensionSettings


class SettingsStore(Protocol):  # pragma: no cover -- abstract Protocol; never instantiated directly
    """Abstract key-value settings storage. Reads always come back normalized."""

    async def load(self) -> ExtensionSettings:
        """Read persisted settings, normalized."""
        ...

    async def save(self, settings: ExtensionSettings) -> None:
        """Persist already-normalized settings verbatim."""
        ...

    def observe(self, callback: Callable[[ExtensionSettings], None]) -> None:
        """Register a callback invoked with freshly normalized settings on every change."""
        ...

    async def ensure_defaults(self) -> ExtensionSettings:
        """Load settings, writing the built-in defaults first when nothing is persisted."""
        ...
