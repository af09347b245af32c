"""Port: user-facing alerts."""

from __future__ import annotations

from typing import Protocol


class Notifier(Protocol):
    async def alert(self, message: str) -> None:
        """Show *message* to the user."""
        ...
