"""Port: opening a destination URL."""

from __future__ import annotations

from typing import Protocol


class Navigator(Protocol):
    """Opens a URL in a new top-level browsing context."""

    async def navigate(self, url: str) -> None:
        """Open *url*. Raises on transport failure."""
        ...
