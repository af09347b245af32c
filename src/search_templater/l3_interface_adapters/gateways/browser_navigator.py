"""Gateways: opening URLs and showing alerts from the command line."""

from __future__ import annotations

import asyncio
import logging

import click

log = logging.getLogger('templater.navigate')


class BrowserNavigator:
    """Opens URLs with the platform's default browser via ``click.launch``."""

    async def navigate(self, url: str) -> None:
        code = await asyncio.to_thread(click.launch, url)
        if code != 0:
            raise OSError(f'Browser launcher exited with status {code}')
        log.debug('Launched browser for %d-char URL', len(url))


class DryRunNavigator:
    """Prints the URL instead of opening it."""

    def __init__(self) -> None:
        self.opened: list[str] = []

    async def navigate(self, url: str) -> None:
        self.opened.append(url)
        click.echo(url)


class ConsoleNotifier:
    async def alert(self, message: str) -> None:
        click.echo(f'Warning: {message}', err=True)
