"""Use case: build a template's URL, enforce the hard limit, and open it."""

from __future__ import annotations

import logging

from search_templater.l1_entities.execution import BuiltUrl, ExecuteTemplateOverrides, ExecutionOutcome
from search_templater.l1_entities.template import TemplateSettings
from search_templater.l2_use_cases.ports.navigator import Navigator
from search_templater.l2_use_cases.ports.notifier import Notifier
from search_templater.l2_use_cases.utils.runtime_resolver import (
    resolve_query_template,
    resolve_runtime_options,
    resolve_template_url,
)
from search_templater.l2_use_cases.utils.url_builder import build_chatgpt_url

log = logging.getLogger('templater.execute')

URL_TOO_LONG_MESSAGE = (
    'The selected text is too long to fit into the URL. Shorten it or split it into several searches.'
)


def prepare_url(
    template: TemplateSettings,
    selection_text: str,
    overrides: ExecuteTemplateOverrides | None = None,
) -> BuiltUrl:
    """Resolve effective values and build the URL. Pure; raises UrlBuildError."""
    return build_chatgpt_url(
        resolve_template_url(overrides, template),
        resolve_query_template(overrides, template),
        selection_text,
        resolve_runtime_options(overrides, template),
    )


def exceeds_hard_limit(url: str, hard_limit: int) -> bool:
    return len(url) > hard_limit


class ExecuteTemplateUseCase:
    """Runs one template to a terminal outcome; never lets an exception escape."""

    def __init__(self, navigator: Navigator, notifier: Notifier) -> None:
        self._navigator = navigator
        self._notifier = notifier

    async def execute(
        self,
        template: TemplateSettings,
        selection_text: str,
        hard_limit: int,
        overrides: ExecuteTemplateOverrides | None = None,
    ) -> ExecutionOutcome:
        try:
            built = prepare_url(template, selection_text, overrides)
        except Exception as e:
            log.error('Failed to build URL for template %s: %s', template.id, e, exc_info=True)
            return ExecutionOutcome.REJECTED_UNEXPECTED

        if exceeds_hard_limit(built.url, hard_limit):
            log.info('URL for template %s is %d chars (limit %d); rejected', template.id, len(built.url), hard_limit)
            try:
                await self._notifier.alert(URL_TOO_LONG_MESSAGE)
            except Exception as e:
                log.warning('Alert could not be shown: %s', e)
            return ExecutionOutcome.REJECTED_TOO_LONG

        try:
            await self._navigator.navigate(built.url)
        except Exception as e:
            log.error('Navigation failed for template %s: %s', template.id, e, exc_info=True)
            return ExecutionOutcome.REJECTED_UNEXPECTED

        log.debug('Opened %s (%d chars)', built.url, len(built.url))
        return ExecutionOutcome.OPENED
