"""Pure three-tier resolution of per-call values: override, then template, then default."""

from __future__ import annotations

from collections.abc import Callable

from search_templater.l1_entities.execution import (
    ExecuteTemplateOverrides,
    InlineTemplate,
    RuntimeOptions,
    RuntimeOverrides,
)
from search_templater.l1_entities.template import TemplateSettings
from search_templater.l1_entities.template_spec import CUSTOM_MODEL, INLINE_TEMPLATE_LABEL, is_model_option
from search_templater.l2_use_cases.utils.template_settings import (
    create_template_defaults,
    generate_template_id,
    resolve_model_id,
)


def _runtime(overrides: ExecuteTemplateOverrides | None) -> RuntimeOverrides:
    if overrides is None or overrides.runtime is None:
        return RuntimeOverrides()
    return overrides.runtime


def resolve_hints_search(overrides: ExecuteTemplateOverrides | None, template: TemplateSettings) -> bool:
    value = _runtime(overrides).hints_search
    return value if value is not None else template.hints_search


def resolve_temporary_chat(overrides: ExecuteTemplateOverrides | None, template: TemplateSettings) -> bool:
    value = _runtime(overrides).temporary_chat
    return value if value is not None else template.temporary_chat


def resolve_model(overrides: ExecuteTemplateOverrides | None, template: TemplateSettings) -> str | None:
    candidate = (_runtime(overrides).model or '').strip()
    return candidate or resolve_model_id(template)


def resolve_template_url(overrides: ExecuteTemplateOverrides | None, template: TemplateSettings) -> str:
    candidate = (overrides.template_url or '').strip() if overrides else ''
    return candidate or template.url


def resolve_query_template(overrides: ExecuteTemplateOverrides | None, template: TemplateSettings) -> str:
    candidate = (overrides.query_template or '') if overrides else ''
    return candidate or template.query_template


def resolve_runtime_options(overrides: ExecuteTemplateOverrides | None, template: TemplateSettings) -> RuntimeOptions:
    return RuntimeOptions(
        hints_search=resolve_hints_search(overrides, template),
        temporary_chat=resolve_temporary_chat(overrides, template),
        model=resolve_model(overrides, template),
    )


def _apply_inline_model(updates: dict, inline: InlineTemplate) -> None:
    model = (inline.model or '').strip()
    custom = (inline.custom_model or '').strip()
    if model and is_model_option(model):
        updates['model'] = model
        updates['custom_model'] = (custom or None) if model == CUSTOM_MODEL else None
    elif model:
        # Unknown ids are carried as a custom model; a given but blank customModel cancels the switch.
        candidate = model if inline.custom_model is None else custom
        if candidate:
            updates['model'] = CUSTOM_MODEL
            updates['custom_model'] = candidate
    elif custom:
        updates['model'] = CUSTOM_MODEL
        updates['custom_model'] = custom


def compose_execution_template(
    stored: TemplateSettings | None,
    inline: InlineTemplate | None,
    *,
    id_factory: Callable[[], str] = generate_template_id,
) -> TemplateSettings | None:
    """Merge an inline ad hoc bundle over a stored template (or fresh defaults).

    Returns None when there is neither a stored template nor an inline bundle.
    """
    if stored is None and inline is None:
        return None

    if stored is not None:
        base = stored
    else:
        base = create_template_defaults({'label': INLINE_TEMPLATE_LABEL}, id_factory=id_factory)
    updates: dict = {'enabled': True, 'is_default': False}

    if inline is not None:
        url = (inline.url or '').strip()
        if url:
            updates['url'] = url
        if inline.query_template:
            updates['query_template'] = inline.query_template
        if inline.hints_search is not None:
            updates['hints_search'] = inline.hints_search
        if inline.temporary_chat is not None:
            updates['temporary_chat'] = inline.temporary_chat
        _apply_inline_model(updates, inline)

    return base.model_copy(update=updates)
