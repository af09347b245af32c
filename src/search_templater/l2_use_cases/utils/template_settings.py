"""Schema-driven sanitizer for untrusted persisted or imported settings.

Every field has its own fallback rule. Anything malformed is repaired from the
paired default instead of raising; the only hard failure is running out of
attempts while generating a unique template id.
"""

from __future__ import annotations

import logging
import math
import random
import time
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from search_templater.l1_entities.errors import TemplateIdExhaustedError
from search_templater.l1_entities.template import ExtensionSettings, TemplateSettings
from search_templater.l1_entities.template_spec import (
    CUSTOM_MODEL,
    DEFAULT_HARD_LIMIT,
    DEFAULT_PARENT_MENU_TITLE,
    DEFAULT_TEMPLATES,
    MAX_ID_ATTEMPTS,
    MIN_HARD_LIMIT,
    TEMPLATE_ID_PREFIX,
    is_model_option,
)
from search_templater.l2_use_cases.utils.placeholders import has_placeholder

log = logging.getLogger('templater.settings')

IdFactory = Callable[[], str]

MISSING_PLACEHOLDER_WARNING = (
    'The template contains no placeholder ({TEXT} or {選択した文字列}); the selected text will never be inserted.'
)


def _base36(number: int) -> str:
    digits = '0123456789abcdefghijklmnopqrstuvwxyz'
    out = ''
    while number:
        number, rem = divmod(number, 36)
        out = digits[rem] + out
    return out or '0'


def generate_template_id() -> str:
    """Return a fresh ``template-`` id, preferring the OS randomness source."""
    try:
        return f'{TEMPLATE_ID_PREFIX}{uuid.uuid4()}'
    except NotImplementedError:  # os.urandom unavailable
        stamp = _base36(int(time.time() * 1000))
        return f'{TEMPLATE_ID_PREFIX}{stamp}-{_base36(random.getrandbits(48))}'


# --- per-field fallback rules ---


def _pick_trimmed(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback


def _pick_str(value: Any, fallback: str) -> str:
    return value if isinstance(value, str) else fallback


def _pick_bool(value: Any, fallback: bool) -> bool:
    return value if isinstance(value, bool) else fallback


def _pick_model(value: Any, fallback: str) -> str:
    return value if is_model_option(value) else fallback


def _pick_custom_model(model: str, value: Any, fallback: str | None) -> str | None:
    if model != CUSTOM_MODEL:
        return None
    candidate = value if isinstance(value, str) else (fallback or '')
    return candidate.strip() or None


def _pick_is_default(source: Mapping[str, Any], fallback: bool) -> bool:
    # ``isDefault`` is the canonical spelling; ``default`` is the export spelling.
    for key in ('isDefault', 'is_default', 'default'):
        if isinstance(source.get(key), bool):
            return source[key]
    return fallback


def _get(source: Mapping[str, Any], wire_key: str, attr: str) -> Any:
    return source[wire_key] if wire_key in source else source.get(attr)


def sanitize_template(source: Any, fallback: TemplateSettings) -> TemplateSettings:
    """Sanitize one raw template entry field by field against *fallback*."""
    src: Mapping[str, Any] = source if isinstance(source, Mapping) else {}
    model = _pick_model(src.get('model'), fallback.model)
    return TemplateSettings(
        id=_pick_trimmed(src.get('id'), fallback.id),
        label=_pick_trimmed(src.get('label'), fallback.label),
        url=_pick_trimmed(src.get('url'), fallback.url),
        query_template=_pick_str(_get(src, 'queryTemplate', 'query_template'), fallback.query_template),
        enabled=_pick_bool(src.get('enabled'), fallback.enabled),
        hints_search=_pick_bool(_get(src, 'hintsSearch', 'hints_search'), fallback.hints_search),
        temporary_chat=_pick_bool(_get(src, 'temporaryChat', 'temporary_chat'), fallback.temporary_chat),
        model=model,
        is_default=_pick_is_default(src, fallback.is_default),
        custom_model=_pick_custom_model(model, _get(src, 'customModel', 'custom_model'), fallback.custom_model),
    )


_BLUEPRINT = DEFAULT_TEMPLATES[0]


def _blueprint(template_id: str) -> TemplateSettings:
    return TemplateSettings(
        id=template_id,
        label=_BLUEPRINT['label'],
        url=_BLUEPRINT['url'],
        query_template=_BLUEPRINT['queryTemplate'],
        enabled=_BLUEPRINT.get('enabled', True),
        hints_search=_BLUEPRINT.get('hintsSearch', False),
        temporary_chat=_BLUEPRINT.get('temporaryChat', False),
        model=_BLUEPRINT['model'],
        is_default=False,
    )


def create_template_defaults(
    overrides: Mapping[str, Any] | None = None,
    *,
    id_factory: IdFactory = generate_template_id,
) -> TemplateSettings:
    """Build a fresh template from the blueprint, applying valid *overrides*."""
    return sanitize_template(overrides, _blueprint(id_factory()))


def enforce_default_template(templates: list[TemplateSettings]) -> list[TemplateSettings]:
    """Mark exactly one template as default.

    Priority: default and enabled, then default, then first enabled, then first.
    """
    if not templates:
        return templates
    candidates = (
        (i for i, t in enumerate(templates) if t.is_default and t.enabled),
        (i for i, t in enumerate(templates) if t.is_default),
        (i for i, t in enumerate(templates) if t.enabled),
    )
    winner = next((i for gen in candidates for i in gen), 0)
    return [t.model_copy(update={'is_default': i == winner}) for i, t in enumerate(templates)]


_BUILTIN_TEMPLATES: list[TemplateSettings] = enforce_default_template(
    [create_template_defaults(t) for t in DEFAULT_TEMPLATES]
)


def default_templates() -> list[TemplateSettings]:
    """Deep copies of the built-in templates."""
    return [t.model_copy(deep=True) for t in _BUILTIN_TEMPLATES]


def default_settings() -> ExtensionSettings:
    return ExtensionSettings(
        templates=default_templates(),
        hard_limit=DEFAULT_HARD_LIMIT,
        parent_menu_title=DEFAULT_PARENT_MENU_TITLE,
    )


def _unique_id(candidate: str, seen: set[str], id_factory: IdFactory) -> str:
    if candidate and candidate not in seen:
        return candidate
    for _ in range(MAX_ID_ATTEMPTS):
        fresh = id_factory()
        if fresh and fresh not in seen:
            log.debug('Replaced empty or duplicate template id %r with %r', candidate, fresh)
            return fresh
    raise TemplateIdExhaustedError(f'Failed to generate a unique template id after {MAX_ID_ATTEMPTS} attempts.')


def normalize_templates(raw: Any, *, id_factory: IdFactory = generate_template_id) -> list[TemplateSettings]:
    if not isinstance(raw, list) or not raw:
        return default_templates()

    seen: set[str] = set()
    normalized: list[TemplateSettings] = []
    for index, entry in enumerate(raw):
        if index < len(_BUILTIN_TEMPLATES):
            fallback = _BUILTIN_TEMPLATES[index]
        else:
            fallback = create_template_defaults(id_factory=id_factory)
        template = sanitize_template(entry, fallback)
        template_id = _unique_id(template.id.strip(), seen, id_factory)
        seen.add(template_id)
        normalized.append(template.model_copy(update={'id': template_id}))

    return enforce_default_template(normalized)


def _pick_hard_limit(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        value = DEFAULT_HARD_LIMIT
    elif isinstance(value, float) and not math.isfinite(value):
        value = DEFAULT_HARD_LIMIT
    return max(MIN_HARD_LIMIT, int(value))


def normalize_settings(
    raw: Mapping[str, Any] | ExtensionSettings | None,
    *,
    id_factory: IdFactory = generate_template_id,
) -> ExtensionSettings:
    """Turn possibly-malformed data into canonical settings. Never trusts its input."""
    if isinstance(raw, ExtensionSettings):
        raw = raw.to_wire()
    src: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    return ExtensionSettings(
        templates=normalize_templates(src.get('templates'), id_factory=id_factory),
        hard_limit=_pick_hard_limit(_get(src, 'hardLimit', 'hard_limit')),
        parent_menu_title=_pick_trimmed(_get(src, 'parentMenuTitle', 'parent_menu_title'), DEFAULT_PARENT_MENU_TITLE),
    )


def get_template_by_id(templates: list[TemplateSettings], template_id: str) -> TemplateSettings | None:
    return next((t for t in templates if t.id == template_id), None)


def find_default_template(settings: ExtensionSettings) -> TemplateSettings | None:
    """The template run by the default-template command, if it is enabled."""
    return next((t for t in settings.templates if t.is_default and t.enabled), None)


def resolve_model_id(template: TemplateSettings) -> str | None:
    if template.model == CUSTOM_MODEL:
        return (template.custom_model or '').strip() or None
    return template.model


def collect_template_warnings(template: TemplateSettings) -> list[str]:
    if has_placeholder(template.url) or has_placeholder(template.query_template):
        return []
    return [MISSING_PLACEHOLDER_WARNING]
