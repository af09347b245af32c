"""Pure functions for substituting the ``{TEXT}`` placeholder family."""

from __future__ import annotations

from search_templater.l1_entities.template_spec import PLACEHOLDER_VARIANTS

# Private-use code points cannot be typed into a selection by accident.
_SENTINEL_OPEN = '\ue000'
_SENTINEL_CLOSE = '\ue001'


def _sentinel(index: int) -> str:
    return f'{_SENTINEL_OPEN}PLACEHOLDER_LITERAL_{index}{_SENTINEL_CLOSE}'


def _literal_form(placeholder: str) -> str:
    return '{' + placeholder + '}'


def apply_placeholders(template: str, replacement: str) -> str:
    """Replace every unescaped placeholder with *replacement*.

    ``{{TEXT}}`` is the escaped form and comes out as the literal ``{TEXT}``.
    """
    masked = template
    for index, placeholder in enumerate(PLACEHOLDER_VARIANTS):
        masked = masked.replace(_literal_form(placeholder), _sentinel(index))

    for placeholder in PLACEHOLDER_VARIANTS:
        masked = masked.replace(placeholder, replacement)

    for index, placeholder in enumerate(PLACEHOLDER_VARIANTS):
        masked = masked.replace(_sentinel(index), placeholder)
    return masked


def has_placeholder(value: str) -> bool:
    """True if *value* contains at least one placeholder that is not in its escaped form."""
    for placeholder in PLACEHOLDER_VARIANTS:
        start = value.find(placeholder)
        while start != -1:
            end = start + len(placeholder)
            escaped = start > 0 and value[start - 1] == '{' and value[end : end + 1] == '}'
            if not escaped:
                return True
            start = value.find(placeholder, end)
    return False
