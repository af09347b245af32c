"""Template and settings Pydantic models: pure data, no I/O."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from search_templater.l1_entities.template_spec import (
    CUSTOM_MODEL,
    DEFAULT_HARD_LIMIT,
    DEFAULT_PARENT_MENU_TITLE,
)

TemplateModelOption = Literal['gpt-5.1', 'gpt-5.1-thinking', 'gpt-5', 'gpt-5-thinking', 'custom']

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TemplateSettings(BaseModel):
    """One reusable search definition."""

    model_config = _WIRE_CONFIG

    id: str
    label: str
    url: str
    query_template: str
    enabled: bool = True
    hints_search: bool = False
    temporary_chat: bool = False
    model: TemplateModelOption
    is_default: bool = False
    custom_model: str | None = None  # only meaningful when model == 'custom'

    def to_wire(self, *, default_key: str = 'isDefault') -> dict:
        """Serialize to the camelCase wire shape, dropping ``customModel`` when unset."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if self.model != CUSTOM_MODEL:
            data.pop('customModel', None)
        if default_key != 'isDefault':
            data[default_key] = data.pop('isDefault')
        return data


class ExtensionSettings(BaseModel):
    """The full persisted configuration."""

    model_config = _WIRE_CONFIG

    templates: list[TemplateSettings] = Field(default_factory=list)
    hard_limit: int = DEFAULT_HARD_LIMIT
    parent_menu_title: str = DEFAULT_PARENT_MENU_TITLE

    def to_wire(self, *, default_key: str = 'isDefault') -> dict:
        return {
            'templates': [t.to_wire(default_key=default_key) for t in self.templates],
            'hardLimit': self.hard_limit,
            'parentMenuTitle': self.parent_menu_title,
        }
