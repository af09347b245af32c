"""Tests for template and settings Pydantic models."""

import pytest
from pydantic import ValidationError

from search_templater.l1_entities.template import ExtensionSettings, TemplateSettings
from search_templater.l1_entities.template_spec import DEFAULT_HARD_LIMIT, DEFAULT_PARENT_MENU_TITLE, is_model_option


def _template(**kwargs) -> TemplateSettings:
    fields = dict(id='t1', label='L', url='https://chatgpt.com/?prompt={TEXT}', query_template='{TEXT}', model='gpt-5')
    fields.update(kwargs)
    return TemplateSettings(**fields)  # type: ignore[invalid-argument-type]


class TestTemplateSettings:
    def test_accepts_camel_case_aliases(self):
        tmpl = TemplateSettings.model_validate(
            {
                'id': 't1',
                'label': 'L',
                'url': 'u',
                'queryTemplate': 'q {TEXT}',
                'hintsSearch': True,
                'temporaryChat': True,
                'model': 'gpt-5',
                'isDefault': True,
            }
        )
        assert tmpl.query_template == 'q {TEXT}'
        assert tmpl.hints_search is True
        assert tmpl.is_default is True

    def test_unknown_model_rejected(self):
        with pytest.raises(ValidationError):
            _template(model='gpt-2')

    def test_to_wire_uses_camel_case(self):
        data = _template().to_wire()
        assert data['queryTemplate'] == '{TEXT}'
        assert data['isDefault'] is False
        assert 'query_template' not in data

    def test_to_wire_drops_custom_model_unless_custom(self):
        assert 'customModel' not in _template(custom_model='leftover').to_wire()
        assert _template(model='custom', custom_model='mine').to_wire()['customModel'] == 'mine'

    def test_to_wire_drops_empty_custom_model(self):
        assert 'customModel' not in _template(model='custom').to_wire()

    def test_to_wire_export_spelling(self):
        data = _template(is_default=True).to_wire(default_key='default')
        assert data['default'] is True
        assert 'isDefault' not in data


class TestExtensionSettings:
    def test_defaults(self):
        settings = ExtensionSettings()
        assert settings.templates == []
        assert settings.hard_limit == DEFAULT_HARD_LIMIT
        assert settings.parent_menu_title == DEFAULT_PARENT_MENU_TITLE

    def test_to_wire_shape(self):
        data = ExtensionSettings(templates=[_template()], hard_limit=400, parent_menu_title='P').to_wire()
        assert set(data) == {'templates', 'hardLimit', 'parentMenuTitle'}
        assert data['hardLimit'] == 400
        assert data['templates'][0]['id'] == 't1'


class TestModelOptions:
    @pytest.mark.parametrize('value', ['gpt-5.1', 'gpt-5.1-thinking', 'gpt-5', 'gpt-5-thinking', 'custom'])
    def test_known(self, value):
        assert is_model_option(value)

    @pytest.mark.parametrize('value', ['', 'GPT-5', None, 5])
    def test_unknown(self, value):
        assert not is_model_option(value)
