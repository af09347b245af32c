"""Tests for three-tier runtime resolution and inline template composition."""

from __future__ import annotations

import pytest

from search_templater.l1_entities.execution import ExecuteTemplateOverrides, InlineTemplate, RuntimeOverrides
from search_templater.l1_entities.template import TemplateSettings
from search_templater.l2_use_cases.utils.runtime_resolver import (
    compose_execution_template,
    resolve_hints_search,
    resolve_model,
    resolve_query_template,
    resolve_runtime_options,
    resolve_temporary_chat,
    resolve_template_url,
)


def _tmpl(**kwargs) -> TemplateSettings:
    fields = dict(
        id='stored',
        label='Stored',
        url='https://chatgpt.com/?prompt={TEXT}',
        query_template='Q: {TEXT}',
        model='gpt-5',
        hints_search=True,
        temporary_chat=False,
        is_default=True,
    )
    fields.update(kwargs)
    return TemplateSettings(**fields)  # type: ignore[invalid-argument-type]


def _runtime(**kwargs) -> ExecuteTemplateOverrides:
    return ExecuteTemplateOverrides(runtime=RuntimeOverrides(**kwargs))


class TestFlagResolution:
    def test_template_value_without_overrides(self):
        assert resolve_hints_search(None, _tmpl()) is True
        assert resolve_temporary_chat(None, _tmpl()) is False

    def test_override_wins_even_when_false(self):
        assert resolve_hints_search(_runtime(hints_search=False), _tmpl()) is False
        assert resolve_temporary_chat(_runtime(temporary_chat=True), _tmpl()) is True

    def test_overrides_without_runtime_block(self):
        assert resolve_hints_search(ExecuteTemplateOverrides(), _tmpl()) is True


class TestModelResolution:
    def test_override_wins(self):
        assert resolve_model(_runtime(model=' o-new '), _tmpl()) == 'o-new'

    def test_blank_override_falls_through(self):
        assert resolve_model(_runtime(model='  '), _tmpl()) == 'gpt-5'

    def test_custom_model_from_template(self):
        assert resolve_model(None, _tmpl(model='custom', custom_model='  my-model  ')) == 'my-model'

    def test_empty_custom_model_means_no_model(self):
        assert resolve_model(None, _tmpl(model='custom', custom_model='')) is None


class TestTemplateUrlAndQuery:
    def test_url_override(self):
        overrides = ExecuteTemplateOverrides(template_url='  https://x.test/?q={TEXT} ')
        assert resolve_template_url(overrides, _tmpl()) == 'https://x.test/?q={TEXT}'

    def test_blank_url_override_ignored(self):
        assert resolve_template_url(ExecuteTemplateOverrides(template_url='  '), _tmpl()) == _tmpl().url

    def test_query_override_kept_verbatim(self):
        overrides = ExecuteTemplateOverrides(query_template=' A {TEXT} ')
        assert resolve_query_template(overrides, _tmpl()) == ' A {TEXT} '

    def test_empty_query_override_ignored(self):
        assert resolve_query_template(ExecuteTemplateOverrides(query_template=''), _tmpl()) == 'Q: {TEXT}'

    def test_runtime_options_bundle(self):
        options = resolve_runtime_options(_runtime(temporary_chat=True), _tmpl())
        assert options.hints_search is True
        assert options.temporary_chat is True
        assert options.model == 'gpt-5'


class TestComposeExecutionTemplate:
    def test_nothing_to_run(self):
        assert compose_execution_template(None, None) is None

    def test_stored_only_is_enabled_and_not_default(self):
        composed = compose_execution_template(_tmpl(enabled=False), None)
        assert composed is not None
        assert composed.enabled is True
        assert composed.is_default is False
        assert composed.id == 'stored'

    def test_inline_only_uses_fresh_defaults(self):
        composed = compose_execution_template(None, InlineTemplate(query_template='Why {TEXT}?'), id_factory=lambda: 'x')
        assert composed is not None
        assert composed.label == 'Custom search'
        assert composed.query_template == 'Why {TEXT}?'
        assert composed.url == 'https://chatgpt.com/?prompt={TEXT}'

    def test_inline_overrides_stored_fields(self):
        inline = InlineTemplate(url=' https://x.test/?q={TEXT} ', hints_search=False, temporary_chat=True)
        composed = compose_execution_template(_tmpl(), inline)
        assert composed is not None
        assert composed.url == 'https://x.test/?q={TEXT}'
        assert composed.hints_search is False
        assert composed.temporary_chat is True
        assert composed.query_template == 'Q: {TEXT}'

    def test_blank_inline_fields_ignored(self):
        composed = compose_execution_template(_tmpl(), InlineTemplate(url='  ', query_template='', model='  '))
        assert composed is not None
        assert composed.url == _tmpl().url
        assert composed.model == 'gpt-5'

    def test_known_inline_model(self):
        composed = compose_execution_template(_tmpl(model='custom', custom_model='old'), InlineTemplate(model='gpt-5.1'))
        assert composed is not None
        assert composed.model == 'gpt-5.1'
        assert composed.custom_model is None

    @pytest.mark.parametrize(('custom', 'expected'), [(' mine ', 'mine'), ('', None), (None, None)])
    def test_inline_custom_model_option(self, custom, expected):
        composed = compose_execution_template(_tmpl(), InlineTemplate(model='custom', custom_model=custom))
        assert composed is not None
        assert composed.model == 'custom'
        assert composed.custom_model == expected

    def test_unknown_inline_model_becomes_custom(self):
        composed = compose_execution_template(_tmpl(), InlineTemplate(model=' o9-preview '))
        assert composed is not None
        assert composed.model == 'custom'
        assert composed.custom_model == 'o9-preview'

    def test_unknown_inline_model_prefers_given_custom_model(self):
        composed = compose_execution_template(_tmpl(), InlineTemplate(model='o9', custom_model=' exp-2 '))
        assert composed is not None
        assert composed.model == 'custom'
        assert composed.custom_model == 'exp-2'

    def test_unknown_inline_model_with_blank_custom_model_keeps_stored_model(self):
        composed = compose_execution_template(_tmpl(), InlineTemplate(model='o9', custom_model='   '))
        assert composed is not None
        assert composed.model == 'gpt-5'
        assert composed.custom_model is None

    def test_inline_custom_model_alone_switches_to_custom(self):
        composed = compose_execution_template(_tmpl(), InlineTemplate(custom_model=' exp '))
        assert composed is not None
        assert composed.model == 'custom'
        assert composed.custom_model == 'exp'
