"""CLI entry point for search-templater."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from search_templater import __version__


def _container(ctx: click.Context):
    """Build the dependency container lazily so ``--help`` never touches storage."""
    from search_templater.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: not needed for --help
        DependencyContainer,
    )

    if ctx.obj.get('container') is None:
        ctx.obj['container'] = DependencyContainer(ctx.obj['infra'])
    return ctx.obj['container']


def _controller(ctx: click.Context):
    controller = _container(ctx).controller
    asyncio.run(controller.bootstrap())
    return controller


def _fail(message: str) -> None:
    click.echo(f'Error: {message}', err=True)
    sys.exit(1)


def _finish(response) -> None:
    """Map an execution response to the process exit status."""
    if response is None:
        sys.exit(1)
    if not response.success:
        _fail(f'template was not opened ({response.reason})')


def _read_text(text: str | None) -> str:
    if text is not None:
        return text
    return click.get_text_stream('stdin').read().rstrip('\n')


def _runtime_overrides(hints: bool | None, temporary: bool | None, model: str | None):
    from search_templater.l1_entities.execution import (  # noqa: PLC0415 -- deferred: pydantic not loaded on --help
        ExecuteTemplateOverrides,
        RuntimeOverrides,
    )

    if hints is None and temporary is None and model is None:
        return None
    return ExecuteTemplateOverrides(
        runtime=RuntimeOverrides(hints_search=hints, temporary_chat=temporary, model=model),
    )


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to YAML config file.',
)
@click.option('--dry-run', is_flag=True, help='Print the URL instead of opening a browser tab.')
@click.option('--debug', is_flag=True, help='Write a debug log to the platform log directory.')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path, dry_run, debug):
    """search-templater -- open ChatGPT searches built from reusable URL templates."""
    from search_templater.l3_interface_adapters.gateways.paths import (  # noqa: PLC0415 -- deferred: platformdirs not loaded on --help
        LOG_DIR,
    )
    from search_templater.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from search_templater.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_infra_config,
    )
    from search_templater.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: not needed for --help
        setup_file_logging,
    )

    overrides: dict = {}
    if dry_run:
        overrides['navigation'] = {'dry_run': True}
    try:
        raw = YamlConfigLoader().load_raw(config_path, overrides=overrides if overrides else None)
        infra = build_infra_config(raw)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    log_dir = infra.logging.directory or (str(LOG_DIR) if debug else None)
    if log_dir:
        setup_file_logging(Path(log_dir).expanduser(), infra.logging.level)

    ctx.obj = {'infra': infra, 'container': None}


@cli.command('list')
@click.pass_context
def list_templates(ctx):
    """List templates in menu order with their flags and warnings."""
    from search_templater.l2_use_cases.utils.template_settings import (  # noqa: PLC0415 -- deferred: not needed for --help
        collect_template_warnings,
    )

    settings = _controller(ctx).settings
    click.echo(f'{settings.parent_menu_title} (hard limit {settings.hard_limit})')
    for template in settings.templates:
        marker = '*' if template.is_default else ' '
        state = '' if template.enabled else ' [disabled]'
        click.echo(f'{marker} {template.id}  {template.label}{state}')
        for warning in collect_template_warnings(template):
            click.echo(f'    ! {warning}')


@cli.command()
@click.argument('template_id')
@click.argument('text')
@click.pass_context
def preview(ctx, template_id, text):
    """Show the URL a template would open for TEXT, without opening it."""
    from search_templater.l1_entities.errors import UrlBuildError  # noqa: PLC0415 -- deferred: not needed for --help

    controller = _controller(ctx)
    try:
        result = controller.preview(template_id, text)
    except UrlBuildError as e:
        _fail(str(e))
    if result is None:
        _fail(f"template '{template_id}' not found")
    built, warnings = result
    click.echo(f'query: {built.query}')
    click.echo(f'url:   {built.url}')
    click.echo(f'length: {len(built.url)} / {controller.settings.hard_limit}')
    for warning in warnings:
        click.echo(f'Warning: {warning}', err=True)


@cli.command()
@click.argument('template_id')
@click.argument('text', required=False)
@click.option('--hints/--no-hints', default=None, help='Override the search-hints flag.')
@click.option('--temporary/--no-temporary', default=None, help='Override the temporary-chat flag.')
@click.option('--model', default=None, help='Override the model id.')
@click.pass_context
def run(ctx, template_id, text, hints, temporary, model):
    """Run a stored template on TEXT (read from stdin when omitted)."""
    controller = _controller(ctx)
    overrides = _runtime_overrides(hints, temporary, model)
    _finish(asyncio.run(controller.run_template(template_id, _read_text(text), overrides)))


@cli.command()
@click.argument('text', required=False)
@click.pass_context
def default(ctx, text):
    """Run the default template on TEXT (read from stdin when omitted)."""
    controller = _controller(ctx)
    _finish(asyncio.run(controller.run_default(_read_text(text))))


@cli.command()
@click.argument('text', required=False)
@click.option('-t', '--template', 'template_id', default='', help='Stored template to start from.')
@click.option('--url', default=None, help='Ad hoc template URL.')
@click.option('--query', 'query_template', default=None, help='Ad hoc query template.')
@click.option('--model', default=None, help='Model id (unknown ids are sent as a custom model).')
@click.option('--custom-model', default=None, help='Custom model id.')
@click.option('--hints/--no-hints', default=None)
@click.option('--temporary/--no-temporary', default=None)
@click.pass_context
def prompt(ctx, text, template_id, url, query_template, model, custom_model, hints, temporary):
    """Run an unsaved ad hoc template on TEXT, as the manual prompt window does."""
    from search_templater.l1_entities.execution import (  # noqa: PLC0415 -- deferred: not needed for --help
        ExecuteTemplateMessage,
        InlineTemplate,
    )

    controller = _controller(ctx)
    message = ExecuteTemplateMessage(
        template_id=template_id,
        text=_read_text(text),
        inline_template=InlineTemplate(
            url=url,
            query_template=query_template,
            model=model,
            custom_model=custom_model,
            hints_search=hints,
            temporary_chat=temporary,
        ),
    )
    _finish(asyncio.run(controller.handle_message(message)))


@cli.command()
@click.option('--label', default=None)
@click.option('--url', default=None)
@click.option('--query', 'query_template', default=None)
@click.option('--model', default=None)
@click.option('--custom-model', default=None)
@click.option('--hints/--no-hints', default=None)
@click.option('--temporary/--no-temporary', default=None)
@click.option('--disabled', is_flag=True, help='Hide the template from menus.')
@click.option('--make-default', is_flag=True, help='Make the new template the default.')
@click.pass_context
def add(ctx, label, url, query_template, model, custom_model, hints, temporary, disabled, make_default):
    """Add a template built from the blueprint plus the given fields."""
    fields = {
        'label': label,
        'url': url,
        'queryTemplate': query_template,
        'model': model,
        'customModel': custom_model,
        'hintsSearch': hints,
        'temporaryChat': temporary,
        'enabled': not disabled,
    }
    controller = _controller(ctx)
    template = asyncio.run(controller.add_template({k: v for k, v in fields.items() if v is not None}))
    if make_default:
        asyncio.run(controller.set_default_template(template.id))
    click.echo(template.id)


@cli.command()
@click.argument('template_id')
@click.pass_context
def remove(ctx, template_id):
    """Delete a template."""
    if not asyncio.run(_controller(ctx).remove_template(template_id)):
        _fail(f"template '{template_id}' not found")


@cli.command('set-default')
@click.argument('template_id')
@click.pass_context
def set_default(ctx, template_id):
    """Make a template the one run by the default command."""
    if not asyncio.run(_controller(ctx).set_default_template(template_id)):
        _fail(f"template '{template_id}' not found")


@cli.command('export')
@click.argument('output', required=False, type=click.Path(path_type=Path))
@click.pass_context
def export_settings(ctx, output):
    """Write settings as JSON to OUTPUT (stdout when omitted, a timestamped file when a directory)."""
    from search_templater.l3_interface_adapters.gateways.json_settings_codec import (  # noqa: PLC0415 -- deferred: not needed for --help
        export_filename,
    )

    data = _controller(ctx).export_json()
    if output is None:
        click.echo(data, nl=False)
        return
    if output.is_dir():
        output = output / export_filename()
    output.write_text(data, encoding='utf-8')
    click.echo(f'Exported settings to {output}')


@cli.command('import')
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_settings(ctx, source):
    """Replace settings with a previously exported JSON file."""
    from search_templater.l1_entities.errors import SettingsImportError  # noqa: PLC0415 -- deferred: not needed for --help
    from search_templater.l3_interface_adapters.gateways.json_settings_codec import (  # noqa: PLC0415 -- deferred: not needed for --help
        read_settings_file,
    )

    controller = _controller(ctx)
    try:
        settings = asyncio.run(controller.import_json(read_settings_file(Path(source))))
    except SettingsImportError as e:
        _fail(str(e))
    click.echo(f'Imported {len(settings.templates)} templates.')


@cli.command()
@click.confirmation_option(prompt='Replace all templates with the built-in defaults?')
@click.pass_context
def reset(ctx):
    """Restore the built-in templates and settings."""
    asyncio.run(_controller(ctx).reset())
    click.echo('Settings reset to defaults.')
