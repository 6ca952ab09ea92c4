"""
Unified CLI entrypoint for the foliSDK environment manager
Uses click for modular subcommands

``activate`` and ``deactivate`` print shell code on stdout for the calling
shell to evaluate (see ``folisdk shell-hook``); status lines go to stderr.
"""
import os

import click

from folisdk_env.core.errors import FolisdkError, NotActive
from folisdk_env.core.logging import LoggingManager
from folisdk_env.modules import session_state, shell_emitter
from folisdk_env.modules.activation import ActivationManager, parse_activation_args
from folisdk_env.modules.toolchain_locator import ToolchainLocator
from folisdk_env.scripts.config_parsing import load_config
from folisdk_env.scripts.legacy_shell_replacements.folisdk_env_sh import render_hook

VERSION = "0.1.0"


def _fail(ctx, error: FolisdkError):
    click.echo(str(error), err=True)
    ctx.exit(error.exit_code)


def _run_in_session(ctx, action):
    """
    Run action against a copy of the current environment and print the
    shell code that brings the calling shell to the resulting state.
    """
    settings = ctx.obj
    before = dict(os.environ)
    environ = dict(before)
    try:
        state = session_state.load(environ)
        manager = ActivationManager(settings['locator'], state, environ,
                                    log_level=settings['log_level'])
        message = action(manager)
        session_state.store(state, environ)
    except NotActive as e:
        click.echo(f"Warning: {e}", err=True)
        ctx.exit(e.exit_code)
    except FolisdkError as e:
        _fail(ctx, e)
    exports, unsets = shell_emitter.diff(before, environ)
    prompt_var = settings['config'].prompt_var
    click.echo(shell_emitter.render(exports, unsets, shell_local=(prompt_var,)), nl=False)
    click.echo(message, err=True)


@click.group()
@click.version_option(VERSION, prog_name="folisdk")
@click.option('--config', 'config_path', default=None, type=click.Path(dir_okay=False),
              help='Path to a folisdk config file (.yaml, .yml or .ini)')
@click.option('--log-level', default=None, help='Log level (default: $FOLISDK_LOG_LEVEL or WARNING)')
@click.pass_context
def cli(ctx, config_path, log_level):
    """foliSDK environment manager."""
    logging_manager = LoggingManager(log_level)
    logging_manager.setup()
    try:
        config = load_config(config_path)
    except FolisdkError as e:
        _fail(ctx, e)
    ctx.obj = {
        'config': config,
        'log_level': logging_manager.log_level,
        'locator': ToolchainLocator(config, logging_manager.log_level),
    }


@cli.command(context_settings={'ignore_unknown_options': True})
@click.argument('tokens', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def activate(ctx, tokens):
    """Activate the toolchain for an architecture.

    Accepts ``ARCH`` or ``--arch=ARCH`` plus an optional ``--path-only``.
    """
    try:
        arch, path_only = parse_activation_args(tokens, ctx.obj['config'].default_arch)
    except FolisdkError as e:
        _fail(ctx, e)

    def action(manager):
        result = manager.activate(arch, path_only=path_only)
        return result.message

    _run_in_session(ctx, action)


@cli.command()
@click.pass_context
def deactivate(ctx):
    """Restore the environment from before activation."""

    def action(manager):
        manager.deactivate()
        return "Deactivated foliSDK. Returned to host environment."

    _run_in_session(ctx, action)


@cli.command()
@click.pass_context
def status(ctx):
    """Show the active architecture and the installed ones."""
    locator = ctx.obj['locator']
    active = os.environ.get(session_state.MARKER)
    click.echo(f"active: {active or 'none'}")
    installed = locator.list_installed()
    click.echo(f"installed: {', '.join(installed) if installed else 'none'}")
    click.echo(f"install root: {locator.root} ({locator.config.layout})")


@cli.command()
@click.argument('arch')
@click.pass_context
def info(ctx, arch):
    """Show where the toolchain for ARCH lives."""
    try:
        descriptor = ctx.obj['locator'].resolve(arch)
    except FolisdkError as e:
        _fail(ctx, e)
    click.echo(f"triple: {descriptor.triple}")
    for bin_dir in descriptor.bin_dirs:
        click.echo(f"bin: {bin_dir}")
    click.echo(f"sysroot: {descriptor.sysroot}")
    click.echo(f"cc: {descriptor.triple}-gcc")
    click.echo(f"cxx: {descriptor.triple}-g++")


@cli.command('shell-hook')
@click.option('--executable', default='folisdk', help='Command the hook functions invoke')
@click.pass_context
def shell_hook(ctx, executable):
    """Print shell functions folisdk_activate / folisdk_deactivate."""
    click.echo(render_hook(executable, ctx.obj['config'].prompt_var), nl=False)


if __name__ == '__main__':
    cli()
