"""
cdw — CLI entrypoint.

Usage:
    cdw 'C:\\Users\\me\\Documents'       # cd there (through the wrapper)
    cdw --convert 'D:\\data'             # print /mnt/d/data
    cdw --init                          # install the wrapper for this shell
    cdw --init-all                      # … for every installed shell
    cdw --init-display fish             # print the fish wrapper

Without the wrapper function installed, ``cdw PATH`` prints the cd
signal (BEL + path) and the directory does not change: a child process
cannot move its parent shell.
"""

from __future__ import annotations

import logging
import sys

import click

from cdw import __version__
from cdw.core.config.loader import CdwConfig, ConfigError, load_config
from cdw.core.models.shell import ShellKind
from cdw.core.observability.logging_config import configure_from_env
from cdw.core.services.dispatch import Mode, plan, render, resolve_shell, select_mode
from cdw.core.services.generators.wrapper import wrapper_source
from cdw.core.services.shell_detect import enumerate_available
from cdw.core.services.shell_install import InstallError, install, user_source_hint

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="cdw")
@click.option("--init", "-i", "init", is_flag=True, help="Initialize shell function")
@click.option(
    "--init-display",
    "init_display",
    is_flag=False,
    flag_value="",
    default=None,
    metavar="SHELL",
    help="Display shell function",
)
@click.option(
    "--init-all", "init_all", is_flag=True,
    help="Initialize shell function for all available shells",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose mode")
@click.option("--convert", "-c", is_flag=True, help="Convert path without changing directory")
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr")
@click.argument("path", required=False)
@click.pass_context
def cli(
    ctx: click.Context,
    init: bool,
    init_display: str | None,
    init_all: bool,
    verbose: bool,
    convert: bool,
    debug: bool,
    path: str | None,
) -> None:
    """Change directory to a Windows path in WSL with ease."""
    configure_from_env(debug=debug)

    mode = select_mode(init=init, init_all=init_all, init_display=init_display, path=path)

    if mode is Mode.HELP:
        click.echo(ctx.get_help())
        ctx.exit(1)

    if mode is Mode.TRANSLATE:
        assert path is not None  # guaranteed by select_mode
        config = _load_config_or_defaults()
        outcome = plan(path, convert=convert, mount_root=config.mount_root)
        for line in render(outcome, path, verbose=verbose):
            click.echo(line)
        return

    config = _load_config()

    if mode is Mode.DISPLAY:
        shell = resolve_shell(init_display, config)
        click.echo(wrapper_source(shell))
        return

    if mode is Mode.INIT:
        shell = resolve_shell(None, config)
        assert isinstance(shell, ShellKind)  # no explicit name, so never raw
        _install(shell, config, init_all_mode=False)
        return

    available = enumerate_available()
    if not available:
        click.secho("⚠️  No supported shells found", fg="yellow", err=True)
        return
    for shell in ShellKind:
        if shell in available:
            _install(shell, config, init_all_mode=True)


def _load_config() -> CdwConfig:
    try:
        return load_config()
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def _load_config_or_defaults() -> CdwConfig:
    # The signal line must be printed even when config.yml is broken.
    try:
        return load_config()
    except ConfigError as e:
        logger.warning("%s, using defaults", e)
        return CdwConfig()


def _install(shell: ShellKind, config: CdwConfig, init_all_mode: bool) -> None:
    try:
        install(shell, config_dir=config.config_dir)
        hint = user_source_hint(shell)
    except InstallError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    prefix = f"In {shell} shell, " if init_all_mode else ""
    click.echo(f"Function added to your {shell} configuration.")
    click.echo(f"{prefix}Run `{hint}` in your terminal to apply the changes")


if __name__ == "__main__":
    cli()
