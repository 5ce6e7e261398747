"""Click entry point exposing package metadata and effective settings.

Purpose
-------
Give packaging checks and smoke tests something to execute after install
(``python -m async_drain_queue`` or the ``async-drain-queue`` script). The
queue itself is a library; this command never drives one.

Contents
--------
* :func:`cli` - Click group with ``--version`` and ``--use-dotenv`` toggles.
* :func:`info` - prints the metadata banner and the resolved default interval.
* :func:`main` - test-friendly wrapper returning an exit code.
"""

from __future__ import annotations

import os
from typing import Sequence

import click

from . import __init__conf__
from . import config as config_module


def summary_info() -> str:
    """Return the metadata banner as one string ending with a newline.

    Examples
    --------
    >>> summary_info().startswith("Info for async_drain_queue")
    True
    """

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--version", "-V", is_flag=True, help="Print the installed version and exit.")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from a nearby .env before resolving settings.",
)
@click.pass_context
def cli(ctx: click.Context, *, version: bool, use_dotenv: bool) -> None:
    """Inspect async_drain_queue metadata and configuration."""

    if version:
        click.echo(__init__conf__.version)
        ctx.exit(0)

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    env_toggle = os.getenv(config_module.DOTENV_ENV_VAR)
    if config_module.should_use_dotenv(explicit=explicit, env_value=env_toggle):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        ctx.invoke(info)


@cli.command()
def info() -> None:
    """Print the metadata banner followed by the effective queue settings."""

    try:
        settings = config_module.load_settings()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(summary_info(), nl=False)
    click.echo(f"    default interval_ms = {settings.interval_ms}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group without letting it call ``sys.exit``.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    0.1...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Exit as exit_request:
        return exit_request.exit_code
    return result if isinstance(result, int) else 0


__all__ = ["cli", "info", "main", "summary_info"]
