"""vaspchg CLI entrypoint."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="vaspchg",
    add_completion=False,
    no_args_is_help=True,
    help="Inspect and convert VASP volumetric files (CHGCAR, CHG, PARCHG).",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """vaspchg CLI."""
    from vaspchg.logging_config import setup_logging

    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command("version")
def version() -> None:
    """Print the installed vaspchg version."""
    from vaspchg import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `vaspchg --help` is fast.
    """
    from vaspchg.cli.commands import convert as convert_cmd
    from vaspchg.cli.commands import info as info_cmd

    info_cmd.register(app)
    convert_cmd.register(app)


_register_commands()
