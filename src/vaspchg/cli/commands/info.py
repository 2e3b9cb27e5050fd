"""`vaspchg info` command.

Reads a volumetric file and prints one summary row per channel.
"""

from __future__ import annotations

from pathlib import Path

import typer

from vaspchg.codecs.vasp_chg import read_chg
from vaspchg.core.errors import CodecError
from vaspchg.core.summary import channel_summary


def register(app: typer.Typer) -> None:
    @app.command("info")
    def info(
        path: str = typer.Argument(..., help="Path to a CHGCAR, CHG or PARCHG file."),
    ) -> None:
        """Summarize the channels of a volumetric file."""
        try:
            model = read_chg(Path(path))
        except CodecError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1) from e

        typer.echo(f"structure: {model.header.structure.formula}")
        typer.echo(f"volume:    {model.header.scaled_volume():.6f}")
        typer.echo(f"grid:      {' '.join(str(n) for n in model.shape)}")
        typer.echo(f"spin:      {model.spin_kind}")
        typer.echo(channel_summary(model).to_string(index=False))
