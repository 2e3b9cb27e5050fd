"""`vaspchg convert` command.

Re-writes a volumetric file in another flavour, e.g. CHGCAR -> PARCHG to drop
augmentation data. Converting to CHGCAR requires augmentation in the source.
"""

from __future__ import annotations

from pathlib import Path

import typer

from vaspchg.codecs.vasp_chg import read_chg, write_chg
from vaspchg.core.errors import CodecError
from vaspchg.core.model import ChgType


def register(app: typer.Typer) -> None:
    @app.command("convert")
    def convert(
        src: str = typer.Argument(..., help="Input volumetric file."),
        dst: str = typer.Argument(..., help="Output path."),
        to: str = typer.Option("chgcar", "--to", help="Output flavour: chg, chgcar or parchg."),
        values_per_line: int = typer.Option(5, "--values-per-line", min=1, help="Grid values per output row."),
    ) -> None:
        """Convert a volumetric file between CHGCAR, CHG and PARCHG."""
        try:
            kind = ChgType.from_name(to)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--to") from e

        try:
            model = read_chg(Path(src))
            write_chg(Path(dst), model, kind, values_per_line=values_per_line)
        except CodecError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1) from e

        typer.echo(str(dst))
