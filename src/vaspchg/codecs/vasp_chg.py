"""VASP volumetric codec (CHGCAR / CHG / PARCHG), import + export.

File layout:

    <structure block (POSCAR)>
    <blank line>
    NX NY NZ
    <NX*NY*NZ values, x fastest>
    [augmentation occupancies ... (CHGCAR only)]
    [NX NY NZ ... repeated for each difference channel]

The number of channels is discovered while reading (1 without spin, 2 for
collinear spin, 4 for non-collinear runs). Augmentation blocks are kept as
raw text and written back unchanged.

The three flavours share all read logic; `ChgType` only decides at write time
whether augmentation blocks are required and emitted (CHGCAR) or dropped
(CHG, PARCHG).
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Any, Sequence

from vaspchg.codecs._chg_parser import ChannelAssembler, read_header
from vaspchg.codecs._chg_writer import DEFAULT_VALUES_PER_LINE, _coerce_kind, _format_model_lines
from vaspchg.codecs._cursor import LineCursor
from vaspchg.core.model import ChgType, VolumetricModel
from vaspchg.core.structure import StructureHeader

logger = logging.getLogger(__name__)


# ----------------------------
# Public API
# ----------------------------


def parse(stream: IO[Any]) -> VolumetricModel:
    """Parse a volumetric file from a seekable text or binary stream.

    Reading starts at the stream's current position. On success the stream is
    left at end-of-stream.

    Raises:
        HeaderParseError: malformed structure block.
        MalformedGridError: malformed total grid, bad values, shape mismatch.
        OSError: propagated from the stream.
    """
    cursor = LineCursor(stream)
    header = read_header(cursor)
    return ChannelAssembler(cursor, header).run()


def parse_chg_text(text: str) -> VolumetricModel:
    """Parse volumetric file content held in memory."""
    if not isinstance(text, str):
        raise TypeError(f"parse_chg_text: expected str, got {type(text).__name__}")
    return parse(io.StringIO(text))


def read_chg(path: str | Path) -> VolumetricModel:
    """Read a CHGCAR/CHG/PARCHG file from disk."""
    p = Path(path)
    with p.open("rb") as f:
        model = parse(f)
    logger.info("read %s: %d channel(s), grid %s", p, model.nchannels, model.shape)
    return model


def build(
    header: StructureHeader,
    total_grid: Any,
    diff_grids: Sequence[Any] = (),
    *,
    total_augmentation: str | None = None,
    diff_augmentations: Sequence[str | None] | None = None,
) -> VolumetricModel:
    """Assemble a model from a header and grids produced in code.

    `total_grid` is density (what `parse` returns, i.e. file values divided
    by `header.scaled_volume()`); difference grids are in file units and are
    never rescaled. Totals held in file units must be divided by the volume
    before calling this.
    """
    return VolumetricModel.from_builder(
        header,
        total_grid,
        diff_grids,
        total_augmentation=total_augmentation,
        diff_augmentations=diff_augmentations,
    )


def format_chg_text(
    model: VolumetricModel,
    format_kind: ChgType | str,
    *,
    values_per_line: int = DEFAULT_VALUES_PER_LINE,
) -> str:
    """Render a model as file text (ends with a newline).

    Raises:
        MissingAugmentationError: `format_kind` is CHGCAR and a channel holds
            no augmentation text.
    """
    kind = _coerce_kind(format_kind)
    lines = _format_model_lines(model, kind, values_per_line=values_per_line)
    return "\n".join(lines) + "\n"


def write(
    model: VolumetricModel,
    stream: IO[Any],
    format_kind: ChgType | str,
    *,
    values_per_line: int = DEFAULT_VALUES_PER_LINE,
) -> None:
    """Write a model to a text or binary stream.

    The whole text is rendered before the first write, so a refused model
    leaves the stream untouched.
    """
    text = format_chg_text(model, format_kind, values_per_line=values_per_line)
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        stream.write(text.encode("utf-8"))
    else:
        stream.write(text)


def write_chg(
    path: str | Path,
    model: VolumetricModel,
    format_kind: ChgType | str,
    *,
    values_per_line: int = DEFAULT_VALUES_PER_LINE,
) -> None:
    """Write a volumetric file to disk (parent directories are created)."""
    text = format_chg_text(model, format_kind, values_per_line=values_per_line)
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" prevents newline translation on write
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.info("wrote %s as %s: %d channel(s)", out_path, _coerce_kind(format_kind).value, model.nchannels)
