"""Internal writer helpers for the VASP volumetric codec.

Layout per channel:
- dimension line: ``nx ny nz`` as right-justified width-4 fields
- values with x fastest, 5 per row by default, each `` {:17.10E}``
- augmentation text verbatim (CHGCAR only)

Readers of these files (VASP itself and column-based tools) rely on the exact
field width and precision.

This is a private module; public API is in `vasp_chg.py`.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from vaspchg.core.errors import MissingAugmentationError
from vaspchg.core.model import ChgType, Shape, VolumetricModel

DEFAULT_VALUES_PER_LINE = 5


def _coerce_kind(kind: Any) -> ChgType:
    if isinstance(kind, ChgType):
        return kind
    return ChgType.from_name(str(kind))


def _fmt_value(x: float) -> str:
    return f" {x:17.10E}"


def _format_dimension_line(shape: Shape) -> str:
    return "".join(f" {int(n):>4}" for n in shape)


def _format_grid_lines(grid: np.ndarray, *, scale: float = 1.0, values_per_line: int) -> list[str]:
    """Format grid values in disk order (x fastest)."""
    flat = (np.asarray(grid, dtype=np.float64) * scale).ravel(order="F").tolist()
    return [
        "".join(_fmt_value(x) for x in flat[i : i + values_per_line])
        for i in range(0, len(flat), values_per_line)
    ]


def _check_augmentation(model: VolumetricModel) -> None:
    for i, ch in enumerate(model.channels):
        if ch.augmentation is None:
            raise MissingAugmentationError(i)


def _format_model_lines(model: VolumetricModel, kind: ChgType, *, values_per_line: int) -> list[str]:
    if not isinstance(values_per_line, int) or values_per_line < 1:
        raise ValueError(f"values_per_line: expected a positive int, got {values_per_line!r}")
    # Refuse before producing any output.
    if kind.requires_augmentation:
        _check_augmentation(model)

    volume = model.header.scaled_volume()
    lines: list[str] = [model.header.format(), ""]
    for i, ch in enumerate(model.channels):
        lines.append(_format_dimension_line(ch.shape))
        # total grid is held as density; the file stores density x volume
        lines.extend(_format_grid_lines(ch.grid, scale=volume if i == 0 else 1.0, values_per_line=values_per_line))
        if kind.emits_augmentation and ch.augmentation is not None:
            lines.append(ch.augmentation)
    return lines
