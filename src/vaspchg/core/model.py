"""In-memory model of a VASP volumetric file.

A model holds one structure header, a total channel and zero or more
difference channels (magnetization, or its x/y/z components for
non-collinear runs). The channel count is whatever the file carried; nothing
here enforces 1, 2 or 4.

This module must not import codecs/cli.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence

import numpy as np

from vaspchg.core.errors import MalformedGridError
from vaspchg.core.structure import StructureHeader

Shape = tuple[int, int, int]


class ChgType(str, Enum):
    """Output flavour. The three share all read logic."""

    CHG = "chg"
    CHGCAR = "chgcar"
    PARCHG = "parchg"

    @property
    def requires_augmentation(self) -> bool:
        return self is ChgType.CHGCAR

    @property
    def emits_augmentation(self) -> bool:
        return self is ChgType.CHGCAR

    @classmethod
    def from_name(cls, name: str) -> "ChgType":
        """Case-insensitive lookup (`"CHGCAR"`, `"parchg"`, ...)."""
        key = str(name).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"unknown format kind {name!r}; expected one of: {allowed}")


def as_grid(obj: Any, *, where: str) -> np.ndarray:
    """Coerce to a float64 3-D array or raise."""
    arr = np.asarray(obj, dtype=np.float64)
    if arr.ndim != 3:
        raise ValueError(f"{where}: expected a 3-D array, got ndim={arr.ndim}")
    return arr


@dataclass(frozen=True, eq=False)
class Channel:
    grid: np.ndarray
    augmentation: str | None = None

    @property
    def shape(self) -> Shape:
        nx, ny, nz = self.grid.shape
        return (int(nx), int(ny), int(nz))


class VolumetricModel:
    """Header + total channel + ordered difference channels.

    The total grid is held as density (disk value divided by the scaled cell
    volume). Difference grids are held exactly as written on disk.
    """

    def __init__(self, header: StructureHeader, total: Channel, differences: Iterable[Channel] = ()):
        if not isinstance(header, StructureHeader):
            raise TypeError(f"header: expected StructureHeader, got {type(header).__name__}")
        self._header = header
        self._total = total
        self._differences = list(differences)
        for i, ch in enumerate(self._differences, start=1):
            if ch.shape != total.shape:
                raise MalformedGridError(
                    f"channel {i}: grid shape {ch.shape} does not match total grid shape {total.shape}"
                )

    @classmethod
    def from_builder(
        cls,
        header: StructureHeader,
        total_grid: Any,
        diff_grids: Sequence[Any] = (),
        *,
        total_augmentation: str | None = None,
        diff_augmentations: Sequence[str | None] | None = None,
    ) -> "VolumetricModel":
        """Assemble a model from grids produced in code.

        `total_grid` is taken as density (file value divided by
        `header.scaled_volume()`), the same units `parse` produces; it is
        multiplied by the volume again on write. Difference grids are taken in
        file units and written unchanged. To build from file-unit totals,
        divide by `header.scaled_volume()` first.
        """
        diff_grids = list(diff_grids)
        if diff_augmentations is None:
            diff_augmentations = [None] * len(diff_grids)
        elif len(diff_augmentations) != len(diff_grids):
            raise ValueError(
                f"diff_augmentations: expected {len(diff_grids)} entries, got {len(diff_augmentations)}"
            )
        total = Channel(as_grid(total_grid, where="total_grid"), total_augmentation)
        diffs = [
            Channel(as_grid(g, where=f"diff_grids[{i}]"), aug)
            for i, (g, aug) in enumerate(zip(diff_grids, diff_augmentations))
        ]
        return cls(header, total, diffs)

    # ---- accessors ----

    @property
    def header(self) -> StructureHeader:
        return self._header

    @property
    def total(self) -> Channel:
        return self._total

    @property
    def differences(self) -> list[Channel]:
        return list(self._differences)

    @property
    def channels(self) -> list[Channel]:
        return [self._total, *self._differences]

    @property
    def total_grid(self) -> np.ndarray:
        return self._total.grid

    @property
    def total_augmentation(self) -> str | None:
        return self._total.augmentation

    @property
    def diff_grids(self) -> list[np.ndarray]:
        return [ch.grid for ch in self._differences]

    @property
    def diff_augmentations(self) -> list[str | None]:
        return [ch.augmentation for ch in self._differences]

    @property
    def shape(self) -> Shape:
        return self._total.shape

    ngrid = shape

    @property
    def nchannels(self) -> int:
        return 1 + len(self._differences)

    @property
    def spin_kind(self) -> str:
        return {1: "none", 2: "collinear", 4: "noncollinear"}.get(self.nchannels, "unknown")

    # ---- mutation ----

    def set_total_grid(self, grid: Any) -> None:
        arr = as_grid(grid, where="total_grid")
        if arr.shape != self.shape:
            raise MalformedGridError(f"total_grid: shape {arr.shape} does not match model shape {self.shape}")
        self._total = Channel(arr, self._total.augmentation)

    def set_diff_grid(self, index: int, grid: Any) -> None:
        arr = as_grid(grid, where=f"diff_grids[{index}]")
        if arr.shape != self.shape:
            raise MalformedGridError(
                f"diff_grids[{index}]: shape {arr.shape} does not match model shape {self.shape}"
            )
        old = self._differences[index]
        self._differences[index] = Channel(arr, old.augmentation)

    def __repr__(self) -> str:
        return f"VolumetricModel(shape={self.shape}, nchannels={self.nchannels}, header={self._header!r})"
