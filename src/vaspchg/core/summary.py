"""Per-channel summary table.

One row per channel with grid extents, value range and the integrated
quantity (electron count for the total channel, magnetic moment for
difference channels). Column order is fixed for stable printing and tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from vaspchg.core.model import VolumetricModel

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


SUMMARY_COLUMNS: list[str] = [
    "channel",
    "label",
    "nx",
    "ny",
    "nz",
    "min",
    "max",
    "mean",
    "integral",
    "has_augmentation",
]


def channel_labels(nchannels: int) -> list[str]:
    """Conventional names for the channels of a file with `nchannels` grids."""
    if nchannels == 2:
        return ["total", "magnetization"]
    if nchannels == 4:
        return ["total", "mx", "my", "mz"]
    return ["total"] + [f"diff{i}" for i in range(1, nchannels)]


def channel_summary(model: VolumetricModel) -> "pd.DataFrame":
    import pandas as pd

    volume = model.header.scaled_volume()
    labels = channel_labels(model.nchannels)
    nx, ny, nz = model.shape

    rows = []
    for i, ch in enumerate(model.channels):
        grid = ch.grid
        mean = float(np.mean(grid)) if grid.size else float("nan")
        # total is density; differences are still density x volume
        integral = mean * volume if i == 0 else mean
        rows.append(
            {
                "channel": i,
                "label": labels[i],
                "nx": nx,
                "ny": ny,
                "nz": nz,
                "min": float(np.min(grid)) if grid.size else float("nan"),
                "max": float(np.max(grid)) if grid.size else float("nan"),
                "mean": mean,
                "integral": integral,
                "has_augmentation": ch.augmentation is not None,
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
