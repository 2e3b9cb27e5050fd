"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import vaspchg` to fail.

We ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared fixture text for volumetric-file tests
# =============================================================================


LI_HEADER_LINES = [
    "unknown system",
    "   1.00000000000000",
    "     2.969072   -0.000523   -0.000907",
    "    -0.987305    2.800110    0.000907",
    "    -0.987305   -1.402326    2.423654",
    "   Li",
    "     1",
    "Direct",
    "  0.000000  0.000000  0.000000",
]

LI_LATTICE = np.array(
    [
        [2.969072, -0.000523, -0.000907],
        [-0.987305, 2.800110, 0.000907],
        [-0.987305, -1.402326, 2.423654],
    ]
)

LI_VOLUME = abs(float(np.linalg.det(LI_LATTICE)))

AUG_LINES = [
    "augmentation occupancies 1 15",
    "  0.2743786E+00 -0.3307158E-01  0.0000000E+00  0.0000000E+00  0.0000000E+00",
    "  0.1033253E-02  0.0000000E+00  0.0000000E+00  0.0000000E+00  0.3964234E-01",
    "  0.5875445E-05 -0.7209739E-05 -0.3625569E-05  0.1019266E-04 -0.2068344E-05",
    "augmentation occupancies 2 15",
    "  0.2743786E+00 -0.3307158E-01  0.0000000E+00  0.0000000E+00  0.0000000E+00",
    "  0.1033253E-02  0.0000000E+00  0.0000000E+00  0.0000000E+00  0.3964234E-01",
    "  0.5875445E-05 -0.7209739E-05 -0.3625569E-05  0.1019266E-04 -0.2068344E-05",
]

AUG_TEXT = "\n".join(AUG_LINES)


def make_values(count: int, *, offset: float = 0.0) -> list[float]:
    """Distinct, exactly representable-in-text values for a grid."""
    return [round(0.25 + 0.125 * i + offset, 6) for i in range(count)]


def grid_lines(values: list[float], *, per_line: int = 5) -> list[str]:
    """Format values the way VASP writes them (0.xxxxxxxxxxxE+yy)."""
    out = []
    for i in range(0, len(values), per_line):
        out.append("".join(f" {v:17.10E}" for v in values[i : i + per_line]))
    return out


def make_chg_text(
    *,
    shape: tuple[int, int, int] = (2, 3, 4),
    nchannels: int = 1,
    augmentation: bool = False,
    header_lines: list[str] | None = None,
    moment_row: str | None = None,
) -> tuple[str, list[list[float]]]:
    """Build a volumetric file; returns (text, disk values per channel).

    `moment_row` is written after the first channel (after its augmentation
    block, if any), as VASP does with per-atom moments in ISPIN=2 files.
    """
    nx, ny, nz = shape
    count = nx * ny * nz
    lines = list(header_lines or LI_HEADER_LINES)
    lines.append("")
    channels: list[list[float]] = []
    for c in range(nchannels):
        values = make_values(count, offset=float(c))
        channels.append(values)
        lines.append(f" {nx:>4} {ny:>4} {nz:>4}")
        lines.extend(grid_lines(values))
        if augmentation:
            lines.extend(AUG_LINES)
        if moment_row is not None and c == 0:
            lines.append(moment_row)
    return "\n".join(lines) + "\n", channels
