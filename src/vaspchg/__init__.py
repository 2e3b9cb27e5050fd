"""vaspchg: read and write VASP volumetric data (CHGCAR, CHG, PARCHG).

The structure block is handled by pymatgen; grids are numpy arrays and
augmentation data is kept as raw text.
"""

from __future__ import annotations

from vaspchg.codecs.vasp_chg import build, format_chg_text, parse, parse_chg_text, read_chg, write, write_chg
from vaspchg.core import (
    Channel,
    ChgType,
    CodecError,
    HeaderParseError,
    MalformedGridError,
    MissingAugmentationError,
    StructureHeader,
    VolumetricModel,
    channel_summary,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Channel",
    "ChgType",
    "StructureHeader",
    "VolumetricModel",
    "CodecError",
    "HeaderParseError",
    "MalformedGridError",
    "MissingAugmentationError",
    "build",
    "channel_summary",
    "format_chg_text",
    "parse",
    "parse_chg_text",
    "read_chg",
    "write",
    "write_chg",
]
