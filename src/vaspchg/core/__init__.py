"""vaspchg core: data model, structure header and error taxonomy.

This package must not import codecs/cli to avoid circular dependencies.
"""

from __future__ import annotations

from .errors import CodecError, HeaderParseError, MalformedGridError, MissingAugmentationError
from .model import Channel, ChgType, VolumetricModel
from .structure import StructureHeader
from .summary import SUMMARY_COLUMNS, channel_labels, channel_summary

__all__ = [
    "Channel",
    "ChgType",
    "VolumetricModel",
    "StructureHeader",
    "CodecError",
    "HeaderParseError",
    "MalformedGridError",
    "MissingAugmentationError",
    "SUMMARY_COLUMNS",
    "channel_labels",
    "channel_summary",
]
