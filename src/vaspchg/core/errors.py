"""Error taxonomy for the volumetric codec.

All fatal conditions derive from `CodecError` (a `ValueError`) so callers can
catch codec failures in one place. I/O failures are not wrapped: `OSError`
propagates unchanged from the underlying stream.
"""

from __future__ import annotations


class CodecError(ValueError):
    """Base class for all fatal parse/write failures."""


class HeaderParseError(CodecError):
    """The structure block preceding the first grid could not be parsed."""


class MalformedGridError(CodecError):
    """A grid section is malformed (dimension line, data tokens or shape)."""


class MissingAugmentationError(CodecError):
    """CHGCAR output was requested for a channel without augmentation text."""

    def __init__(self, channel: int):
        self.channel = channel
        where = "total channel" if channel == 0 else f"difference channel {channel}"
        super().__init__(f"CHGCAR output requires augmentation data; none held for {where}")
