"""Internal parsing helpers for the VASP volumetric codec.

Private module for parsing logic; public API is in `vasp_chg.py`.

Section order on disk:
    structure block, blank line, then per channel a dimension line, the grid
    values and (CHGCAR only) an augmentation block.

Nothing in the file says how many channels follow. `ChannelAssembler` keeps
reading grids until the stream runs out, which yields 1, 2 or 4 channels for
ordinary, spin-polarized and non-collinear runs.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

import numpy as np

from vaspchg.codecs._cursor import Line, LineCursor
from vaspchg.core.errors import HeaderParseError, MalformedGridError
from vaspchg.core.model import Channel, Shape, VolumetricModel
from vaspchg.core.structure import StructureHeader

logger = logging.getLogger(__name__)

_AUG_MARKER = "aug"

# Start of the next grid: exactly three unsigned integers and nothing else.
# An augmentation row made of three integer tokens matches too; VASP does not
# write such rows, so the ambiguity is accepted.
_DIMENSION_LINE_RE = re.compile(r"^\s*\d+\s+\d+\s+\d+\s*$")


class EndOfChannels(Exception):
    """No further grid at the cursor (end of stream or not a dimension line)."""


# ----------------------------
# Section readers
# ----------------------------


def read_header(cursor: LineCursor) -> StructureHeader:
    """Read the structure block up to and including the first blank line.

    The first line is the free-form comment and is kept even when blank.
    """
    block: list[str] = []
    for line in cursor.lines(error=HeaderParseError):
        if block and not line.text.strip():
            cursor.commit_after(line)
            return StructureHeader.parse("\n".join(block) + "\n")
        block.append(line.text)
    raise HeaderParseError("structure block is not terminated by a blank line")


def _parse_dimension_line(text: str) -> Shape | None:
    toks = text.split()
    if len(toks) < 3:
        return None
    try:
        nx, ny, nz = (int(t) for t in toks[:3])
    except ValueError:
        return None
    if min(nx, ny, nz) < 0:
        return None
    return (nx, ny, nz)


def _to_floats(tokens: list[str], *, first_line: int) -> np.ndarray:
    try:
        return np.array(tokens, dtype=np.float64)
    except ValueError:
        pass
    for t in tokens:
        if not _is_float(t):
            raise MalformedGridError(f"grid at line {first_line}: non-numeric value {t!r}")
    return np.array([float(t) for t in tokens], dtype=np.float64)


def _is_float(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def read_grid(cursor: LineCursor) -> np.ndarray:
    """Read one dimension line and its values into an `(nx, ny, nz)` array.

    Reading stops before a line starting with ``aug`` or once enough values are
    buffered; surplus tokens on the last line are dropped. Values are returned
    as stored on disk (no volume normalization).

    Raises:
        EndOfChannels: the stream is exhausted or the next non-blank line is
            not a dimension line. The cursor is left untouched.
        MalformedGridError: non-numeric or missing values.
    """
    lines = cursor.lines(error=MalformedGridError)
    dim_line: Line | None = None
    for line in lines:
        if line.text.strip():
            dim_line = line
            break
    if dim_line is None:
        raise EndOfChannels("end of stream")

    shape = _parse_dimension_line(dim_line.text)
    if shape is None:
        raise EndOfChannels(f"line {dim_line.number}: not a dimension line: {dim_line.text.strip()!r}")

    count = shape[0] * shape[1] * shape[2]
    tokens: list[str] = []
    last = dim_line
    if count:
        for line in lines:
            if line.text.startswith(_AUG_MARKER):
                cursor.commit_before(line)
                break
            tokens.extend(line.text.split())
            last = line
            if len(tokens) >= count:
                cursor.commit_after(line)
                break
        else:
            cursor.commit_after(last)
    else:
        cursor.commit_after(dim_line)

    if len(tokens) < count:
        raise MalformedGridError(
            f"grid at line {dim_line.number}: expected {count} values for shape {shape}, found {len(tokens)}"
        )

    flat = _to_floats(tokens[:count], first_line=dim_line.number)
    nx, ny, nz = shape
    # disk order is x fastest: (z, y, x) in C order
    grid = flat.reshape((nz, ny, nx)).transpose()
    logger.debug("read grid %s at line %d", shape, dim_line.number)
    return grid


def read_augmentation(cursor: LineCursor) -> str | None:
    """Collect raw lines up to the next dimension line (or end of stream).

    Returns the lines joined with ``"\\n"`` exactly as read, or None when
    nothing but blank lines was found (CHG/PARCHG carry no augmentation).
    """
    collected: list[Line] = []
    for line in cursor.lines(error=MalformedGridError):
        if _DIMENSION_LINE_RE.match(line.text):
            cursor.commit_before(line)
            break
        collected.append(line)
    else:
        if collected:
            cursor.commit_after(collected[-1])

    if not any(line.text.strip() for line in collected):
        return None
    logger.debug(
        "read augmentation block: lines %d-%d", collected[0].number, collected[-1].number
    )
    return "\n".join(line.text for line in collected)


# ----------------------------
# Channel assembly
# ----------------------------


class AssemblyState(Enum):
    READING_TOTAL = "reading_total"
    READING_DIFFERENCE = "reading_difference"
    DONE = "done"


class ChannelAssembler:
    """Reads the channels that follow a structure header.

    States: READING_TOTAL -> READING_DIFFERENCE(n) -> DONE, where `n` is the
    number of difference channels read so far. The machine moves to DONE when
    no further dimension line is found; the channel count is whatever the file
    holds.
    """

    def __init__(self, cursor: LineCursor, header: StructureHeader):
        self._cursor = cursor
        self._header = header
        self.state = AssemblyState.READING_TOTAL
        self.total: Channel | None = None
        self.differences: list[Channel] = []

    @property
    def ndifference(self) -> int:
        return len(self.differences)

    def step(self) -> AssemblyState:
        """Advance by one channel (or into DONE) and return the new state."""
        if self.state is AssemblyState.READING_TOTAL:
            self._read_total()
            self.state = AssemblyState.READING_DIFFERENCE
        elif self.state is AssemblyState.READING_DIFFERENCE:
            try:
                grid = read_grid(self._cursor)
            except EndOfChannels as e:
                logger.debug("no further channels after %d difference grid(s): %s", self.ndifference, e)
                self.state = AssemblyState.DONE
            else:
                self._append_difference(grid)
        return self.state

    def run(self) -> VolumetricModel:
        while self.state is not AssemblyState.DONE:
            self.step()
        if self.total is None:
            raise RuntimeError("channel assembly finished without a total channel")
        return VolumetricModel(self._header, self.total, self.differences)

    def _read_total(self) -> None:
        volume = self._header.scaled_volume()
        if volume <= 0.0:
            raise HeaderParseError(f"structure block has non-positive cell volume {volume!r}")
        try:
            grid = read_grid(self._cursor)
        except EndOfChannels as e:
            raise MalformedGridError(f"total grid: {e}") from None
        aug = read_augmentation(self._cursor)
        self.total = Channel(grid / volume, aug)
        logger.debug("total channel: shape %s, augmentation=%s", grid.shape, aug is not None)

    def _append_difference(self, grid: np.ndarray) -> None:
        if self.total is None:
            raise RuntimeError("difference channel read before the total channel")
        index = self.ndifference + 1
        if grid.shape != self.total.grid.shape:
            raise MalformedGridError(
                f"channel {index}: grid shape {grid.shape} does not match total grid shape {self.total.grid.shape}"
            )
        aug = read_augmentation(self._cursor)
        self.differences.append(Channel(grid, aug))
        logger.debug("difference channel %d: augmentation=%s", index, aug is not None)
