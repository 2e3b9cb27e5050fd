"""Stream cursor for section-by-section parsing.

VASP volumetric files carry no section lengths: a parse step only learns that
its section ended by reading the first line of the next one. Each step reads
speculatively from the last committed position and then commits the absolute
offset where the next step must begin (the start of the first line that does
not belong to it, or the end of the stream). Offsets come from `tell()`, so
line-ending width never enters the arithmetic.

Private module; public API is in `vasp_chg.py`.
"""

from __future__ import annotations

from typing import IO, Any, Iterator, NamedTuple

from vaspchg.core.errors import CodecError


class Line(NamedTuple):
    start: int  # absolute offset of the first byte of the line
    end: int  # absolute offset just past the line delimiter
    number: int  # 1-based line number in the stream
    text: str  # content without the line delimiter


class LineCursor:
    """Seekable line reader with an explicit last-known-good position."""

    def __init__(self, stream: IO[Any]):
        if not stream.seekable():
            raise ValueError("LineCursor: stream must be seekable")
        self._stream = stream
        self._position = stream.tell()
        self._lineno = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def lineno(self) -> int:
        """Number of lines before the committed position."""
        return self._lineno

    def lines(self, *, error: type[CodecError] = CodecError) -> Iterator[Line]:
        """Yield lines from the committed position onwards.

        Byte streams are decoded as UTF-8; an undecodable line raises `error`
        naming the line number.

        Callers stop iterating once they `commit()`; resuming a generator after
        a commit would read from the wrong place.
        """
        self._stream.seek(self._position)
        number = self._lineno
        while True:
            start = self._stream.tell()
            raw = self._stream.readline()
            if not raw:
                return
            number += 1
            if isinstance(raw, bytes):
                try:
                    raw = raw.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise error(f"line {number}: not valid UTF-8 text ({e.reason})") from e
            yield Line(start, self._stream.tell(), number, raw.rstrip("\r\n"))

    def commit_before(self, line: Line) -> None:
        """Next step starts at `line` (it was read but does not belong to us)."""
        self._commit(line.start, line.number - 1)

    def commit_after(self, line: Line) -> None:
        """Next step starts right after `line`."""
        self._commit(line.end, line.number)

    def at_end(self) -> bool:
        for _ in self.lines():
            self._stream.seek(self._position)
            return False
        self._stream.seek(self._position)
        return True

    def _commit(self, position: int, lineno: int) -> None:
        self._position = position
        self._lineno = lineno
        self._stream.seek(position)
