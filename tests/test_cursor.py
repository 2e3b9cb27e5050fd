from __future__ import annotations

import io

from vaspchg.codecs._cursor import LineCursor


def test_commit_before_rewinds_to_absolute_line_start() -> None:
    stream = io.BytesIO(b"first\nsecond\r\nthird\n")
    cursor = LineCursor(stream)

    seen = []
    for line in cursor.lines():
        if line.text == "third":
            cursor.commit_before(line)
            break
        seen.append(line.text)

    assert seen == ["first", "second"]
    assert cursor.position == len(b"first\nsecond\r\n")
    assert cursor.lineno == 2
    assert [line.text for line in cursor.lines()] == ["third"]


def test_commit_after_and_line_numbers() -> None:
    stream = io.StringIO("a\nb\nc\n")
    cursor = LineCursor(stream)

    line = next(iter(cursor.lines()))
    cursor.commit_after(line)

    rest = list(cursor.lines())
    assert [(ln.number, ln.text) for ln in rest] == [(2, "b"), (3, "c")]


def test_lines_always_restart_from_committed_position() -> None:
    stream = io.StringIO("a\nb\nc\n")
    cursor = LineCursor(stream)

    # Reading without committing must not move the next reader.
    list(cursor.lines())
    assert [ln.text for ln in cursor.lines()] == ["a", "b", "c"]


def test_at_end() -> None:
    stream = io.StringIO("only\n")
    cursor = LineCursor(stream)
    assert not cursor.at_end()

    line = next(iter(cursor.lines()))
    cursor.commit_after(line)
    assert cursor.at_end()
    assert cursor.position == len("only\n")


def test_starts_at_current_stream_position() -> None:
    stream = io.BytesIO(b"skip\nkeep\n")
    stream.seek(5)
    cursor = LineCursor(stream)
    assert [ln.text for ln in cursor.lines()] == ["keep"]
