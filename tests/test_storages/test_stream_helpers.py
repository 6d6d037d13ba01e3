"""Tests for stream helpers."""

import io
from pathlib import Path

import pytest

from cafile.errors import UnsupportedOperationError
from cafile.storages import at_eof, copy_stream


def test_copy_stream_to_writable() -> None:
    source = io.BytesIO(b"abcdef")
    source.seek(2)
    destination = io.BytesIO()
    copy_stream(source, destination)
    assert destination.getvalue() == b"cdef"


@pytest.mark.parametrize("as_str", [False, True])
def test_copy_stream_to_path(tmp_path: Path, as_str: bool) -> None:
    target = tmp_path / "out.bin"
    copy_stream(io.BytesIO(b"abc"), str(target) if as_str else target)
    assert target.read_bytes() == b"abc"


def test_at_eof_on_seekable_stream() -> None:
    stream = io.BytesIO(b"a")
    assert at_eof(stream) is False
    assert stream.tell() == 0
    stream.read()
    assert at_eof(stream) is True


def test_at_eof_uses_peek_when_available(tmp_path: Path) -> None:
    path = tmp_path / "data.bin"
    path.write_bytes(b"ab")
    with path.open("rb") as stream:
        assert at_eof(stream) is False
        assert stream.read() == b"ab"
        assert at_eof(stream) is True


class _Unseekable(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False


def test_at_eof_rejects_unseekable_stream_without_peek() -> None:
    with pytest.raises(UnsupportedOperationError):
        at_eof(_Unseekable())  # type: ignore[arg-type]
