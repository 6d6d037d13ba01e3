"""Stream helpers shared by the content-addressable file façade."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import IO

from cafile.errors import UnsupportedOperationError

Destination = str | Path | IO[bytes]


def copy_stream(source: IO[bytes], destination: Destination) -> None:
    """Copy the rest of ``source`` into a path or a writable binary object."""
    if isinstance(destination, (str, Path)):
        with Path(destination).open("wb") as target:
            shutil.copyfileobj(source, target)
        return
    shutil.copyfileobj(source, destination)


def at_eof(stream: IO[bytes]) -> bool:
    """Return whether ``stream`` has no more bytes, without consuming any."""
    peek = getattr(stream, "peek", None)
    if callable(peek):
        return not peek(1)
    if not stream.seekable():
        raise UnsupportedOperationError("eof", stream)
    position = stream.tell()
    exhausted = not stream.read(1)
    stream.seek(position)
    return exhausted
