"""ContentAddressableFile: resolve a content id against the registered storages."""

from __future__ import annotations

import enum
import logging
import shutil
import tempfile
from contextlib import closing, contextmanager
from typing import IO, TYPE_CHECKING, TypeVar

from cafile.errors import (
    ContentNotFoundError,
    NoOpenStreamError,
    StreamAlreadyOpenError,
    UnsupportedOperationError,
)
from cafile.multihash import Multihash, content_address, decode
from cafile.storages import (
    Deleter,
    Downloader,
    Opener,
    UrlProvider,
    at_eof,
    copy_stream,
    default_registry,
    probe_storage,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from types import TracebackType

    from cafile.storages import Storage, StorageProbe, StorageRegistry
    from cafile.storages._helpers import Destination

logger = logging.getLogger(__name__)

BodyResultT = TypeVar("BodyResultT")

_TEMPFILE_PREFIX = "content-addressable-"


class SessionState(enum.Enum):
    """Whether a handle currently owns an open stream."""

    CLOSED = "closed"
    OPEN = "open"


class ContentAddressableFile:
    """Handle to content named by its multihash, wherever it is stored.

    The handle carries only the content id. Every operation consults the
    storage registry at call time: storages are probed with ``exists`` in
    registration order and the first hit is *pinned* for that call. A
    storage that raises while probed is treated as not holding the content.

    Reading goes through a session::

        with handle.opened() as stream:
            data = stream.read()

        # or, owning the stream explicitly
        handle.open()
        data = handle.read()
        handle.close()

    ``delete`` fans out to every registered storage that can delete; storages
    registered read-only are never reached.

    Equality and hashing use only the content address (the hex segment after
    the last ``/``), so ids that differ only in prefix name the same content.
    A handle is not safe for concurrent use.
    """

    def __init__(self, content_id: str, *, registry: StorageRegistry | None = None) -> None:
        """Initialize with a content id. The id is not decoded here."""
        self._id = str(content_id)
        self._registry = registry
        self._stream: IO[bytes] | None = None
        self._multihash: Multihash | None = None

    @property
    def id(self) -> str:
        """Return the content id this handle was created with."""
        return self._id

    @property
    def registry(self) -> StorageRegistry:
        """Return the registry this handle resolves against."""
        if self._registry is not None:
            return self._registry
        return default_registry

    @property
    def state(self) -> SessionState:
        """Return the session state."""
        return SessionState.CLOSED if self._stream is None else SessionState.OPEN

    @property
    def closed(self) -> bool:
        """Return whether the handle has no open stream."""
        return self._stream is None

    # ---- digest accessors ----

    @property
    def content_address(self) -> str:
        """Return the hex multihash segment of the id."""
        return content_address(self._id)

    @property
    def multihash(self) -> Multihash:
        """Decode the content address, raising InvalidMultihashError when malformed.

        A successful decode only shows that the id is shaped like a content
        address; verifying it requires hashing the content again.
        """
        if self._multihash is None:
            self._multihash = decode(self._id)
        return self._multihash

    @property
    def digest(self) -> bytes:
        """Return the decoded digest bytes."""
        return self.multihash.digest

    @property
    def digest_length(self) -> int:
        """Return the decoded digest length."""
        return self.multihash.length

    @property
    def digest_hash_function(self) -> str:
        """Return the decoded multihash function name."""
        return self.multihash.hash_function

    # ---- resolution ----

    def probe(self) -> tuple[StorageProbe, ...]:
        """Probe every registered storage and report each hit, miss, or error."""
        return tuple(probe_storage(storage, self._id) for storage in self.registry.snapshot())

    def _pin(self) -> Storage | None:
        """Return the first storage, in registration order, that holds the content."""
        for storage in self.registry.snapshot():
            if probe_storage(storage, self._id).hit:
                logger.debug("Pinned %s to %r", self._id, storage)
                return storage
        logger.debug("No registered storage holds %s", self._id)
        return None

    def _require_pin(self) -> Storage:
        storage = self._pin()
        if storage is None:
            raise ContentNotFoundError(self._id)
        return storage

    def exists(self) -> bool:
        """Return whether any registered storage holds the content."""
        return self._pin() is not None

    def storage(self) -> Storage | None:
        """Return the storage the content currently resolves to, or None."""
        return self._pin()

    def _open_stream(self) -> IO[bytes]:
        """Open a fresh stream on the pinned storage without touching the session."""
        storage = self._require_pin()
        if not isinstance(storage, Opener):
            raise UnsupportedOperationError("open", storage)
        return storage.open(self._id)

    # ---- session ----

    def open(self, body: Callable[[IO[bytes]], BodyResultT] | None = None) -> IO[bytes] | BodyResultT:
        """Open the content for reading.

        Without ``body``, the stream is returned and stays open on the handle
        until ``close()``. With ``body``, the stream is passed to it and closed
        however ``body`` exits; the return value of ``body`` is returned.
        """
        if body is not None:
            with self.opened() as stream:
                return body(stream)

        if self._stream is not None:
            raise StreamAlreadyOpenError(self._id)
        self._stream = self._open_stream()
        return self._stream

    @contextmanager
    def opened(self) -> Iterator[IO[bytes]]:
        """Open a session for the duration of a ``with`` block."""
        if self._stream is not None:
            raise StreamAlreadyOpenError(self._id)
        self._stream = self._open_stream()
        try:
            yield self._stream
        finally:
            self.close()

    def _require_stream(self) -> IO[bytes]:
        if self._stream is None:
            raise NoOpenStreamError(self._id)
        return self._stream

    def read(self, size: int = -1) -> bytes:
        """Read from the open stream."""
        return self._require_stream().read(size)

    def eof(self) -> bool:
        """Return whether the open stream is exhausted."""
        return at_eof(self._require_stream())

    def rewind(self) -> None:
        """Seek the open stream back to the start."""
        self._require_stream().seek(0)

    def close(self) -> None:
        """Close the open stream, if any. Safe to call repeatedly."""
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()

    def __enter__(self) -> ContentAddressableFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    # ---- transfer ----

    def stream(self, destination: Destination) -> None:
        """Copy the content into a path or a writable binary object.

        With a session open, the remaining bytes of the open stream are copied
        and the stream is rewound afterwards. Otherwise a stream is opened and
        closed just for the copy.
        """
        if self._stream is not None:
            copy_stream(self._stream, destination)
            self._stream.seek(0)
            return
        with closing(self._open_stream()) as source:
            copy_stream(source, destination)

    def _download(self) -> IO[bytes]:
        for storage in self.registry.snapshot():
            if isinstance(storage, Downloader) and probe_storage(storage, self._id).hit:
                logger.debug("Downloading %s natively from %r", self._id, storage)
                return storage.download(self._id)

        logger.debug("No downloading storage holds %s; copying to a temporary file", self._id)
        local = tempfile.NamedTemporaryFile(prefix=_TEMPFILE_PREFIX)  # noqa: SIM115
        try:
            with closing(self._open_stream()) as source:
                shutil.copyfileobj(source, local)
            local.flush()
            local.seek(0)
        except BaseException:
            local.close()
            raise
        return local

    def download(self, body: Callable[[IO[bytes]], BodyResultT] | None = None) -> IO[bytes] | BodyResultT:
        """Return the content as a local file.

        A storage that holds the content and supports ``download`` is used
        directly. Otherwise the content is copied into a temporary file that
        is deleted when closed. With ``body``, the file is passed to it and
        closed once ``body`` returns or raises.
        """
        if body is None:
            return self._download()
        with self.downloaded() as local:
            return body(local)

    @contextmanager
    def downloaded(self) -> Iterator[IO[bytes]]:
        """Download for the duration of a ``with`` block."""
        local = self._download()
        try:
            yield local
        finally:
            local.close()

    def url(self, **options: object) -> str:
        """Return a URL from the storage the content resolves to."""
        storage = self._require_pin()
        if not isinstance(storage, UrlProvider):
            raise UnsupportedOperationError("url", storage)
        return storage.url(self._id, **options)

    def delete(self) -> None:
        """Delete the content from every registered storage that can delete.

        Failures are logged and skipped; this never raises.
        """
        for storage in self.registry.snapshot():
            if not isinstance(storage, Deleter):
                continue
            try:
                storage.delete(self._id)
            except Exception:
                logger.warning("Delete failed on %r for %s", storage, self._id, exc_info=True)

    # ---- identity ----

    def _address_key(self) -> str:
        return self.content_address.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentAddressableFile):
            return NotImplemented
        return self._address_key() == other._address_key()

    def __hash__(self) -> int:
        return hash(self._address_key())

    def __repr__(self) -> str:
        return f"ContentAddressableFile({self._id!r}, state={self.state.value})"
