"""Storage capability protocols.

A storage backend implements any non-empty subset of these protocols.
Capabilities are checked with ``isinstance`` so the core never has to call
a method to learn whether a backend supports it.
"""

from __future__ import annotations

from typing import IO, Protocol, TypeAlias, runtime_checkable


@runtime_checkable
class Existence(Protocol):
    """Backend that can report whether it holds a content id. Required for pinning."""

    def exists(self, content_id: str) -> bool:
        """Return whether the backend holds ``content_id``."""
        ...


@runtime_checkable
class Opener(Protocol):
    """Backend that can open stored content for reading."""

    def open(self, content_id: str) -> IO[bytes]:
        """Return a readable binary stream for ``content_id``."""
        ...


@runtime_checkable
class Downloader(Protocol):
    """Backend that can hand out a local file for stored content without copying."""

    def download(self, content_id: str) -> IO[bytes]:
        """Return an open local file handle for ``content_id``."""
        ...


@runtime_checkable
class UrlProvider(Protocol):
    """Backend that can build a URL for stored content."""

    def url(self, content_id: str, **options: object) -> str:
        """Return a URL for ``content_id``."""
        ...


@runtime_checkable
class Deleter(Protocol):
    """Backend that can delete stored content."""

    def delete(self, content_id: str) -> object:
        """Delete ``content_id``. The return value is ignored."""
        ...


# Any object implementing at least one capability protocol.
Storage: TypeAlias = object

CAPABILITIES: tuple[tuple[str, type], ...] = (
    ("exists", Existence),
    ("open", Opener),
    ("download", Downloader),
    ("url", UrlProvider),
    ("delete", Deleter),
)


def capabilities(storage: Storage) -> frozenset[str]:
    """Return the names of the capabilities ``storage`` implements."""
    return frozenset(name for name, protocol in CAPABILITIES if isinstance(storage, protocol))
