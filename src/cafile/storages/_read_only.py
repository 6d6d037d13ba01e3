"""ReadOnlyStorage: strip mutating capabilities from a storage backend."""

from __future__ import annotations

from typing import Final

from cafile.storages._protocols import Storage

READ_ONLY_METHODS: Final = ("exists", "open", "download", "url")


class ReadOnlyStorage:
    """Forward only the non-mutating capabilities of a wrapped storage.

    ``delete`` is never exposed, even when the wrapped backend supports it,
    so fan-out deletes skip this registration. Each of ``exists``, ``open``,
    ``download`` and ``url`` is bound onto the instance only when the wrapped
    backend has it, which keeps capability checks accurate.
    """

    def __init__(self, storage: Storage) -> None:
        """Wrap ``storage``; wrapping an adapter again wraps its backend."""
        if isinstance(storage, ReadOnlyStorage):
            storage = storage.wrapped
        self._storage = storage
        for name in READ_ONLY_METHODS:
            method = getattr(storage, name, None)
            if callable(method):
                setattr(self, name, method)

    @property
    def wrapped(self) -> Storage:
        """Return the wrapped storage."""
        return self._storage

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReadOnlyStorage):
            return NotImplemented
        return self._storage == other._storage

    def __hash__(self) -> int:
        return hash((ReadOnlyStorage, self._storage))

    def __repr__(self) -> str:
        return f"ReadOnlyStorage({self._storage!r})"
