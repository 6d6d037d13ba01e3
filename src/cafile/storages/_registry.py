"""StorageRegistry: ordered, deduplicated set of storage backends."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from cafile.storages._read_only import ReadOnlyStorage

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cafile.storages._protocols import Storage

logger = logging.getLogger(__name__)


class StorageRegistry:
    """Ordered set of storages consulted when resolving content ids.

    Registration order is preserved and never changed by later calls;
    registering a storage that is already present is a no-op. Mutation and
    snapshotting share one lock, and scans iterate over a snapshot, so a
    registry may be shared across threads.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._lock = threading.RLock()
        self._storages: list[Storage] = []

    def register(self, *storages: Storage) -> StorageRegistry:
        """Append each storage not yet registered. Return the registry for chaining."""
        with self._lock:
            for storage in storages:
                if storage in self._storages:
                    continue
                self._storages.append(storage)
                logger.debug("Registered storage %r at position %d", storage, len(self._storages) - 1)
        return self

    def register_read_only(self, *storages: Storage) -> StorageRegistry:
        """Register each storage wrapped in a ReadOnlyStorage."""
        return self.register(*(ReadOnlyStorage(storage) for storage in storages))

    def reset(self) -> StorageRegistry:
        """Remove every registered storage."""
        with self._lock:
            self._storages.clear()
        logger.debug("Storage registry reset")
        return self

    def snapshot(self) -> tuple[Storage, ...]:
        """Return the registered storages in registration order."""
        with self._lock:
            return tuple(self._storages)

    def __iter__(self) -> Iterator[Storage]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._storages)

    def __contains__(self, storage: object) -> bool:
        with self._lock:
            return storage in self._storages

    def __repr__(self) -> str:
        return f"StorageRegistry({list(self.snapshot())!r})"


# Process-wide registry used by handles that are not given one explicitly.
default_registry = StorageRegistry()


def register_storage(*storages: Storage) -> StorageRegistry:
    """Register storages on the process-wide registry."""
    return default_registry.register(*storages)


def register_read_only_storage(*storages: Storage) -> StorageRegistry:
    """Register storages read-only on the process-wide registry."""
    return default_registry.register_read_only(*storages)


def reset_storages() -> StorageRegistry:
    """Clear the process-wide registry."""
    return default_registry.reset()
