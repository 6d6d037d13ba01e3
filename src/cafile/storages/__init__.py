"""Storage capabilities, the read-only adapter, and the storage registry."""

from cafile.storages._helpers import at_eof, copy_stream
from cafile.storages._probe import ProbeOutcome, StorageProbe, probe_storage
from cafile.storages._protocols import (
    Deleter,
    Downloader,
    Existence,
    Opener,
    Storage,
    UrlProvider,
    capabilities,
)
from cafile.storages._read_only import ReadOnlyStorage
from cafile.storages._registry import (
    StorageRegistry,
    default_registry,
    register_read_only_storage,
    register_storage,
    reset_storages,
)

__all__ = [
    "Deleter",
    "Downloader",
    "Existence",
    "Opener",
    "ProbeOutcome",
    "ReadOnlyStorage",
    "Storage",
    "StorageProbe",
    "StorageRegistry",
    "UrlProvider",
    "at_eof",
    "capabilities",
    "copy_stream",
    "default_registry",
    "probe_storage",
    "register_read_only_storage",
    "register_storage",
    "reset_storages",
]
