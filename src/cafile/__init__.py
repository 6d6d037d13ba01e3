"""cafile: content-addressable file handles resolved across storage backends."""

import importlib.metadata as importlib_metadata

from cafile.errors import (
    CafileError,
    ContentNotFoundError,
    InvalidMultihashError,
    NoOpenStreamError,
    StreamAlreadyOpenError,
    UnknownHashFunctionError,
    UnsupportedOperationError,
)
from cafile.file import ContentAddressableFile, SessionState
from cafile.multihash import HashFunction, Multihash, content_address, decode, encode, join_content_id
from cafile.spec import ContentIdSpec
from cafile.storages import (
    ProbeOutcome,
    ReadOnlyStorage,
    StorageProbe,
    StorageRegistry,
    register_read_only_storage,
    register_storage,
    reset_storages,
)


def _detect_version() -> str:
    """Return installed package version or a local fallback when metadata is unavailable."""
    try:
        return importlib_metadata.version("cafile")
    except importlib_metadata.PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _detect_version()

__all__ = [
    "CafileError",
    "ContentAddressableFile",
    "ContentIdSpec",
    "ContentNotFoundError",
    "HashFunction",
    "InvalidMultihashError",
    "Multihash",
    "NoOpenStreamError",
    "ProbeOutcome",
    "ReadOnlyStorage",
    "SessionState",
    "StorageProbe",
    "StorageRegistry",
    "StreamAlreadyOpenError",
    "UnknownHashFunctionError",
    "UnsupportedOperationError",
    "content_address",
    "decode",
    "encode",
    "join_content_id",
    "register_read_only_storage",
    "register_storage",
    "reset_storages",
]
