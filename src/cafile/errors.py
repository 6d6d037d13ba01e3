"""Typed errors for cafile."""


class CafileError(Exception):
    """Base exception for all cafile errors."""


class InvalidMultihashError(CafileError):
    """Raised when a content id does not decode to a known multihash."""

    def __init__(self, content_id: str, reason: str) -> None:
        """Initialize with the offending content id and the decode failure."""
        self.content_id = content_id
        self.reason = reason
        super().__init__(f"Invalid multihash in {content_id!r}: {reason}")


class UnknownHashFunctionError(CafileError, ValueError):
    """Raised when a hash function name or code is not in the multihash table."""

    def __init__(self, hash_function: str | int) -> None:
        """Initialize with the unrecognized name or code."""
        self.hash_function = hash_function
        super().__init__(f"Unknown hash function: {hash_function!r}")


class ContentNotFoundError(CafileError):
    """Raised when no registered storage holds a content id."""

    def __init__(self, content_id: str) -> None:
        """Initialize with the content id that could not be resolved."""
        self.content_id = content_id
        super().__init__(f"Content not found in any registered storage: {content_id}")


class UnsupportedOperationError(CafileError):
    """Raised when the pinned storage lacks the capability an operation needs."""

    def __init__(self, operation: str, storage: object) -> None:
        """Initialize with the operation name and the storage that lacks it."""
        self.operation = operation
        self.storage = storage
        super().__init__(f"Storage {storage!r} does not support {operation!r}")


class NoOpenStreamError(CafileError):
    """Raised when a stream method is called on a handle with no open stream."""

    def __init__(self, content_id: str) -> None:
        """Initialize with the content id of the closed handle."""
        self.content_id = content_id
        super().__init__(f"No open stream for {content_id}; call open() first")


class StreamAlreadyOpenError(CafileError):
    """Raised when open() is called on a handle that already has an open stream."""

    def __init__(self, content_id: str) -> None:
        """Initialize with the content id of the open handle."""
        self.content_id = content_id
        super().__init__(f"A stream is already open for {content_id}; close() it first")
