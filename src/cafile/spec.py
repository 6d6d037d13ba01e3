"""ContentIdSpec: how content ids are computed from content."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import IO, Final, Protocol

from cafile.multihash import encode, hash_function_for, join_content_id
from cafile.serde import as_str_object_dict, optional_string, require_string

_CHUNK_SIZE: Final = 64 * 1024


class _Hasher(Protocol):
    def update(self, data: bytes, /) -> None: ...


def _digest_stream(hasher: _Hasher, stream: IO[bytes]) -> None:
    """Feed a binary stream into ``hasher``, restoring the position when seekable."""
    start = stream.tell() if stream.seekable() else None
    while chunk := stream.read(_CHUNK_SIZE):
        hasher.update(chunk)
    if start is not None:
        stream.seek(start)


@dataclass(frozen=True, slots=True)
class ContentIdSpec:
    """Configuration for generating content ids.

    ``hash`` selects the digest algorithm, ``multihash`` optionally overrides
    the multihash function name written into the id, and ``prefix`` is joined
    in front of the hex address with ``/``::

        ContentIdSpec(hash="sha256", prefix="ipfs").generate(b"...")
        # 'ipfs/1220...'
    """

    hash: str = "sha256"
    multihash: str | None = None
    prefix: str | None = None

    def __post_init__(self) -> None:
        """Validate the hash names eagerly so misconfiguration fails at startup."""
        hash_function_for(self.hash)
        if self.multihash is not None:
            hash_function_for(self.multihash)

    @property
    def multihash_name(self) -> str:
        """Return the multihash function name written into generated ids."""
        return hash_function_for(self.multihash or self.hash).name

    def digest(self, data: bytes | IO[bytes]) -> bytes:
        """Hash bytes or a binary stream with the configured algorithm."""
        hasher = hashlib.new(hash_function_for(self.hash).hashlib_name)
        if isinstance(data, (bytes, bytearray, memoryview)):
            hasher.update(data)
        else:
            _digest_stream(hasher, data)
        return hasher.digest()

    def generate(self, data: bytes | IO[bytes]) -> str:
        """Return the content id for ``data``."""
        return join_content_id(encode(self.digest(data), self.multihash_name), self.prefix)

    def to_dict(self) -> dict[str, object]:
        """Serialize ContentIdSpec to a plain dictionary."""
        return {
            "hash": self.hash,
            "multihash": self.multihash,
            "prefix": self.prefix,
        }

    @classmethod
    def from_dict(cls, value: Mapping[str, object]) -> ContentIdSpec:
        """Deserialize ContentIdSpec from a plain dictionary."""
        data = as_str_object_dict(value, field_name="ContentIdSpec")
        hash_name = data.get("hash", "sha256")
        return cls(
            hash=require_string(hash_name, field_name="ContentIdSpec.hash"),
            multihash=optional_string(data.get("multihash"), field_name="ContentIdSpec.multihash"),
            prefix=optional_string(data.get("prefix"), field_name="ContentIdSpec.prefix"),
        )
