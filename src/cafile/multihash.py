"""Multihash codec: self-describing digests encoded as the hex tail of a content id.

A content id is ``[segment "/"]* hex(multihash)`` where
``multihash = varint(code) ++ varint(len(digest)) ++ digest``.
"""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from cafile.errors import InvalidMultihashError, UnknownHashFunctionError

_MAX_VARINT_BYTES: Final = 9


@dataclass(frozen=True, slots=True)
class HashFunction:
    """One entry of the multihash function table."""

    name: str
    code: int
    hashlib_name: str
    digest_size: int


_HASH_FUNCTIONS: Final[tuple[HashFunction, ...]] = (
    HashFunction(name="sha1", code=0x11, hashlib_name="sha1", digest_size=20),
    HashFunction(name="sha2-256", code=0x12, hashlib_name="sha256", digest_size=32),
    HashFunction(name="sha2-512", code=0x13, hashlib_name="sha512", digest_size=64),
    HashFunction(name="sha3-512", code=0x14, hashlib_name="sha3_512", digest_size=64),
    HashFunction(name="sha3-384", code=0x15, hashlib_name="sha3_384", digest_size=48),
    HashFunction(name="sha3-256", code=0x16, hashlib_name="sha3_256", digest_size=32),
    HashFunction(name="sha3-224", code=0x17, hashlib_name="sha3_224", digest_size=28),
    HashFunction(name="md5", code=0xD5, hashlib_name="md5", digest_size=16),
    HashFunction(name="blake2b-512", code=0xB240, hashlib_name="blake2b", digest_size=64),
    HashFunction(name="blake2s-256", code=0xB260, hashlib_name="blake2s", digest_size=32),
)

HASH_FUNCTIONS_BY_NAME: Final = MappingProxyType({fn.name: fn for fn in _HASH_FUNCTIONS})
HASH_FUNCTIONS_BY_CODE: Final = MappingProxyType({fn.code: fn for fn in _HASH_FUNCTIONS})

# Short digest names accepted wherever a multihash name is.
HASH_ALIASES: Final = MappingProxyType(
    {
        "sha256": "sha2-256",
        "sha512": "sha2-512",
        "sha3_256": "sha3-256",
        "sha3_384": "sha3-384",
        "sha3_512": "sha3-512",
        "sha3_224": "sha3-224",
        "blake2b": "blake2b-512",
        "blake2s": "blake2s-256",
    }
)


def hash_function_for(name_or_code: str | int) -> HashFunction:
    """Look up a hash function by multihash name, short alias, or numeric code."""
    if isinstance(name_or_code, int) and not isinstance(name_or_code, bool):
        found = HASH_FUNCTIONS_BY_CODE.get(name_or_code)
    elif isinstance(name_or_code, str):
        key = name_or_code.strip().lower()
        found = HASH_FUNCTIONS_BY_NAME.get(HASH_ALIASES.get(key, key))
    else:
        found = None
    if found is None:
        raise UnknownHashFunctionError(name_or_code)
    return found


def encode_varint(value: int) -> bytes:
    """Encode a non-negative integer as an unsigned LEB128 varint."""
    if value < 0:
        msg = "varint value must be >= 0."
        raise ValueError(msg)
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode one unsigned varint at ``offset``.

    Return ``(value, next_offset)``. Raise ``ValueError`` when the input ends
    mid-varint, the varint is longer than nine bytes, or it is not the
    shortest encoding of its value.
    """
    value = 0
    shift = 0
    for index in range(offset, min(len(data), offset + _MAX_VARINT_BYTES)):
        byte = data[index]
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            if byte == 0 and index > offset:
                msg = "non-minimal varint"
                raise ValueError(msg)
            return value, index + 1
        shift += 7
    if len(data) - offset >= _MAX_VARINT_BYTES:
        msg = "varint exceeds 9 bytes"
    else:
        msg = "truncated varint"
    raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Multihash:
    """A decoded multihash: function tag, declared length, and digest bytes."""

    code: int
    hash_function: str
    length: int
    digest: bytes

    def to_bytes(self) -> bytes:
        """Return the binary multihash."""
        return encode_varint(self.code) + encode_varint(self.length) + self.digest

    def to_hex(self) -> str:
        """Return the hex form used as the content address."""
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, address: str) -> Multihash:
        """Parse a bare hex content address."""
        return decode(address)


def content_address(content_id: str) -> str:
    """Return the content address: everything after the last ``/`` of ``content_id``."""
    return str(content_id).rpartition("/")[2]


def join_content_id(address: str, prefix: str | None = None) -> str:
    """Join an optional path prefix and a content address with ``/``."""
    parts = [part for part in (prefix, address) if part]
    return "/".join(parts)


def decode(content_id: str) -> Multihash:
    """Decode the multihash carried in the last segment of ``content_id``."""
    address = content_address(content_id)
    try:
        raw = binascii.unhexlify(address)
    except (binascii.Error, ValueError) as exc:
        raise InvalidMultihashError(content_id, "content address is not valid hex") from exc
    if not raw:
        raise InvalidMultihashError(content_id, "content address is empty")

    try:
        code, offset = decode_varint(raw)
        length, offset = decode_varint(raw, offset)
    except ValueError as exc:
        raise InvalidMultihashError(content_id, str(exc)) from exc

    function = HASH_FUNCTIONS_BY_CODE.get(code)
    if function is None:
        raise InvalidMultihashError(content_id, f"unknown hash function code 0x{code:x}")

    digest = raw[offset:]
    if len(digest) != length:
        reason = f"declared digest length {length} does not match {len(digest)} remaining bytes"
        raise InvalidMultihashError(content_id, reason)

    return Multihash(code=code, hash_function=function.name, length=length, digest=digest)


def encode(digest: bytes, hash_function: str | int) -> str:
    """Encode ``digest`` as a hex multihash tagged with ``hash_function``.

    Truncated digests are allowed; a digest longer than the function's
    output size is rejected.
    """
    function = hash_function_for(hash_function)
    if len(digest) > function.digest_size:
        msg = f"{function.name} digests are at most {function.digest_size} bytes, got {len(digest)}."
        raise ValueError(msg)
    return Multihash(
        code=function.code,
        hash_function=function.name,
        length=len(digest),
        digest=bytes(digest),
    ).to_hex()
