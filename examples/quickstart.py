"""Resolve content ids across two storages, one of them read-only."""

import io
import tempfile
from pathlib import Path

from cafile import ContentAddressableFile, ContentIdSpec, register_read_only_storage, register_storage


class DictStorage:
    """Tiny in-memory backend: exists/open/url/delete."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.files: dict[str, bytes] = {}

    def exists(self, content_id: str) -> bool:
        return content_id in self.files

    def open(self, content_id: str) -> io.BytesIO:
        return io.BytesIO(self.files[content_id])

    def url(self, content_id: str, **options: object) -> str:
        return f"memory://{self.name}/{content_id}"

    def delete(self, content_id: str) -> None:
        self.files.pop(content_id, None)


spec = ContentIdSpec(hash="sha256", prefix="ipfs")
cache = DictStorage("cache")
archive = DictStorage("archive")

register_storage(cache)
register_read_only_storage(archive)

content_id = spec.generate(b"test content")
archive.files[content_id] = b"test content"
print(f"content id = {content_id}")

handle = ContentAddressableFile(content_id)
print(f"exists() = {handle.exists()}")
print(f"storage() = {handle.storage()!r}")
print(f"digest_hash_function = {handle.digest_hash_function}, digest_length = {handle.digest_length}")
print(f"open() = {handle.open(lambda stream: stream.read())!r}")
print(f"url() = {handle.url()}")

# Scoped sessions close the stream on exit.
with handle.opened():
    print(f"read(4) = {handle.read(4)!r}, eof() = {handle.eof()}")

# No storage here supports download, so the content is copied to a temp file.
with handle.downloaded() as local:
    print(f"downloaded to {local.name}: {local.read()!r}")

with tempfile.TemporaryDirectory() as tmpdir:
    target = Path(tmpdir) / "copy.bin"
    handle.stream(target)
    print(f"stream() wrote {target.stat().st_size} bytes")

# The read-only registration keeps the archived copy.
cache.files[content_id] = b"test content"
handle.delete()
print(f"after delete: cache has it = {cache.exists(content_id)}, archive has it = {archive.exists(content_id)}")

# Prefixes do not affect identity.
print(f"same content = {handle == ContentAddressableFile(content_id.rpartition('/')[2])}")
