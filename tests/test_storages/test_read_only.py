"""Tests for ReadOnlyStorage."""

from pathlib import Path

import pytest
from doubles import DirectoryStorage, ExistsOnlyStorage, MemoryStorage

from cafile.storages import Deleter, Downloader, ReadOnlyStorage, UrlProvider, capabilities


def test_forwards_read_methods() -> None:
    storage = MemoryStorage("m")
    content_id = storage.upload(b"abc")
    read_only = ReadOnlyStorage(storage)

    assert read_only.exists(content_id) is True
    assert read_only.open(content_id).read() == b"abc"
    assert read_only.url(content_id) == storage.url(content_id)


def test_never_exposes_delete() -> None:
    storage = MemoryStorage("m")
    read_only = ReadOnlyStorage(storage)

    assert not isinstance(read_only, Deleter)
    assert "delete" not in capabilities(read_only)
    with pytest.raises(AttributeError):
        read_only.delete("x")  # type: ignore[attr-defined]


def test_exposes_only_what_the_wrapped_storage_has(tmp_path: Path) -> None:
    assert capabilities(ReadOnlyStorage(MemoryStorage("m"))) == {"exists", "open", "url"}
    assert capabilities(ReadOnlyStorage(DirectoryStorage(tmp_path))) == {"exists", "open", "download"}
    assert capabilities(ReadOnlyStorage(ExistsOnlyStorage())) == {"exists"}
    assert not isinstance(ReadOnlyStorage(MemoryStorage("m")), Downloader)
    assert not isinstance(ReadOnlyStorage(ExistsOnlyStorage()), UrlProvider)


def test_wrapped_property() -> None:
    storage = MemoryStorage("m")
    assert ReadOnlyStorage(storage).wrapped is storage


def test_wrapping_twice_wraps_the_backend() -> None:
    storage = MemoryStorage("m")
    assert ReadOnlyStorage(ReadOnlyStorage(storage)).wrapped is storage


def test_equality_follows_wrapped_storage() -> None:
    storage = MemoryStorage("m")
    assert ReadOnlyStorage(storage) == ReadOnlyStorage(storage)
    assert hash(ReadOnlyStorage(storage)) == hash(ReadOnlyStorage(storage))
    assert ReadOnlyStorage(storage) != ReadOnlyStorage(MemoryStorage("m"))
    assert ReadOnlyStorage(storage) != storage


def test_repr_names_wrapped_storage() -> None:
    assert repr(ReadOnlyStorage(MemoryStorage("m"))) == "ReadOnlyStorage(MemoryStorage('m'))"
