"""Shared fixtures for cafile tests."""

from collections.abc import Iterator

import pytest
from doubles import MemoryStorage

from cafile import reset_storages


@pytest.fixture(autouse=True)
def _isolated_registry() -> Iterator[None]:
    reset_storages()
    yield
    reset_storages()


@pytest.fixture
def cache() -> MemoryStorage:
    return MemoryStorage("cache")


@pytest.fixture
def store() -> MemoryStorage:
    return MemoryStorage("store")
