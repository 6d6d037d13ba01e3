"""Tests for tri-state existence probes."""

import logging

import pytest
from doubles import BrokenStorage, MemoryStorage

from cafile.storages import ProbeOutcome, probe_storage


def test_probe_hit_and_miss() -> None:
    storage = MemoryStorage("m")
    content_id = storage.upload(b"abc")

    hit = probe_storage(storage, content_id)
    miss = probe_storage(storage, "1220ff")

    assert hit.outcome is ProbeOutcome.HIT
    assert hit.hit is True
    assert hit.storage is storage
    assert miss.outcome is ProbeOutcome.MISS
    assert miss.hit is False
    assert miss.error is None


def test_probe_captures_backend_error(caplog: pytest.LogCaptureFixture) -> None:
    storage = BrokenStorage()

    with caplog.at_level(logging.WARNING, logger="cafile.storages._probe"):
        result = probe_storage(storage, "1220ff")

    assert result.outcome is ProbeOutcome.ERROR
    assert result.hit is False
    assert isinstance(result.error, ConnectionError)
    assert "Existence probe failed" in caplog.text


def test_probe_without_exists_is_a_miss() -> None:
    result = probe_storage(object(), "1220ff")
    assert result.outcome is ProbeOutcome.MISS
