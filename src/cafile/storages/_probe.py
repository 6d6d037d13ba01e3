"""Existence probes with an explicit hit / miss / error outcome."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from cafile.storages._protocols import Existence, Storage

logger = logging.getLogger(__name__)


class ProbeOutcome(enum.Enum):
    """Result of asking one storage whether it holds a content id."""

    HIT = "hit"
    MISS = "miss"
    # The backend raised. Pinning treats this like MISS.
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class StorageProbe:
    """Outcome of probing one storage for one content id."""

    storage: Storage
    outcome: ProbeOutcome
    error: Exception | None = None

    @property
    def hit(self) -> bool:
        """Return whether the storage reported holding the content."""
        return self.outcome is ProbeOutcome.HIT


def probe_storage(storage: Storage, content_id: str) -> StorageProbe:
    """Call ``exists`` on one storage, capturing failures instead of raising.

    Storages without an ``exists`` method can never be pinned and are
    reported as misses.
    """
    if not isinstance(storage, Existence):
        return StorageProbe(storage=storage, outcome=ProbeOutcome.MISS)
    try:
        found = storage.exists(content_id)
    except Exception as exc:
        logger.warning("Existence probe failed on %r for %s", storage, content_id, exc_info=True)
        return StorageProbe(storage=storage, outcome=ProbeOutcome.ERROR, error=exc)
    return StorageProbe(storage=storage, outcome=ProbeOutcome.HIT if found else ProbeOutcome.MISS)
