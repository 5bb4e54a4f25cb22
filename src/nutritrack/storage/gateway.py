"""Persistence gateway contract and the in-memory implementation."""
import logging
import threading
from enum import Enum
from typing import Dict, Optional, Protocol, Set, runtime_checkable

log = logging.getLogger(__name__)


class StorageKey(str, Enum):
    """Fixed identifiers of the three persisted blobs."""

    PROFILE = "profile"
    MEALS = "meals"
    WORKOUTS = "workouts"


@runtime_checkable
class PersistenceGateway(Protocol):
    """
    Key-value byte store holding the engine's persisted state.

    Implementations never raise on I/O problems: ``load`` returns None
    and ``save``/``delete`` return False, logging the cause.
    """

    def load(self, key: StorageKey) -> Optional[bytes]: ...

    def save(self, key: StorageKey, data: bytes) -> bool: ...

    def delete(self, key: StorageKey) -> bool: ...


class InMemoryStore:
    """
    Dict-backed gateway for tests and throwaway sessions.

    Keeps a per-key write counter, and ``fail_writes_for`` makes saves for
    the listed keys report failure.
    """

    def __init__(self, initial: Optional[Dict[StorageKey, bytes]] = None):
        self._data: Dict[StorageKey, bytes] = dict(initial or {})
        self._lock = threading.Lock()
        self.write_counts: Dict[StorageKey, int] = {}
        self.fail_writes_for: Set[StorageKey] = set()

    def load(self, key: StorageKey) -> Optional[bytes]:
        with self._lock:
            return self._data.get(key)

    def save(self, key: StorageKey, data: bytes) -> bool:
        with self._lock:
            if key in self.fail_writes_for:
                log.warning(f"[STORE] Simulated write failure for {key.value}")
                return False
            self._data[key] = data
            self.write_counts[key] = self.write_counts.get(key, 0) + 1
            return True

    def delete(self, key: StorageKey) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def writes(self, key: StorageKey) -> int:
        return self.write_counts.get(key, 0)
