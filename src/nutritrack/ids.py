"""Identifier generation for logged entities."""

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    """Produces a new unique identifier on every call."""

    def __call__(self) -> str: ...


class UUIDGenerator:
    """Random UUID4 identifiers (default in production)."""

    def __call__(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator:
    """
    Deterministic identifiers: ``<prefix>-1``, ``<prefix>-2``, ...

    Used by tests so that ids are predictable across runs.
    """

    def __init__(self, prefix: str = "id", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"
