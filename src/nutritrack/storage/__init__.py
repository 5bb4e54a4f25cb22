"""
Persistence for the tracking engine.

A gateway stores three byte blobs (profile, meals, workouts); the codec
turns entities into those blobs and back.
"""

from .gateway import InMemoryStore, PersistenceGateway, StorageKey
from .sqlite_store import SQLiteStore
from .file_store import FileStore
from .codec import (
    decode_meals,
    decode_profile,
    decode_workouts,
    encode_meals,
    encode_profile,
    encode_workouts,
    try_decode,
)

__all__ = [
    "InMemoryStore",
    "PersistenceGateway",
    "StorageKey",
    "SQLiteStore",
    "FileStore",
    "decode_meals",
    "decode_profile",
    "decode_workouts",
    "encode_meals",
    "encode_profile",
    "encode_workouts",
    "try_decode",
]
