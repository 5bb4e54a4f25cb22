"""
JSON encoding of persisted entities.

Uses pydantic TypeAdapters over the model dataclasses so every field
round-trips. Enums are written as their string values and sets as lists.
"""
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..errors import DecodeFailure
from ..models import Meal, UserProfile, Workout
from .gateway import StorageKey

log = logging.getLogger(__name__)

_profile_adapter = TypeAdapter(UserProfile)
_meals_adapter = TypeAdapter(List[Meal])
_workouts_adapter = TypeAdapter(List[Workout])


def encode_profile(profile: UserProfile) -> bytes:
    return _profile_adapter.dump_json(profile)


def encode_meals(meals: List[Meal]) -> bytes:
    return _meals_adapter.dump_json(meals)


def encode_workouts(workouts: List[Workout]) -> bytes:
    return _workouts_adapter.dump_json(workouts)


def _decode(adapter: TypeAdapter, key: StorageKey, data: bytes):
    try:
        return adapter.validate_json(data)
    except ValidationError as e:
        raise DecodeFailure(key.value, f"{e.error_count()} validation error(s)") from e


def decode_profile(data: bytes) -> UserProfile:
    """Decode a profile blob, raising DecodeFailure on malformed input."""
    return _decode(_profile_adapter, StorageKey.PROFILE, data)


def decode_meals(data: bytes) -> List[Meal]:
    return _decode(_meals_adapter, StorageKey.MEALS, data)


def decode_workouts(data: bytes) -> List[Workout]:
    return _decode(_workouts_adapter, StorageKey.WORKOUTS, data)


def try_decode(decoder, key: StorageKey, data: Optional[bytes]):
    """
    Decode a blob, treating absent or corrupt data as missing.

    Returns:
        The decoded entity, or None if ``data`` is None or fails to decode.
    """
    if data is None:
        return None
    try:
        return decoder(data)
    except DecodeFailure as e:
        log.warning(f"[STORE] {e}; treating {key.value} as absent")
        return None
