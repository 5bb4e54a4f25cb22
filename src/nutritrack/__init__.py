"""
NutriTrack Engine.

Tracks one user's meals and workouts, persists them locally and derives
the daily, weekly and monthly analytics shown on the dashboard.
"""

from .engine import AppFlow, TrackerEngine, build_gateway
from .dashboard import build_dashboard
from .profile_store import ProfileStore
from .nutrition_ledger import NutritionLedger
from .fitness_ledger import FitnessLedger, estimate_calories
from .session import WorkoutSession
from .errors import (
    DecodeFailure,
    InvalidOperation,
    PersistFailure,
    SessionAlreadyActive,
    TrackerError,
)

__all__ = [
    "AppFlow",
    "TrackerEngine",
    "build_gateway",
    "build_dashboard",
    "ProfileStore",
    "NutritionLedger",
    "FitnessLedger",
    "estimate_calories",
    "WorkoutSession",
    "DecodeFailure",
    "InvalidOperation",
    "PersistFailure",
    "SessionAlreadyActive",
    "TrackerError",
]
