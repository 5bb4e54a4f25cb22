"""Fitness models: workouts, exercises and sets."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set

from ..dates import utc_now


class WorkoutType(str, Enum):
    """Category a workout is logged under; drives the calorie-rate table."""

    CARDIO = "cardio"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    SPORTS = "sports"
    YOGA = "yoga"
    PILATES = "pilates"
    HIKING = "hiking"
    SWIMMING = "swimming"
    CYCLING = "cycling"
    RUNNING = "running"
    WALKING = "walking"
    OTHER = "other"

    @property
    def label(self) -> str:
        return WORKOUT_TYPE_LABELS[self]

    @property
    def base_calories_per_minute(self) -> float:
        return BASE_CALORIES_PER_MINUTE[self]


class ExerciseType(str, Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    BALANCE = "balance"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
    LEGS = "legs"
    GLUTES = "glutes"
    FULL_BODY = "full_body"

    @property
    def label(self) -> str:
        return MUSCLE_GROUP_LABELS[self]


WORKOUT_TYPE_LABELS: Dict[WorkoutType, str] = {
    WorkoutType.CARDIO: "Cardio",
    WorkoutType.STRENGTH: "Strength Training",
    WorkoutType.FLEXIBILITY: "Flexibility",
    WorkoutType.SPORTS: "Sports",
    WorkoutType.YOGA: "Yoga",
    WorkoutType.PILATES: "Pilates",
    WorkoutType.HIKING: "Hiking",
    WorkoutType.SWIMMING: "Swimming",
    WorkoutType.CYCLING: "Cycling",
    WorkoutType.RUNNING: "Running",
    WorkoutType.WALKING: "Walking",
    WorkoutType.OTHER: "Other",
}

# kcal/min before per-exercise rates are added
BASE_CALORIES_PER_MINUTE: Dict[WorkoutType, float] = {
    WorkoutType.CARDIO: 12,
    WorkoutType.RUNNING: 12,
    WorkoutType.CYCLING: 12,
    WorkoutType.STRENGTH: 8,
    WorkoutType.YOGA: 4,
    WorkoutType.PILATES: 4,
    WorkoutType.FLEXIBILITY: 4,
    WorkoutType.SWIMMING: 14,
    WorkoutType.HIKING: 6,
    WorkoutType.WALKING: 6,
    WorkoutType.SPORTS: 10,
    WorkoutType.OTHER: 6,
}

MUSCLE_GROUP_LABELS: Dict[MuscleGroup, str] = {
    MuscleGroup.CHEST: "Chest",
    MuscleGroup.BACK: "Back",
    MuscleGroup.SHOULDERS: "Shoulders",
    MuscleGroup.ARMS: "Arms",
    MuscleGroup.CORE: "Core",
    MuscleGroup.LEGS: "Legs",
    MuscleGroup.GLUTES: "Glutes",
    MuscleGroup.FULL_BODY: "Full Body",
}


@dataclass
class ExerciseSet:
    """One set. ``weight_kg`` is 0 for bodyweight and time-based work."""

    reps: int
    weight_kg: float = 0.0
    duration_sec: Optional[float] = None
    distance_km: Optional[float] = None
    rest_sec: Optional[float] = None

    @property
    def volume(self) -> float:
        return self.weight_kg * self.reps


@dataclass
class Exercise:
    name: str
    sets: List[ExerciseSet]
    exercise_type: ExerciseType
    muscle_groups: Set[MuscleGroup] = field(default_factory=set)
    calories_per_minute: Optional[int] = None

    @property
    def total_volume(self) -> float:
        """Tonnage: sum of weight x reps over all sets."""
        return sum(s.volume for s in self.sets)


@dataclass
class Workout:
    """
    A completed (or in-progress) workout.

    ``total_calories_burned`` is stored rather than derived because it
    depends on the wall-clock length of the live session.
    """

    name: str
    workout_type: WorkoutType
    exercises: List[Exercise] = field(default_factory=list)
    date: datetime = field(default_factory=utc_now)
    duration_sec: float = 0.0
    total_calories_burned: int = 0
    notes: Optional[str] = None
    id: str = ""

    @property
    def total_volume(self) -> float:
        return sum(e.total_volume for e in self.exercises)

    @property
    def formatted_duration(self) -> str:
        """Duration as "1h 5m" or "45m"."""
        total = int(self.duration_sec)
        hours = total // 3600
        minutes = total % 3600 // 60
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"
