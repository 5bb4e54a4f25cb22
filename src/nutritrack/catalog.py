"""
Reference catalogs and first-run demo data.

The food and exercise lists are read-only reference data used for food
search and for seeding an empty install so the dashboard is never blank.
"""

import copy
from datetime import datetime
from typing import Callable, List, Tuple

from .dates import CalendarDays
from .models import (
    Exercise,
    ExerciseSet,
    ExerciseType,
    Food,
    Meal,
    MealType,
    MuscleGroup,
    Workout,
    WorkoutType,
)

SAMPLE_FOODS: Tuple[Food, ...] = (
    Food("Apple", 1, "medium", 95, protein=0.3, carbs=25, fat=0.3, fiber=4, sugar=19),
    Food("Banana", 1, "medium", 105, protein=1.3, carbs=27, fat=0.4, fiber=3, sugar=14),
    Food("Chicken Breast", 100, "g", 165, protein=31, carbs=0, fat=3.6),
    Food("Brown Rice", 100, "g", 111, protein=2.6, carbs=23, fat=0.9, fiber=1.8),
    Food("Broccoli", 100, "g", 34, protein=2.8, carbs=7, fat=0.4, fiber=2.6, sugar=1.5),
    Food("Salmon", 100, "g", 208, protein=22, carbs=0, fat=13),
    Food("Greek Yogurt", 100, "g", 59, protein=10, carbs=3.6, fat=0.4, sugar=3.6),
    Food("Almonds", 28, "g", 164, protein=6, carbs=6, fat=14, fiber=3.5, sugar=1.2),
)

APPLE, BANANA, CHICKEN_BREAST, BROWN_RICE, BROCCOLI, SALMON, GREEK_YOGURT, ALMONDS = SAMPLE_FOODS

SAMPLE_EXERCISES: Tuple[Exercise, ...] = (
    Exercise(
        "Push-ups",
        [ExerciseSet(reps=15)],
        ExerciseType.STRENGTH,
        {MuscleGroup.CHEST, MuscleGroup.ARMS, MuscleGroup.CORE},
    ),
    Exercise(
        "Squats",
        [ExerciseSet(reps=20)],
        ExerciseType.STRENGTH,
        {MuscleGroup.LEGS, MuscleGroup.GLUTES},
    ),
    Exercise(
        "Running",
        [ExerciseSet(reps=1, duration_sec=1800, distance_km=5.0)],
        ExerciseType.CARDIO,
        {MuscleGroup.LEGS},
        calories_per_minute=12,
    ),
    Exercise(
        "Bench Press",
        [ExerciseSet(reps=10, weight_kg=80)],
        ExerciseType.STRENGTH,
        {MuscleGroup.CHEST, MuscleGroup.ARMS},
    ),
    Exercise(
        "Deadlift",
        [ExerciseSet(reps=8, weight_kg=100)],
        ExerciseType.STRENGTH,
        {MuscleGroup.BACK, MuscleGroup.LEGS, MuscleGroup.GLUTES},
    ),
    Exercise(
        "Plank",
        [ExerciseSet(reps=1, duration_sec=60)],
        ExerciseType.STRENGTH,
        {MuscleGroup.CORE},
    ),
    Exercise(
        "Cycling",
        [ExerciseSet(reps=1, duration_sec=3600, distance_km=20.0)],
        ExerciseType.CARDIO,
        {MuscleGroup.LEGS},
        calories_per_minute=8,
    ),
)


def catalog_exercise(name: str) -> Exercise:
    """A private copy of a reference exercise, safe to mutate."""
    for exercise in SAMPLE_EXERCISES:
        if exercise.name == name:
            return copy.deepcopy(exercise)
    raise KeyError(name)


def search_foods(query: str) -> List[Food]:
    """Case-insensitive search over the reference foods; empty query returns all."""
    query = (query or "").strip()
    if not query:
        return list(SAMPLE_FOODS)
    return [food for food in SAMPLE_FOODS if food.matches(query)]


def demo_meals(now: datetime, days: CalendarDays, new_id: Callable[[], str]) -> List[Meal]:
    """Two meals today and one yesterday."""
    yesterday = days.shift_days(now, -1)
    return [
        Meal("Healthy Breakfast", MealType.BREAKFAST, now, [APPLE, GREEK_YOGURT], id=new_id()),
        Meal("Power Lunch", MealType.LUNCH, now, [CHICKEN_BREAST, BROWN_RICE, BROCCOLI], id=new_id()),
        Meal("Yesterday's Dinner", MealType.DINNER, yesterday, [SALMON, BROWN_RICE], id=new_id()),
    ]


def demo_workouts(now: datetime, days: CalendarDays, new_id: Callable[[], str]) -> List[Workout]:
    """A three-day streak ending today."""
    return [
        Workout(
            "Morning Run",
            WorkoutType.RUNNING,
            [catalog_exercise("Running")],
            date=now,
            duration_sec=1800,
            total_calories_burned=360,
            id=new_id(),
        ),
        Workout(
            "Strength Training",
            WorkoutType.STRENGTH,
            [
                catalog_exercise("Push-ups"),
                catalog_exercise("Squats"),
                catalog_exercise("Bench Press"),
                catalog_exercise("Deadlift"),
            ],
            date=days.shift_days(now, -1),
            duration_sec=3600,
            total_calories_burned=480,
            id=new_id(),
        ),
        Workout(
            "Evening Cycling",
            WorkoutType.CYCLING,
            [catalog_exercise("Cycling")],
            date=days.shift_days(now, -2),
            duration_sec=2400,
            total_calories_burned=320,
            id=new_id(),
        ),
    ]
