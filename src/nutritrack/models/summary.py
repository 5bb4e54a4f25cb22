"""Aggregated analytics models read by the dashboard."""
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NutritionTotals(BaseModel):
    """Summed nutrients over a set of meals."""

    model_config = ConfigDict(populate_by_name=True)

    calories: int = 0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0


class MonthlyNutritionSummary(BaseModel):
    """Nutrition totals over the trailing calendar month."""

    model_config = ConfigDict(populate_by_name=True)

    start: date
    end: date
    calories: int = 0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


class FitnessTotals(BaseModel):
    """Workout count, burn and time over a set of workouts."""

    model_config = ConfigDict(populate_by_name=True)

    workout_count: int = Field(0, serialization_alias="workoutCount")
    calories_burned: int = Field(0, serialization_alias="caloriesBurned")
    duration_sec: float = Field(0.0, serialization_alias="durationSec")


class MonthlyFitnessSummary(FitnessTotals):
    """Fitness totals over the trailing calendar month."""

    start: date
    end: date


class StreakSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_streak: int = Field(0, serialization_alias="currentStreak")
    longest_streak: int = Field(0, serialization_alias="longestStreak")
    last_workout_date: Optional[date] = Field(None, serialization_alias="lastWorkoutDate")


class ProfileSummary(BaseModel):
    """Profile-derived values shown on the dashboard header."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    daily_calorie_goal: int = Field(serialization_alias="dailyCalorieGoal")
    bmi: Optional[float] = None
    bmi_category: str = Field(serialization_alias="bmiCategory")


class DietSummary(BaseModel):
    """Nutrition panel of the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    selected_date: date = Field(serialization_alias="selectedDate")
    today: NutritionTotals
    calorie_progress: float = Field(serialization_alias="calorieProgress")
    calories_by_meal_type: Dict[str, int] = Field(serialization_alias="caloriesByMealType")
    week_avg_calories: float = Field(serialization_alias="weekAvgCalories")
    month: MonthlyNutritionSummary


class FitnessSummary(BaseModel):
    """Fitness panel of the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    selected_date: date = Field(serialization_alias="selectedDate")
    today: FitnessTotals
    week: FitnessTotals
    month: MonthlyFitnessSummary
    streak: StreakSummary
    favorite_type: str = Field(serialization_alias="favoriteType")
    session_active: bool = Field(False, serialization_alias="sessionActive")
    session_elapsed_sec: float = Field(0.0, serialization_alias="sessionElapsedSec")


class DashboardSnapshot(BaseModel):
    """Everything the dashboard renders, computed in one pass."""

    model_config = ConfigDict(populate_by_name=True)

    flow: str
    profile: ProfileSummary
    diet: DietSummary
    fitness: FitnessSummary
    warnings: List[str] = Field(default_factory=list)
