"""Domain models for tracked nutrition and fitness data."""
from .profile import (
    ActivityLevel,
    BMICategory,
    DietaryGoal,
    FitnessGoal,
    UserProfile,
    bmi_category,
    daily_calorie_goal,
    mifflin_st_jeor_bmr,
)
from .nutrition import Food, Macro, Meal, MealType
from .fitness import Exercise, ExerciseSet, ExerciseType, MuscleGroup, Workout, WorkoutType
from .summary import (
    DashboardSnapshot,
    DietSummary,
    FitnessSummary,
    FitnessTotals,
    MonthlyFitnessSummary,
    MonthlyNutritionSummary,
    NutritionTotals,
    ProfileSummary,
    StreakSummary,
)

__all__ = [
    "ActivityLevel",
    "BMICategory",
    "DietaryGoal",
    "FitnessGoal",
    "UserProfile",
    "bmi_category",
    "daily_calorie_goal",
    "mifflin_st_jeor_bmr",
    "Food",
    "Macro",
    "Meal",
    "MealType",
    "Exercise",
    "ExerciseSet",
    "ExerciseType",
    "MuscleGroup",
    "Workout",
    "WorkoutType",
    "DashboardSnapshot",
    "DietSummary",
    "FitnessSummary",
    "FitnessTotals",
    "MonthlyFitnessSummary",
    "MonthlyNutritionSummary",
    "NutritionTotals",
    "ProfileSummary",
    "StreakSummary",
]
