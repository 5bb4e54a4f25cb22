"""User profile models and the calorie-goal math."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set

from ..dates import utc_now


class ActivityLevel(str, Enum):
    """Self-reported daily activity level."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"

    @property
    def label(self) -> str:
        return ACTIVITY_LABELS[self]

    @property
    def factor(self) -> float:
        return ACTIVITY_FACTORS[self]


class DietaryGoal(str, Enum):
    """What the user wants their intake to achieve."""

    MAINTAIN_WEIGHT = "maintain_weight"
    LOSE_WEIGHT = "lose_weight"
    GAIN_WEIGHT = "gain_weight"
    BUILD_MUSCLE = "build_muscle"

    @property
    def label(self) -> str:
        return GOAL_LABELS[self]

    @property
    def calorie_offset(self) -> int:
        return GOAL_OFFSETS[self]


class BMICategory(str, Enum):
    """WHO adult BMI bands."""

    UNKNOWN = "unknown"
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


ACTIVITY_LABELS: Dict[ActivityLevel, str] = {
    ActivityLevel.SEDENTARY: "Sedentary",
    ActivityLevel.LIGHTLY_ACTIVE: "Lightly Active",
    ActivityLevel.MODERATELY_ACTIVE: "Moderately Active",
    ActivityLevel.VERY_ACTIVE: "Very Active",
    ActivityLevel.EXTRA_ACTIVE: "Extra Active",
}

# Harris-Benedict activity multipliers applied to BMR
ACTIVITY_FACTORS: Dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

GOAL_LABELS: Dict[DietaryGoal, str] = {
    DietaryGoal.MAINTAIN_WEIGHT: "Maintain Weight",
    DietaryGoal.LOSE_WEIGHT: "Lose Weight",
    DietaryGoal.GAIN_WEIGHT: "Gain Weight",
    DietaryGoal.BUILD_MUSCLE: "Build Muscle",
}

# kcal added to maintenance calories
GOAL_OFFSETS: Dict[DietaryGoal, int] = {
    DietaryGoal.MAINTAIN_WEIGHT: 0,
    DietaryGoal.LOSE_WEIGHT: -500,
    DietaryGoal.GAIN_WEIGHT: 500,
    DietaryGoal.BUILD_MUSCLE: 300,
}


def mifflin_st_jeor_bmr(weight_kg: float, height_cm: float, age: int) -> float:
    """Basal metabolic rate (kcal/day), male-constant form of Mifflin-St Jeor."""
    return (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + 5


def daily_calorie_goal(
    weight_kg: float,
    height_cm: float,
    age: int,
    activity_level: ActivityLevel,
    dietary_goal: DietaryGoal,
) -> int:
    """
    Daily calorie target for a profile.

    BMR is scaled by the activity factor to get maintenance calories, then
    shifted by the dietary goal offset and truncated to whole kcal.
    """
    maintenance = mifflin_st_jeor_bmr(weight_kg, height_cm, age) * activity_level.factor
    return int(maintenance + dietary_goal.calorie_offset)


def bmi_category(bmi: Optional[float]) -> BMICategory:
    """Classify a BMI value."""
    if bmi is None:
        return BMICategory.UNKNOWN
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    if bmi < 25:
        return BMICategory.NORMAL
    if bmi < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


@dataclass
class FitnessGoal:
    """A user-defined fitness target, e.g. "Run 100 km" by a deadline."""

    name: str
    target_value: float
    unit: str
    current_value: float = 0.0
    deadline: Optional[datetime] = None
    id: str = ""

    @property
    def progress(self) -> float:
        """Progress as a ratio clamped to [0, 1]."""
        if self.target_value <= 0:
            return 0.0
        return max(0.0, min(self.current_value / self.target_value, 1.0))

    @property
    def remaining(self) -> float:
        return max(self.target_value - self.current_value, 0.0)

    @property
    def is_achieved(self) -> bool:
        return self.target_value > 0 and self.current_value >= self.target_value


@dataclass
class UserProfile:
    """
    The single local user.

    ``daily_calorie_goal_kcal`` is derived from the body measurements,
    activity level and dietary goal. Any value passed in is replaced by
    the computed one; call ``recalculate_calorie_goal`` after mutating
    one of its inputs in place.
    """

    name: str
    age: int
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    dietary_goal: DietaryGoal
    dietary_restrictions: Set[str] = field(default_factory=set)
    fitness_goals: List[FitnessGoal] = field(default_factory=list)
    join_date: datetime = field(default_factory=utc_now)
    daily_calorie_goal_kcal: int = 0
    id: str = ""

    def __post_init__(self) -> None:
        self.recalculate_calorie_goal()

    def recalculate_calorie_goal(self) -> int:
        self.daily_calorie_goal_kcal = daily_calorie_goal(
            self.weight_kg,
            self.height_cm,
            self.age,
            self.activity_level,
            self.dietary_goal,
        )
        return self.daily_calorie_goal_kcal

    @property
    def bmi(self) -> Optional[float]:
        if self.height_cm <= 0:
            return None
        height_m = self.height_cm / 100
        return self.weight_kg / (height_m * height_m)
