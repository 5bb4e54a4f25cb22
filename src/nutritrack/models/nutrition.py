"""Nutrition models: foods and the meals that contain them."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from ..dates import utc_now


class MealType(str, Enum):
    """Slot a meal is logged under."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DRINK = "drink"

    @property
    def label(self) -> str:
        return MEAL_TYPE_LABELS[self]


MEAL_TYPE_LABELS: Dict[MealType, str] = {
    MealType.BREAKFAST: "Breakfast",
    MealType.LUNCH: "Lunch",
    MealType.DINNER: "Dinner",
    MealType.SNACK: "Snack",
    MealType.DRINK: "Drink",
}


class Macro(str, Enum):
    """Nutrients with a progress goal; values match the ``NutritionTotals`` fields."""

    PROTEIN = "protein"
    CARBS = "carbs"
    FAT = "fat"
    FIBER = "fiber"
    SUGAR = "sugar"


@dataclass(frozen=True)
class Food:
    """Nutrient record for one portion of a food. Macros in grams, sodium in mg."""

    name: str
    quantity: float
    unit: str
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0
    brand: Optional[str] = None
    barcode: Optional[str] = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name or brand."""
        needle = query.casefold()
        if needle in self.name.casefold():
            return True
        return self.brand is not None and needle in self.brand.casefold()


@dataclass
class Meal:
    """A logged meal. Totals are always derived from ``foods``."""

    name: str
    meal_type: MealType
    date: datetime = field(default_factory=utc_now)
    foods: List[Food] = field(default_factory=list)
    notes: Optional[str] = None
    id: str = ""

    @property
    def total_calories(self) -> int:
        return sum(food.calories for food in self.foods)

    @property
    def total_protein(self) -> float:
        return sum(food.protein for food in self.foods)

    @property
    def total_carbs(self) -> float:
        return sum(food.carbs for food in self.foods)

    @property
    def total_fat(self) -> float:
        return sum(food.fat for food in self.foods)

    @property
    def total_fiber(self) -> float:
        return sum(food.fiber for food in self.foods)

    @property
    def total_sugar(self) -> float:
        return sum(food.sugar for food in self.foods)

    @property
    def total_sodium(self) -> float:
        return sum(food.sodium for food in self.foods)
