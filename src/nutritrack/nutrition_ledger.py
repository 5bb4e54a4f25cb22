"""
Nutrition Ledger.

Owns the logged meals and derives the nutrition analytics: per-day
totals, goal progress, per-meal-type breakdowns, the weekly calorie
average and the trailing monthly summary.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Sequence

from .catalog import demo_meals, search_foods
from .ledger import DayLike, Ledger
from .models import Food, Macro, Meal, MealType, MonthlyNutritionSummary, NutritionTotals
from .storage import StorageKey, decode_meals, encode_meals

logger = logging.getLogger(__name__)

WEEK_DAYS = 7


def progress_ratio(total: float, goal: float) -> float:
    """``total / goal`` clamped to [0, 1]; a non-positive goal gives 0."""
    if goal <= 0:
        return 0.0
    return max(0.0, min(total / goal, 1.0))


def sum_meals(meals: Sequence[Meal]) -> NutritionTotals:
    return NutritionTotals(
        calories=sum(m.total_calories for m in meals),
        protein=sum(m.total_protein for m in meals),
        carbs=sum(m.total_carbs for m in meals),
        fat=sum(m.total_fat for m in meals),
        fiber=sum(m.total_fiber for m in meals),
        sugar=sum(m.total_sugar for m in meals),
    )


class NutritionLedger(Ledger[Meal]):
    """
    Meal collection plus nutrition analytics.

    ``todays_meals`` always holds the meals on ``selected_date``'s
    calendar day, oldest first.
    """

    storage_key = StorageKey.MEALS
    tag = "[NUTRITION]"

    def _encode(self, records: List[Meal]) -> bytes:
        return encode_meals(records)

    def _decode(self, data: bytes) -> List[Meal]:
        return decode_meals(data)

    def _demo_records(self) -> List[Meal]:
        return demo_meals(self._clock(), self.days, self._new_id)

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    @property
    def meals(self) -> List[Meal]:
        return list(self._records)

    @property
    def todays_meals(self) -> List[Meal]:
        return list(self._today)

    def add_meal(self, meal: Meal) -> bool:
        """Log a meal; an empty id is filled in, a duplicate id is rejected."""
        added = self._add(meal)
        if added:
            logger.info(f"[NUTRITION] Logged {meal.meal_type.value} '{meal.name}'")
        return added

    def update_meal(self, meal: Meal) -> bool:
        return self._update(meal)

    def delete_meal(self, meal_id: str) -> bool:
        return self._delete(meal_id)

    def add_quick_meal(self, name: str, foods: Sequence[Food], meal_type: MealType) -> Meal:
        """Log ``foods`` as a meal on the selected date."""
        meal = Meal(name, meal_type, self.selected_date, list(foods), id=self._new_id())
        self.add_meal(meal)
        return meal

    def duplicate_meal(self, meal: Meal) -> Meal:
        """Copy a meal onto the selected date under a new id."""
        copy_ = Meal(
            f"{meal.name} (Copy)",
            meal.meal_type,
            self.selected_date,
            list(meal.foods),
            notes=meal.notes,
            id=self._new_id(),
        )
        self.add_meal(copy_)
        return copy_

    def clear_all_meals(self) -> None:
        self._clear()

    def reset_to_defaults(self) -> None:
        self._reset()

    # ------------------------------------------------------------------
    # Day totals
    # ------------------------------------------------------------------

    def daily_totals(self, when: DayLike) -> NutritionTotals:
        """Nutrient totals over all meals on ``when``'s calendar day."""
        return sum_meals(self._on_day(self._records, when))

    @property
    def todays_totals(self) -> NutritionTotals:
        return sum_meals(self._today)

    @property
    def todays_total_calories(self) -> int:
        return sum(m.total_calories for m in self._today)

    @property
    def todays_total_protein(self) -> float:
        return sum(m.total_protein for m in self._today)

    @property
    def todays_total_carbs(self) -> float:
        return sum(m.total_carbs for m in self._today)

    @property
    def todays_total_fat(self) -> float:
        return sum(m.total_fat for m in self._today)

    @property
    def todays_total_fiber(self) -> float:
        return sum(m.total_fiber for m in self._today)

    @property
    def todays_total_sugar(self) -> float:
        return sum(m.total_sugar for m in self._today)

    # ------------------------------------------------------------------
    # Goal progress
    # ------------------------------------------------------------------

    def calorie_progress(self, goal: float) -> float:
        return progress_ratio(self.todays_total_calories, goal)

    def macro_progress(self, macro: Macro, goal: float) -> float:
        """
        Progress toward a macro goal for the selected day.

        Args:
            macro: Tracked nutrient
            goal: Target grams; non-positive goals give 0
        """
        return progress_ratio(getattr(self.todays_totals, macro.value), goal)

    def protein_progress(self, goal: float) -> float:
        return self.macro_progress(Macro.PROTEIN, goal)

    def carbs_progress(self, goal: float) -> float:
        return self.macro_progress(Macro.CARBS, goal)

    def fat_progress(self, goal: float) -> float:
        return self.macro_progress(Macro.FAT, goal)

    # ------------------------------------------------------------------
    # Meal types
    # ------------------------------------------------------------------

    def meals_by_type(self, meal_type: MealType) -> List[Meal]:
        return [m for m in self._today if m.meal_type == meal_type]

    def calories_for_type(self, meal_type: MealType) -> int:
        return sum(m.total_calories for m in self.meals_by_type(meal_type))

    def calories_by_type(self) -> Dict[MealType, int]:
        return {meal_type: self.calories_for_type(meal_type) for meal_type in MealType}

    # ------------------------------------------------------------------
    # Rolling analytics
    # ------------------------------------------------------------------

    def weekly_calorie_average(self) -> float:
        """
        Average daily calories over the 7 days ending on the selected date.

        Only days with at least one logged meal count toward the average,
        so an unlogged day does not drag it down as a zero.
        """
        window = self.days.window(self.selected_date, WEEK_DAYS)
        per_day: Dict = defaultdict(int)
        for meal in self._between(window[0], window[-1]):
            per_day[self.days.day_of(meal.date)] += meal.total_calories
        if not per_day:
            return 0.0
        return sum(per_day.values()) / len(per_day)

    def monthly_summary(self) -> MonthlyNutritionSummary:
        """Calories and macros over the trailing calendar month."""
        first, last = self.days.month_window(self.selected_date)
        totals = sum_meals(self._between(first, last))
        return MonthlyNutritionSummary(
            start=first,
            end=last,
            calories=totals.calories,
            protein=totals.protein,
            carbs=totals.carbs,
            fat=totals.fat,
        )

    # ------------------------------------------------------------------
    # Reference foods
    # ------------------------------------------------------------------

    @property
    def available_foods(self) -> List[Food]:
        return search_foods("")

    def filtered_foods(self, query: str) -> List[Food]:
        """Search the reference food catalog (not the logged meals)."""
        return search_foods(query)

    def select_date(self, when: datetime) -> None:
        super().select_date(when)
        logger.debug(f"[NUTRITION] Selected {self.days.day_of(when)}: {len(self._today)} meals")
