"""Dashboard snapshot: every computed analytic the UI displays, in one model."""
from .engine import TrackerEngine
from .models import (
    DashboardSnapshot,
    DietSummary,
    FitnessSummary,
    ProfileSummary,
)


def build_profile_summary(engine: TrackerEngine) -> ProfileSummary:
    store = engine.profile
    bmi = store.bmi()
    return ProfileSummary(
        name=store.current_user.name if store.current_user else None,
        daily_calorie_goal=store.daily_calorie_goal,
        bmi=round(bmi, 1) if bmi is not None else None,
        bmi_category=store.bmi_category().value,
    )


def build_diet_summary(engine: TrackerEngine) -> DietSummary:
    ledger = engine.nutrition
    return DietSummary(
        selected_date=ledger.days.day_of(ledger.selected_date),
        today=ledger.todays_totals,
        calorie_progress=ledger.calorie_progress(engine.profile.daily_calorie_goal),
        calories_by_meal_type={t.value: kcal for t, kcal in ledger.calories_by_type().items()},
        week_avg_calories=round(ledger.weekly_calorie_average(), 1),
        month=ledger.monthly_summary(),
    )


def build_fitness_summary(engine: TrackerEngine) -> FitnessSummary:
    ledger = engine.fitness
    return FitnessSummary(
        selected_date=ledger.days.day_of(ledger.selected_date),
        today=ledger.daily_totals(ledger.selected_date),
        week=ledger.weekly_totals(),
        month=ledger.monthly_summary(),
        streak=ledger.streak_summary(),
        favorite_type=ledger.favorite_type().value,
        session_active=ledger.is_session_active,
        session_elapsed_sec=ledger.current_session_duration,
    )


def build_dashboard(engine: TrackerEngine) -> DashboardSnapshot:
    """
    Combine profile, diet and fitness analytics into one snapshot.

    Serialize with ``model_dump(by_alias=True)`` for camelCase keys.
    """
    return DashboardSnapshot(
        flow=engine.flow.value,
        profile=build_profile_summary(engine),
        diet=build_diet_summary(engine),
        fitness=build_fitness_summary(engine),
        warnings=engine.warnings,
    )
