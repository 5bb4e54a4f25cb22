"""
Integration tests for the engine wiring and the dashboard snapshot.

Builds a TrackerEngine over each store backend and checks the app flow,
cross-ledger date navigation, warnings, reset, persistence across
restarts and the camelCase dashboard payload.

Usage:
    pytest tests/test_engine.py -v
"""
from datetime import date

import pytest

from nutritrack import AppFlow, TrackerEngine, build_dashboard, build_gateway
from nutritrack.config import Settings, get_settings
from nutritrack.models import ActivityLevel, DietaryGoal
from nutritrack.storage import FileStore, InMemoryStore, SQLiteStore, StorageKey


@pytest.fixture
def settings(tmp_path):
    return Settings(data_path=str(tmp_path), store_backend="memory")


@pytest.fixture
def engine(settings, clock, ids):
    """Engine over an in-memory store, seeded with demo meals and workouts."""
    return TrackerEngine(settings=settings, clock=clock, id_generator=ids)


def _onboard(engine):
    return engine.profile.create(
        name="Sam",
        age=30,
        height_cm=175,
        weight_kg=70,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        dietary_goal=DietaryGoal.MAINTAIN_WEIGHT,
    )


# ============================================================================
# Configuration
# ============================================================================


class TestSettings:
    """Settings come from NUTRITRACK_* environment variables."""

    def test_defaults(self, tmp_path):
        settings = Settings(data_path=str(tmp_path))

        assert settings.store_backend == "sqlite"
        assert settings.timezone == "UTC"
        assert settings.seed_demo_data is True
        assert settings.default_calorie_goal == 2000
        assert settings.sqlite_path == str(tmp_path / "nutritrack.db")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NUTRITRACK_STORE_BACKEND", "file")
        monkeypatch.setenv("NUTRITRACK_SEED_DEMO_DATA", "false")
        monkeypatch.setenv("NUTRITRACK_DEFAULT_CALORIE_GOAL", "1800")

        settings = Settings()

        assert settings.store_backend == "file"
        assert settings.seed_demo_data is False
        assert settings.default_calorie_goal == 1800

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()

        assert get_settings() is get_settings()

    @pytest.mark.parametrize(
        "backend,expected",
        [("memory", InMemoryStore), ("sqlite", SQLiteStore), ("file", FileStore)],
    )
    def test_build_gateway(self, tmp_path, backend, expected):
        gateway = build_gateway(Settings(data_path=str(tmp_path), store_backend=backend))

        assert isinstance(gateway, expected)


# ============================================================================
# Engine
# ============================================================================


class TestTrackerEngine:
    """Flow, navigation, warnings and reset."""

    def test_onboarding_until_profile_exists(self, engine):
        assert engine.flow == AppFlow.ONBOARDING

        _onboard(engine)

        assert engine.flow == AppFlow.MAIN

    def test_ledgers_share_the_gateway(self, engine):
        assert engine.gateway.load(StorageKey.MEALS) is not None
        assert engine.gateway.load(StorageKey.WORKOUTS) is not None
        assert engine.gateway.load(StorageKey.PROFILE) is None

    def test_day_navigation_moves_both_ledgers(self, engine):
        engine.select_previous_day()

        assert engine.nutrition.days.day_of(engine.nutrition.selected_date) == date(2026, 10, 18)
        assert engine.fitness.days.day_of(engine.fitness.selected_date) == date(2026, 10, 18)
        assert [m.name for m in engine.nutrition.todays_meals] == ["Yesterday's Dinner"]
        assert [w.name for w in engine.fitness.todays_workouts] == ["Strength Training"]

        engine.select_next_day()
        assert engine.fitness.todays_workout_count == 1

        engine.select_previous_day()
        engine.select_today()
        assert engine.nutrition.days.day_of(engine.nutrition.selected_date) == date(2026, 10, 19)

    def test_warnings_collect_error_messages(self, settings, clock, ids):
        gateway = InMemoryStore()
        engine = TrackerEngine(settings=settings, gateway=gateway, clock=clock, id_generator=ids)
        gateway.fail_writes_for.add(StorageKey.MEALS)

        engine.nutrition.clear_all_meals()

        assert len(engine.warnings) == 1
        assert "meals" in engine.warnings[0]

    def test_reset(self, engine):
        _onboard(engine)
        engine.nutrition.clear_all_meals()
        engine.select_previous_day()

        engine.reset()

        assert engine.flow == AppFlow.ONBOARDING
        assert len(engine.nutrition.meals) == 3
        assert engine.nutrition.days.day_of(engine.nutrition.selected_date) == date(2026, 10, 19)

    def test_state_survives_restart(self, tmp_path, clock, ids):
        settings = Settings(data_path=str(tmp_path), store_backend="sqlite")
        first = TrackerEngine(settings=settings, clock=clock, id_generator=ids)
        _onboard(first)
        first.fitness.add_quick_workout("Lunch Walk", first.fitness.favorite_type(), 900)

        second = TrackerEngine(settings=settings, clock=clock, id_generator=ids)

        assert second.flow == AppFlow.MAIN
        assert second.profile.current_user == first.profile.current_user
        assert len(second.fitness.workouts) == 4
        assert len(second.nutrition.meals) == 3

    def test_no_demo_data_when_disabled(self, tmp_path, clock, ids):
        settings = Settings(data_path=str(tmp_path), store_backend="memory", seed_demo_data=False)

        engine = TrackerEngine(settings=settings, clock=clock, id_generator=ids)

        assert engine.nutrition.meals == []
        assert engine.fitness.workouts == []


# ============================================================================
# Dashboard
# ============================================================================


class TestDashboard:
    """The dashboard snapshot over the demo dataset."""

    def test_snapshot_values(self, engine):
        _onboard(engine)

        snapshot = build_dashboard(engine)

        assert snapshot.flow == "main"
        assert snapshot.profile.daily_calorie_goal == 2555
        assert snapshot.profile.bmi == 22.9
        assert snapshot.profile.bmi_category == "normal"

        assert snapshot.diet.today.calories == 464
        assert snapshot.diet.calorie_progress == pytest.approx(464 / 2555)
        assert snapshot.diet.calories_by_meal_type == {
            "breakfast": 154,
            "lunch": 310,
            "dinner": 0,
            "snack": 0,
            "drink": 0,
        }
        # 464 today and 319 yesterday
        assert snapshot.diet.week_avg_calories == 391.5

        assert snapshot.fitness.today.calories_burned == 360
        assert snapshot.fitness.week.workout_count == 3
        assert snapshot.fitness.week.calories_burned == 1160
        assert snapshot.fitness.streak.current_streak == 3
        assert snapshot.fitness.favorite_type == "running"
        assert snapshot.fitness.session_active is False
        assert snapshot.warnings == []

    def test_without_profile(self, engine):
        snapshot = build_dashboard(engine)

        assert snapshot.flow == "onboarding"
        assert snapshot.profile.name is None
        assert snapshot.profile.daily_calorie_goal == 2000
        assert snapshot.profile.bmi is None
        assert snapshot.profile.bmi_category == "unknown"

    def test_camel_case_payload(self, engine, clock):
        engine.fitness.start_session("Evening Run", engine.fitness.favorite_type())
        clock.advance(minutes=5)

        payload = build_dashboard(engine).model_dump(mode="json", by_alias=True)

        assert payload["profile"]["dailyCalorieGoal"] == 2000
        assert payload["diet"]["selectedDate"] == "2026-10-19"
        assert "weekAvgCalories" in payload["diet"]
        assert "caloriesByMealType" in payload["diet"]
        assert payload["fitness"]["week"]["workoutCount"] == 3
        assert payload["fitness"]["streak"]["lastWorkoutDate"] == "2026-10-19"
        assert payload["fitness"]["sessionActive"] is True
        assert payload["fitness"]["sessionElapsedSec"] == 300.0
