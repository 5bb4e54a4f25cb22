"""
Tests for the Profile Store.

Covers profile creation and the calorie goal, immediate persistence,
reload from the gateway, fitness goals, dietary restrictions, reset and
failed writes.
"""
import copy

import pytest

from nutritrack.models import ActivityLevel, BMICategory, DietaryGoal, FitnessGoal
from nutritrack.profile_store import ProfileStore
from nutritrack.storage import StorageKey


def _create_sam(profiles):
    return profiles.create(
        name="Sam",
        age=30,
        height_cm=175,
        weight_kg=70,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        dietary_goal=DietaryGoal.MAINTAIN_WEIGHT,
    )


class TestCreateProfile:
    """Tests for profile creation."""

    def test_starts_without_profile(self, profiles):
        assert profiles.current_user is None
        assert not profiles.is_setup
        assert profiles.daily_calorie_goal == 2000
        assert profiles.bmi() is None
        assert profiles.bmi_category() == BMICategory.UNKNOWN

    def test_create_computes_goal(self, profiles, clock):
        profile = _create_sam(profiles)

        assert profiles.is_setup
        assert profiles.current_user is profile
        assert profile.daily_calorie_goal_kcal == 2555
        assert profile.join_date == clock.now
        assert profile.id == "test-1"

    def test_create_persists_immediately(self, profiles, store):
        _create_sam(profiles)

        assert store.writes(StorageKey.PROFILE) == 1
        assert store.load(StorageKey.PROFILE) is not None

    def test_bmi_derived_values(self, profiles):
        _create_sam(profiles)

        assert profiles.bmi() == pytest.approx(22.857, abs=1e-3)
        assert profiles.bmi_category() == BMICategory.NORMAL

    def test_demo_profile(self, profiles):
        profile = profiles.create_demo_profile()

        assert profile.name == "Demo User"
        assert profile.age == 28
        # 10*70 + 6.25*175 - 5*28 + 5 = 1658.75; x1.55 = 2571.06
        assert profile.daily_calorie_goal_kcal == 2571

    def test_custom_default_goal(self, store, clock, ids):
        profiles = ProfileStore(store, clock=clock, id_generator=ids, default_calorie_goal=1800)

        assert profiles.daily_calorie_goal == 1800


class TestPersistence:
    """Tests for reload and round-trip through the gateway."""

    def test_reload_round_trip(self, profiles, store, clock, ids):
        _create_sam(profiles)
        profiles.add_dietary_restriction("vegetarian")
        profiles.add_fitness_goal(FitnessGoal(name="Run", target_value=100, unit="km", current_value=12))

        reloaded = ProfileStore(store, clock=clock, id_generator=ids)

        assert reloaded.current_user == profiles.current_user
        assert reloaded.current_user.dietary_restrictions == {"vegetarian"}
        assert reloaded.current_user.fitness_goals[0].current_value == 12

    def test_round_trip_empty_restrictions(self, profiles, store, clock, ids):
        _create_sam(profiles)

        reloaded = ProfileStore(store, clock=clock, id_generator=ids)

        assert reloaded.current_user.dietary_restrictions == set()
        assert reloaded.current_user.fitness_goals == []

    def test_corrupt_bytes_mean_no_profile(self, store, clock, ids):
        store.save(StorageKey.PROFILE, b"{not json")

        profiles = ProfileStore(store, clock=clock, id_generator=ids)

        assert profiles.current_user is None
        assert not profiles.is_setup

    def test_failed_write_keeps_last_good_profile(self, profiles, store):
        _create_sam(profiles)
        store.fail_writes_for.add(StorageKey.PROFILE)

        assert profiles.add_dietary_restriction("vegan") is False
        assert profiles.current_user.dietary_restrictions == set()
        assert profiles.error_message is not None
        assert "profile" in profiles.error_message

    def test_failed_create_returns_none(self, profiles, store):
        store.fail_writes_for.add(StorageKey.PROFILE)

        assert _create_sam(profiles) is None
        assert profiles.current_user is None
        assert not profiles.is_setup
        assert "profile" in profiles.error_message

    def test_successful_write_clears_error(self, profiles, store):
        _create_sam(profiles)
        store.fail_writes_for.add(StorageKey.PROFILE)
        profiles.add_dietary_restriction("vegan")
        store.fail_writes_for.clear()

        assert profiles.add_dietary_restriction("vegan") is True
        assert profiles.error_message is None


class TestUpdateProfile:
    """Tests for update() and goal recomputation."""

    def test_update_recomputes_goal(self, profiles):
        _create_sam(profiles)
        edited = copy.deepcopy(profiles.current_user)
        edited.weight_kg = 80

        assert profiles.update(edited) is True
        assert profiles.daily_calorie_goal == 2710

    def test_update_goal_change(self, profiles):
        _create_sam(profiles)
        edited = copy.deepcopy(profiles.current_user)
        edited.dietary_goal = DietaryGoal.LOSE_WEIGHT

        profiles.update(edited)

        assert profiles.daily_calorie_goal == 2055

    def test_update_does_not_alias_caller_object(self, profiles):
        _create_sam(profiles)
        edited = copy.deepcopy(profiles.current_user)
        profiles.update(edited)
        edited.name = "Changed later"

        assert profiles.current_user.name == "Sam"

    def test_update_keeps_id(self, profiles):
        profile = _create_sam(profiles)
        edited = copy.deepcopy(profile)
        edited.id = ""

        profiles.update(edited)

        assert profiles.current_user.id == profile.id


class TestFitnessGoals:
    """Tests for fitness goal add/remove/update."""

    def test_add_assigns_id(self, profiles):
        _create_sam(profiles)

        assert profiles.add_fitness_goal(FitnessGoal(name="Squat", target_value=140, unit="kg"))
        goal = profiles.current_user.fitness_goals[0]
        assert goal.id

    def test_duplicate_goal_id_rejected(self, profiles):
        _create_sam(profiles)
        goal = FitnessGoal(name="Squat", target_value=140, unit="kg", id="goal-1")
        profiles.add_fitness_goal(goal)

        assert profiles.add_fitness_goal(goal) is False
        assert len(profiles.current_user.fitness_goals) == 1

    def test_update_goal(self, profiles):
        _create_sam(profiles)
        profiles.add_fitness_goal(FitnessGoal(name="Run", target_value=100, unit="km", id="goal-1"))

        updated = FitnessGoal(name="Run", target_value=100, unit="km", current_value=60, id="goal-1")

        assert profiles.update_fitness_goal(updated)
        assert profiles.current_user.fitness_goals[0].progress == 0.6

    def test_update_unknown_goal(self, profiles):
        _create_sam(profiles)

        assert profiles.update_fitness_goal(FitnessGoal(name="x", target_value=1, unit="u", id="nope")) is False

    def test_remove_goal(self, profiles):
        _create_sam(profiles)
        profiles.add_fitness_goal(FitnessGoal(name="Run", target_value=100, unit="km", id="goal-1"))

        assert profiles.remove_fitness_goal("goal-1")
        assert profiles.current_user.fitness_goals == []
        assert profiles.remove_fitness_goal("goal-1") is False

    def test_goal_ops_without_profile(self, profiles):
        assert profiles.add_fitness_goal(FitnessGoal(name="Run", target_value=1, unit="km")) is False
        assert profiles.remove_fitness_goal("any") is False


class TestDietaryRestrictions:
    """Dietary restrictions behave as a set."""

    def test_add_and_remove(self, profiles):
        _create_sam(profiles)

        assert profiles.add_dietary_restriction("gluten-free")
        assert profiles.add_dietary_restriction("gluten-free") is False
        assert profiles.current_user.dietary_restrictions == {"gluten-free"}

        assert profiles.remove_dietary_restriction("gluten-free")
        assert profiles.remove_dietary_restriction("gluten-free") is False

    def test_without_profile(self, profiles):
        assert profiles.add_dietary_restriction("vegan") is False


class TestReset:
    """Tests for reset()."""

    def test_reset_clears_profile_and_storage(self, profiles, store, clock, ids):
        _create_sam(profiles)

        profiles.reset()

        assert profiles.current_user is None
        assert store.load(StorageKey.PROFILE) is None
        assert ProfileStore(store, clock=clock, id_generator=ids).current_user is None
