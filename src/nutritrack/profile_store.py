"""
Profile Store.

Owns the single local UserProfile: creation during setup, in-place
updates, fitness goals, dietary restrictions and the derived values
(BMI, daily calorie goal). Every change is persisted immediately.
"""

import copy
import logging
import threading
from typing import Optional

from .dates import Clock, utc_now
from .errors import PersistFailure
from .ids import IdGenerator, UUIDGenerator
from .models import (
    ActivityLevel,
    BMICategory,
    DietaryGoal,
    FitnessGoal,
    UserProfile,
    bmi_category,
)
from .storage import PersistenceGateway, StorageKey, decode_profile, encode_profile, try_decode

logger = logging.getLogger(__name__)

DEFAULT_CALORIE_GOAL = 2000


class ProfileStore:
    """
    Holds the current profile, or None before setup / after reset.

    Mutations work on a copy and only replace ``current_user`` once the
    copy has been written, so a failed write leaves the last good
    profile in place and sets ``error_message``.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        default_calorie_goal: int = DEFAULT_CALORIE_GOAL,
    ):
        """
        Initialize the store and load any persisted profile.

        Args:
            gateway: Byte store holding the ``profile`` blob
            clock: Returns the current instant (used for join dates)
            id_generator: Produces ids for new profiles and fitness goals
            default_calorie_goal: Goal reported while no profile exists
        """
        self._gateway = gateway
        self._clock = clock or utc_now
        self._new_id = id_generator or UUIDGenerator()
        self._lock = threading.RLock()
        self.default_calorie_goal = default_calorie_goal

        self.current_user: Optional[UserProfile] = None
        self.error_message: Optional[str] = None

        self.load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> Optional[UserProfile]:
        """Load the persisted profile; missing or corrupt bytes mean no profile."""
        with self._lock:
            data = self._gateway.load(StorageKey.PROFILE)
            self.current_user = try_decode(decode_profile, StorageKey.PROFILE, data)
            if self.current_user:
                logger.info(f"[PROFILE] Loaded profile for {self.current_user.name}")
            else:
                logger.info("[PROFILE] No profile stored")
            return self.current_user

    def _commit(self, profile: UserProfile) -> bool:
        """Persist ``profile`` and make it current if the write succeeds."""
        profile.recalculate_calorie_goal()
        if not self._gateway.save(StorageKey.PROFILE, encode_profile(profile)):
            failure = PersistFailure(StorageKey.PROFILE.value)
            self.error_message = str(failure)
            logger.warning(f"[PROFILE] {failure}; keeping last saved profile")
            return False
        self.current_user = profile
        self.error_message = None
        return True

    def _working_copy(self) -> Optional[UserProfile]:
        if self.current_user is None:
            logger.debug("[PROFILE] No profile to modify")
            return None
        return copy.deepcopy(self.current_user)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        age: int,
        height_cm: float,
        weight_kg: float,
        activity_level: ActivityLevel,
        dietary_goal: DietaryGoal,
    ) -> Optional[UserProfile]:
        """
        Create and persist the user profile.

        Returns:
            The new (now current) profile, or None if the write failed
        """
        with self._lock:
            profile = UserProfile(
                name=name,
                age=age,
                height_cm=height_cm,
                weight_kg=weight_kg,
                activity_level=activity_level,
                dietary_goal=dietary_goal,
                join_date=self._clock(),
                id=self._new_id(),
            )
            if not self._commit(profile):
                logger.warning(f"[PROFILE] Profile for {name} was not created")
                return None
            logger.info(
                f"[PROFILE] Created profile for {name}: "
                f"goal={profile.daily_calorie_goal_kcal} kcal/day"
            )
            return profile

    def create_demo_profile(self) -> Optional[UserProfile]:
        return self.create(
            name="Demo User",
            age=28,
            height_cm=175,
            weight_kg=70,
            activity_level=ActivityLevel.MODERATELY_ACTIVE,
            dietary_goal=DietaryGoal.MAINTAIN_WEIGHT,
        )

    def update(self, profile: UserProfile) -> bool:
        """Replace the profile, recomputing the calorie goal from its inputs."""
        with self._lock:
            updated = copy.deepcopy(profile)
            if not updated.id:
                updated.id = self.current_user.id if self.current_user else self._new_id()
            previous_goal = self.current_user.daily_calorie_goal_kcal if self.current_user else None
            if not self._commit(updated):
                return False
            if previous_goal != updated.daily_calorie_goal_kcal:
                logger.info(
                    f"[PROFILE] Calorie goal {previous_goal} -> {updated.daily_calorie_goal_kcal} kcal"
                )
            return True

    def reset(self) -> None:
        """Forget the profile and delete its persisted bytes."""
        with self._lock:
            self._gateway.delete(StorageKey.PROFILE)
            self.current_user = None
            self.error_message = None
            logger.info("[PROFILE] Profile reset")

    # ------------------------------------------------------------------
    # Fitness goals
    # ------------------------------------------------------------------

    def add_fitness_goal(self, goal: FitnessGoal) -> bool:
        with self._lock:
            profile = self._working_copy()
            if profile is None:
                return False
            goal = copy.deepcopy(goal)
            if not goal.id:
                goal.id = self._new_id()
            if any(g.id == goal.id for g in profile.fitness_goals):
                logger.warning(f"[PROFILE] Fitness goal {goal.id} already exists")
                return False
            profile.fitness_goals.append(goal)
            if self._commit(profile):
                logger.info(f"[PROFILE] Added fitness goal: {goal.name} ({goal.target_value} {goal.unit})")
                return True
            return False

    def remove_fitness_goal(self, goal_id: str) -> bool:
        with self._lock:
            profile = self._working_copy()
            if profile is None:
                return False
            remaining = [g for g in profile.fitness_goals if g.id != goal_id]
            if len(remaining) == len(profile.fitness_goals):
                return False
            profile.fitness_goals = remaining
            return self._commit(profile)

    def update_fitness_goal(self, goal: FitnessGoal) -> bool:
        """Replace the goal with the same id; unknown ids are ignored."""
        with self._lock:
            profile = self._working_copy()
            if profile is None:
                return False
            for index, existing in enumerate(profile.fitness_goals):
                if existing.id == goal.id:
                    profile.fitness_goals[index] = copy.deepcopy(goal)
                    return self._commit(profile)
            return False

    # ------------------------------------------------------------------
    # Dietary restrictions
    # ------------------------------------------------------------------

    def add_dietary_restriction(self, restriction: str) -> bool:
        with self._lock:
            profile = self._working_copy()
            if profile is None or restriction in profile.dietary_restrictions:
                return False
            profile.dietary_restrictions.add(restriction)
            return self._commit(profile)

    def remove_dietary_restriction(self, restriction: str) -> bool:
        with self._lock:
            profile = self._working_copy()
            if profile is None or restriction not in profile.dietary_restrictions:
                return False
            profile.dietary_restrictions.discard(restriction)
            return self._commit(profile)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_setup(self) -> bool:
        return self.current_user is not None

    @property
    def daily_calorie_goal(self) -> int:
        if self.current_user is None:
            return self.default_calorie_goal
        return self.current_user.daily_calorie_goal_kcal

    def bmi(self) -> Optional[float]:
        """Body mass index, or None without a profile."""
        if self.current_user is None:
            return None
        return self.current_user.bmi

    def bmi_category(self) -> BMICategory:
        return bmi_category(self.bmi())
