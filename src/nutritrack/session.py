"""
Live workout session.

Tracks the single in-progress workout while it is being timed. The
session never persists anything itself; ``finish`` hands the completed
workout back to the Fitness Ledger, which stores it.
"""

import logging
from datetime import datetime
from typing import Optional

from .dates import Clock, utc_now
from .errors import SessionAlreadyActive
from .ids import IdGenerator, UUIDGenerator
from .models import Exercise, Workout, WorkoutType

logger = logging.getLogger(__name__)


class WorkoutSession:
    """Holds the active (unsaved) workout and when it started."""

    def __init__(self, clock: Optional[Clock] = None, id_generator: Optional[IdGenerator] = None):
        self._clock = clock or utc_now
        self._new_id = id_generator or UUIDGenerator()
        self.active_workout: Optional[Workout] = None
        self.started_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.active_workout is not None

    @property
    def elapsed_sec(self) -> float:
        """Seconds since the session started, 0 when idle."""
        if self.started_at is None:
            return 0.0
        return max((self._clock() - self.started_at).total_seconds(), 0.0)

    def start(self, name: str, workout_type: WorkoutType) -> Workout:
        """
        Begin timing a new workout.

        Raises:
            SessionAlreadyActive: If a session is already running
        """
        if self.active_workout is not None:
            raise SessionAlreadyActive(self.active_workout.name)
        self.started_at = self._clock()
        self.active_workout = Workout(
            name=name,
            workout_type=workout_type,
            date=self.started_at,
            id=self._new_id(),
        )
        logger.info(f"[SESSION] Started '{name}' ({workout_type.value})")
        return self.active_workout

    def add_exercise(self, exercise: Exercise) -> bool:
        if self.active_workout is None:
            logger.debug(f"[SESSION] No active session; ignoring exercise {exercise.name}")
            return False
        self.active_workout.exercises.append(exercise)
        return True

    def finish(self) -> Optional[Workout]:
        """
        Stop the clock and release the workout with its duration filled in.

        Returns:
            The finished workout, or None if no session was active
        """
        if self.active_workout is None or self.started_at is None:
            return None
        workout = self.active_workout
        workout.duration_sec = self.elapsed_sec
        self._clear()
        logger.info(f"[SESSION] Finished '{workout.name}' after {workout.formatted_duration}")
        return workout

    def cancel(self) -> bool:
        """Discard the active workout. Returns False if there was none."""
        if self.active_workout is None:
            return False
        logger.info(f"[SESSION] Cancelled '{self.active_workout.name}'")
        self._clear()
        return True

    def _clear(self) -> None:
        self.active_workout = None
        self.started_at = None
