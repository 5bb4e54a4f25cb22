"""
Fitness Ledger.

Owns the completed workouts and the live session, and derives the
fitness analytics: calorie-burn estimates, per-day and rolling totals,
favorite workout type and workout streaks.
"""

import copy
import logging
import math
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from .catalog import SAMPLE_EXERCISES, demo_workouts
from .errors import InvalidOperation
from .ledger import DayLike, Ledger
from .models import (
    Exercise,
    FitnessTotals,
    MonthlyFitnessSummary,
    StreakSummary,
    Workout,
    WorkoutType,
)
from .session import WorkoutSession
from .storage import StorageKey, decode_workouts, encode_workouts

logger = logging.getLogger(__name__)

WEEK_DAYS = 7

DEFAULT_FAVORITE_TYPE = WorkoutType.CARDIO


def estimate_calories(workout: Workout) -> int:
    """
    Estimate kcal burned by a workout.

    The workout type sets a base kcal/min rate, each exercise with an
    explicit ``calories_per_minute`` adds its rate on top, and the sum is
    multiplied by the duration in minutes and floored.
    """
    if workout.duration_sec <= 0:
        return 0
    minutes = workout.duration_sec / 60
    exercise_rates = sum(
        e.calories_per_minute for e in workout.exercises if e.calories_per_minute is not None
    )
    rate = workout.workout_type.base_calories_per_minute + exercise_rates
    return max(math.floor(minutes * rate), 0)


def sum_workouts(workouts: Sequence[Workout]) -> FitnessTotals:
    return FitnessTotals(
        workout_count=len(workouts),
        calories_burned=sum(w.total_calories_burned for w in workouts),
        duration_sec=sum(w.duration_sec for w in workouts),
    )


def consecutive_run(days: Sequence[date]) -> int:
    """Longest run of consecutive dates in a collection of distinct days."""
    longest = 0
    run = 0
    previous: Optional[date] = None
    for day in sorted(days):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest


class FitnessLedger(Ledger[Workout]):
    """
    Workout collection, the live session and fitness analytics.

    Weekly and monthly windows are anchored to ``selected_date``; the
    current streak is anchored to the real today from the clock.
    """

    storage_key = StorageKey.WORKOUTS
    tag = "[FITNESS]"

    def __init__(self, *args, session: Optional[WorkoutSession] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session or WorkoutSession(clock=self._clock, id_generator=self._new_id)

    def _encode(self, records: List[Workout]) -> bytes:
        return encode_workouts(records)

    def _decode(self, data: bytes) -> List[Workout]:
        return decode_workouts(data)

    def _demo_records(self) -> List[Workout]:
        return demo_workouts(self._clock(), self.days, self._new_id)

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    @property
    def workouts(self) -> List[Workout]:
        return list(self._records)

    @property
    def todays_workouts(self) -> List[Workout]:
        return list(self._today)

    @property
    def available_exercises(self) -> List[Exercise]:
        return copy.deepcopy(list(SAMPLE_EXERCISES))

    def add_workout(self, workout: Workout) -> bool:
        added = self._add(workout)
        if added:
            logger.info(
                f"[FITNESS] Logged {workout.workout_type.value} '{workout.name}': "
                f"{workout.formatted_duration}, {workout.total_calories_burned} kcal"
            )
        return added

    def update_workout(self, workout: Workout) -> bool:
        return self._update(workout)

    def delete_workout(self, workout_id: str) -> bool:
        return self._delete(workout_id)

    def add_quick_workout(self, name: str, workout_type: WorkoutType, duration_sec: float) -> Workout:
        """Log a finished workout on the selected date without a live session."""
        workout = Workout(
            name=name,
            workout_type=workout_type,
            date=self.selected_date,
            duration_sec=duration_sec,
            id=self._new_id(),
        )
        workout.total_calories_burned = estimate_calories(workout)
        self.add_workout(workout)
        return workout

    def duplicate_workout(self, workout: Workout) -> Workout:
        copy_ = Workout(
            name=f"{workout.name} (Copy)",
            workout_type=workout.workout_type,
            exercises=copy.deepcopy(workout.exercises),
            date=self.selected_date,
            duration_sec=workout.duration_sec,
            total_calories_burned=workout.total_calories_burned,
            notes=workout.notes,
            id=self._new_id(),
        )
        self.add_workout(copy_)
        return copy_

    def clear_all_workouts(self) -> None:
        self._clear()

    def reset_to_defaults(self) -> None:
        """Reseed demo workouts, move the cursor to today and drop any live session."""
        self._reset()
        self.session.cancel()

    # ------------------------------------------------------------------
    # Live session
    # ------------------------------------------------------------------

    @property
    def active_workout(self) -> Optional[Workout]:
        return self.session.active_workout

    @property
    def is_session_active(self) -> bool:
        return self.session.is_active

    @property
    def current_session_duration(self) -> float:
        return self.session.elapsed_sec

    def start_session(self, name: str, workout_type: WorkoutType) -> Workout:
        """
        Start timing a workout.

        Raises:
            SessionAlreadyActive: If a session is already running
        """
        with self._lock:
            return self.session.start(name, workout_type)

    def add_exercise_to_session(self, exercise: Exercise) -> bool:
        with self._lock:
            return self.session.add_exercise(copy.deepcopy(exercise))

    def end_session(self) -> Optional[Workout]:
        """
        Finish the live session, estimate its burn and log it.

        Returns:
            The stored workout, or None if no session was active
        """
        with self._lock:
            workout = self.session.finish()
            if workout is None:
                logger.info(f"[FITNESS] {InvalidOperation('end_session without an active session')}")
                return None
            workout.total_calories_burned = estimate_calories(workout)
            self.add_workout(workout)
            return workout

    def cancel_session(self) -> bool:
        """Discard the live session without persisting anything."""
        with self._lock:
            cancelled = self.session.cancel()
            if not cancelled:
                logger.info(f"[FITNESS] {InvalidOperation('cancel_session without an active session')}")
            return cancelled

    def estimate_calories(self, workout: Workout) -> int:
        return estimate_calories(workout)

    # ------------------------------------------------------------------
    # Day totals
    # ------------------------------------------------------------------

    def daily_totals(self, when: DayLike) -> FitnessTotals:
        return sum_workouts(self._on_day(self._records, when))

    @property
    def todays_total_calories_burned(self) -> int:
        return sum(w.total_calories_burned for w in self._today)

    @property
    def todays_total_workout_time(self) -> float:
        return sum(w.duration_sec for w in self._today)

    @property
    def todays_workout_count(self) -> int:
        return len(self._today)

    def workouts_by_type(self, workout_type: WorkoutType) -> List[Workout]:
        return [w for w in self._today if w.workout_type == workout_type]

    def calories_burned_by_type(self, workout_type: WorkoutType) -> int:
        return sum(w.total_calories_burned for w in self.workouts_by_type(workout_type))

    # ------------------------------------------------------------------
    # Rolling analytics
    # ------------------------------------------------------------------

    def _week(self) -> List[Workout]:
        window = self.days.window(self.selected_date, WEEK_DAYS)
        return self._between(window[0], window[-1])

    def weekly_totals(self) -> FitnessTotals:
        """Totals over the 7 calendar days ending on the selected date."""
        return sum_workouts(self._week())

    def weekly_workout_count(self) -> int:
        return len(self._week())

    def weekly_calories_burned(self) -> int:
        return sum(w.total_calories_burned for w in self._week())

    def weekly_workout_time(self) -> float:
        return sum(w.duration_sec for w in self._week())

    def monthly_summary(self) -> MonthlyFitnessSummary:
        first, last = self.days.month_window(self.selected_date)
        totals = sum_workouts(self._between(first, last))
        return MonthlyFitnessSummary(start=first, end=last, **totals.model_dump())

    def favorite_type(self) -> WorkoutType:
        """
        Most frequent workout type across all history.

        Ties go to the type that appears first in the collection; with no
        workouts the default is cardio.
        """
        counts: Dict[WorkoutType, int] = {}
        for workout in self._records:
            counts[workout.workout_type] = counts.get(workout.workout_type, 0) + 1
        favorite = DEFAULT_FAVORITE_TYPE
        best = 0
        for workout_type, count in counts.items():
            if count > best:
                favorite, best = workout_type, count
        return favorite

    # ------------------------------------------------------------------
    # Streaks
    # ------------------------------------------------------------------

    def _workout_days(self) -> List[date]:
        return self.days.distinct_days(w.date for w in self._records)

    def current_streak(self) -> int:
        """
        Consecutive days with a workout, counting back from today.

        Today must have a workout for the streak to be non-zero.
        """
        workout_days = set(self._workout_days())
        day = self.days.day_of(self._clock())
        streak = 0
        while day in workout_days:
            streak += 1
            day -= timedelta(days=1)
        return streak

    def longest_streak(self) -> int:
        return consecutive_run(self._workout_days())

    def streak_summary(self) -> StreakSummary:
        workout_days = self._workout_days()
        return StreakSummary(
            current_streak=self.current_streak(),
            longest_streak=consecutive_run(workout_days),
            last_workout_date=workout_days[0] if workout_days else None,
        )

    # ------------------------------------------------------------------
    # Lifetime totals
    # ------------------------------------------------------------------

    def total_workouts_completed(self) -> int:
        return len(self._records)

    def total_calories_burned(self) -> int:
        return sum(w.total_calories_burned for w in self._records)

    def total_time_worked_out(self) -> float:
        return sum(w.duration_sec for w in self._records)
