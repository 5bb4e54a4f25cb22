"""
Error types for the tracking engine.

Only SessionAlreadyActive is raised to callers. The other kinds are
recovered where they occur and surface as a log line plus an optional
``error_message`` on the owning store or ledger.
"""


class TrackerError(Exception):
    """Base class for all engine errors."""


class DecodeFailure(TrackerError):
    """Persisted bytes could not be decoded into the expected entity."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not decode '{key}': {reason}")


class PersistFailure(TrackerError):
    """A write to the persistence gateway failed."""

    def __init__(self, key: str, reason: str = "write rejected by store"):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to save '{key}': {reason}")


class InvalidOperation(TrackerError):
    """An operation was requested in a state where it has no effect."""


class SessionAlreadyActive(InvalidOperation):
    """A workout session is already running."""

    def __init__(self, workout_name: str):
        self.workout_name = workout_name
        super().__init__(f"Workout session '{workout_name}' is already active")
