"""
Engine wiring.

Builds the persistence gateway from settings and hands the same gateway,
clock, calendar and id generator to the profile store and both ledgers.
"""

import logging
from enum import Enum
from typing import List, Optional

from .config import Settings, get_settings
from .dates import CalendarDays, Clock, resolve_timezone, utc_now
from .fitness_ledger import FitnessLedger
from .ids import IdGenerator, UUIDGenerator
from .nutrition_ledger import NutritionLedger
from .profile_store import ProfileStore
from .storage import FileStore, InMemoryStore, PersistenceGateway, SQLiteStore

logger = logging.getLogger(__name__)


class AppFlow(str, Enum):
    """Top-level flow the host application should show."""

    ONBOARDING = "onboarding"
    MAIN = "main"


def build_gateway(settings: Settings) -> PersistenceGateway:
    """Create the store selected by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        return InMemoryStore()
    if settings.store_backend == "file":
        return FileStore(settings.file_store_dir)
    return SQLiteStore(settings.sqlite_path)


class TrackerEngine:
    """The profile store and both ledgers, sharing one gateway and clock."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gateway: Optional[PersistenceGateway] = None,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        """
        Initialize the engine.

        Args:
            settings: Engine settings (defaults to environment settings)
            gateway: Byte store (defaults to the one named in settings)
            clock: Returns the current instant
            id_generator: Produces record ids
        """
        self.settings = settings or get_settings()
        self.gateway = gateway or build_gateway(self.settings)
        self.clock = clock or utc_now
        self.days = CalendarDays(resolve_timezone(self.settings.timezone))
        ids = id_generator or UUIDGenerator()

        self.profile = ProfileStore(
            self.gateway,
            clock=self.clock,
            id_generator=ids,
            default_calorie_goal=self.settings.default_calorie_goal,
        )
        self.nutrition = NutritionLedger(
            self.gateway,
            clock=self.clock,
            id_generator=ids,
            days=self.days,
            seed_demo_data=self.settings.seed_demo_data,
        )
        self.fitness = FitnessLedger(
            self.gateway,
            clock=self.clock,
            id_generator=ids,
            days=self.days,
            seed_demo_data=self.settings.seed_demo_data,
        )

        logger.info(
            f"[ENGINE] Ready: backend={type(self.gateway).__name__}, "
            f"tz={self.settings.timezone}, flow={self.flow.value}"
        )

    @property
    def flow(self) -> AppFlow:
        return AppFlow.MAIN if self.profile.is_setup else AppFlow.ONBOARDING

    @property
    def warnings(self) -> List[str]:
        """Pending non-fatal error messages from every owner."""
        owners = (self.profile, self.nutrition, self.fitness)
        return [owner.error_message for owner in owners if owner.error_message]

    def select_previous_day(self) -> None:
        self.nutrition.select_previous_day()
        self.fitness.select_previous_day()

    def select_next_day(self) -> None:
        self.nutrition.select_next_day()
        self.fitness.select_next_day()

    def select_today(self) -> None:
        self.nutrition.select_today()
        self.fitness.select_today()

    def reset(self) -> None:
        """Clear the profile and restore both ledgers to the demo dataset."""
        self.profile.reset()
        self.nutrition.reset_to_defaults()
        self.fitness.reset_to_defaults()
        logger.info("[ENGINE] App state reset")
