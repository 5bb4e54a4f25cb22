"""
Pytest fixtures for NutriTrack engine tests.
"""
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure src/ is on sys.path so tests can import nutritrack without installing it.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Load environment variables
load_dotenv()

from nutritrack.dates import CalendarDays  # noqa: E402
from nutritrack.fitness_ledger import FitnessLedger  # noqa: E402
from nutritrack.ids import SequentialIdGenerator  # noqa: E402
from nutritrack.nutrition_ledger import NutritionLedger  # noqa: E402
from nutritrack.profile_store import ProfileStore  # noqa: E402
from nutritrack.storage import InMemoryStore  # noqa: E402

# Noon UTC keeps +/- a few hours inside the same calendar day
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)

    def days_ago(self, days: int, hours: int = 0) -> datetime:
        return self.now - timedelta(days=days) + timedelta(hours=hours)


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """A fake clock pinned to FIXED_NOW."""
    return FakeClock()


@pytest.fixture
def ids():
    """Deterministic id generator."""
    return SequentialIdGenerator("test")


@pytest.fixture
def store():
    """Empty in-memory persistence gateway."""
    return InMemoryStore()


@pytest.fixture
def days():
    return CalendarDays()


@pytest.fixture
def nutrition(store, clock, ids, days):
    """Nutrition ledger with no demo data."""
    return NutritionLedger(store, clock=clock, id_generator=ids, days=days, seed_demo_data=False)


@pytest.fixture
def fitness(store, clock, ids, days):
    """Fitness ledger with no demo data."""
    return FitnessLedger(store, clock=clock, id_generator=ids, days=days, seed_demo_data=False)


@pytest.fixture
def profiles(store, clock, ids):
    """Profile store with nothing persisted."""
    return ProfileStore(store, clock=clock, id_generator=ids)
