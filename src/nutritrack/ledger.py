"""
Shared machinery for the meal and workout ledgers.

A ledger owns one persisted collection plus a ``selected_date`` cursor.
Every mutation updates memory first, then writes the whole collection
back through the gateway before returning, then refreshes the cached
"today" view for the cursor's calendar day.
"""

import copy
import logging
import threading
from datetime import date, datetime
from typing import Generic, Iterable, List, Optional, TypeVar, Union

from .dates import CalendarDays, Clock, ensure_aware, utc_now
from .errors import InvalidOperation, PersistFailure
from .ids import IdGenerator, UUIDGenerator
from .storage import PersistenceGateway, StorageKey, try_decode

logger = logging.getLogger(__name__)

T = TypeVar("T")

DayLike = Union[date, datetime]


class Ledger(Generic[T]):
    """
    Base class for a date-stamped, id-keyed record collection.

    Subclasses set ``storage_key`` and ``tag`` and implement the codec
    and demo-data hooks.
    """

    storage_key: StorageKey
    tag: str = "[LEDGER]"

    def __init__(
        self,
        gateway: PersistenceGateway,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        days: Optional[CalendarDays] = None,
        seed_demo_data: bool = True,
    ):
        """
        Initialize the ledger and load its collection.

        Args:
            gateway: Byte store holding this ledger's blob
            clock: Returns the current instant
            id_generator: Produces ids for new records
            days: Calendar used for same-day grouping
            seed_demo_data: Seed the demo dataset when nothing is stored
        """
        self._gateway = gateway
        self._clock = clock or utc_now
        self._new_id = id_generator or UUIDGenerator()
        self.days = days or CalendarDays()
        self.seed_demo_data = seed_demo_data
        self._lock = threading.RLock()

        self._records: List[T] = []
        self._today: List[T] = []
        self.selected_date: datetime = self._clock()
        self.error_message: Optional[str] = None

        self.load()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _encode(self, records: List[T]) -> bytes:
        raise NotImplementedError

    def _decode(self, data: bytes) -> List[T]:
        raise NotImplementedError

    def _demo_records(self) -> List[T]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Load the collection, seeding demo data when it is absent or unreadable."""
        with self._lock:
            data = self._gateway.load(self.storage_key)
            records = try_decode(self._decode, self.storage_key, data)
            if records is not None:
                # Stored dates without an offset are UTC
                for record in records:
                    record.date = ensure_aware(record.date)
                self._records = records
                logger.info(f"{self.tag} Loaded {len(records)} records")
            elif self.seed_demo_data:
                self._records = self._demo_records()
                logger.info(f"{self.tag} No stored records; seeded {len(self._records)} demo records")
                self._persist()
            else:
                self._records = []
            self._refresh_today()

    def _persist(self) -> bool:
        """Write the full collection; failure leaves memory authoritative."""
        if self._gateway.save(self.storage_key, self._encode(self._records)):
            self.error_message = None
            return True
        failure = PersistFailure(self.storage_key.value)
        self.error_message = str(failure)
        logger.warning(f"{self.tag} {failure}; in-memory records are still current")
        return False

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _add(self, record: T) -> bool:
        """Store a copy of ``record``; an empty id is filled in on the caller's object too."""
        with self._lock:
            if not record.id:
                record.id = self._new_id()
            record = copy.deepcopy(record)
            if self._index_of(record.id) is not None:
                logger.warning(f"{self.tag} {InvalidOperation(f'duplicate id {record.id}')}")
                return False
            record.date = ensure_aware(record.date)
            self._records.append(record)
            self._persist()
            self._refresh_today()
            logger.debug(f"{self.tag} Added {record.id}")
            return True

    def _update(self, record: T) -> bool:
        with self._lock:
            index = self._index_of(record.id)
            if index is None:
                logger.debug(f"{self.tag} Update ignored, unknown id {record.id}")
                return False
            record = copy.deepcopy(record)
            record.date = ensure_aware(record.date)
            self._records[index] = record
            self._persist()
            self._refresh_today()
            return True

    def _delete(self, record_id: str) -> bool:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                logger.debug(f"{self.tag} Delete ignored, unknown id {record_id}")
                return False
            del self._records[index]
            self._persist()
            self._refresh_today()
            return True

    def _clear(self) -> None:
        with self._lock:
            self._records = []
            self._persist()
            self._refresh_today()
            logger.info(f"{self.tag} Cleared all records")

    def _reset(self) -> None:
        """Replace everything with the demo dataset and move the cursor to today."""
        with self._lock:
            self._records = self._demo_records()
            self._persist()
            self.selected_date = self._clock()
            self._refresh_today()
            logger.info(f"{self.tag} Reset to defaults")

    def _index_of(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def get(self, record_id: str) -> Optional[T]:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]

    # ------------------------------------------------------------------
    # Date cursor
    # ------------------------------------------------------------------

    def _refresh_today(self) -> None:
        self._today = sorted(
            self._on_day(self._records, self.selected_date),
            key=lambda r: r.date,
        )

    def select_previous_day(self) -> None:
        self.select_date(self.days.shift_days(self.selected_date, -1))

    def select_next_day(self) -> None:
        self.select_date(self.days.shift_days(self.selected_date, 1))

    def select_today(self) -> None:
        self.select_date(self._clock())

    def select_date(self, when: datetime) -> None:
        with self._lock:
            self.selected_date = ensure_aware(when)
            self._refresh_today()

    # ------------------------------------------------------------------
    # Day filtering
    # ------------------------------------------------------------------

    def _as_day(self, when: DayLike) -> date:
        if isinstance(when, datetime):
            return self.days.day_of(when)
        return when

    def _on_day(self, records: Iterable[T], when: DayLike) -> List[T]:
        day = self._as_day(when)
        return [r for r in records if self.days.day_of(r.date) == day]

    def _between(self, first: date, last: date) -> List[T]:
        """Records whose calendar day falls in [first, last]."""
        return [r for r in self._records if first <= self.days.day_of(r.date) <= last]
