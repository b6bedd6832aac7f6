"""
Undo ledger - at most one pending reversal per record, expiring after a fixed window.

Expiry is checked lazily when an undo is requested; nothing sweeps the ledger.
"""

from datetime import datetime
from typing import Callable, Dict, Optional

from .config import get_undo_ttl
from .errors import NoUndoAvailableError, UndoExpiredError
from .schema import ClassificationRecord, UndoEntry
from .store import utc_now
from util.logging import logger


class UndoLedger:
    """Holds the latest pre-update snapshot for each edited record."""

    def __init__(self, ttl_seconds: float = None, clock: Callable[[], datetime] = utc_now):
        self.ttl_seconds = get_undo_ttl() if ttl_seconds is None else ttl_seconds
        self._entries: Dict[str, UndoEntry] = {}
        self._clock = clock

    def record(self, record_id: str, snapshot: ClassificationRecord) -> UndoEntry:
        """Store a snapshot, replacing any earlier entry for the record."""
        replaced = record_id in self._entries
        entry = UndoEntry(
            record_id=record_id,
            snapshot=snapshot.snapshot(),
            recorded_at=self._clock(),
        )
        self._entries[record_id] = entry

        logger.log_undo(record_id, "recorded", {"replaced": replaced, "ttl_sec": self.ttl_seconds})
        return entry

    def undo(self, record_id: str, now: Optional[datetime] = None,
             ttl: Optional[float] = None) -> ClassificationRecord:
        """Consume the pending entry and return its snapshot.

        Raises NoUndoAvailableError when nothing is pending and
        UndoExpiredError when the entry is older than the ttl. Both
        leave no entry behind for the record.
        """
        now = now or self._clock()
        ttl = self.ttl_seconds if ttl is None else ttl

        entry = self._entries.pop(record_id, None)
        if entry is None:
            logger.log_undo(record_id, "unavailable")
            raise NoUndoAvailableError(record_id)

        entry.consumed = True
        if entry.is_expired(now, ttl):
            logger.log_undo(record_id, "expired", {"age_sec": round(entry.age_seconds(now), 3)})
            raise UndoExpiredError(record_id, ttl)

        logger.log_undo(record_id, "applied", {"age_sec": round(entry.age_seconds(now), 3)})
        return entry.snapshot.snapshot()

    def has_pending(self, record_id: str, now: Optional[datetime] = None) -> bool:
        """Whether an unexpired entry exists; does not consume or expire anything."""
        entry = self._entries.get(record_id)
        if entry is None:
            return False
        return not entry.is_expired(now or self._clock(), self.ttl_seconds)

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
