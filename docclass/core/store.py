"""
In-memory record store for classified documents.
Assigns identity, stamps edit provenance and hands out copies only.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Sequence, Set, Tuple

from .errors import InvalidInputError, NotFoundError, SeedLoadError
from .schema import ClassificationRecord, DocumentEntry, parse_document_name, parse_labels
from util.logging import logger

# Fields a caller may replace through apply_update
UPDATABLE_FIELDS = ("document_name", "classifications")

FIELD_PARSERS = {
    "document_name": parse_document_name,
    "classifications": parse_labels,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


class RecordStore:
    """Holds classification records keyed by id, in insertion order."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._records: Dict[str, ClassificationRecord] = {}
        # every id ever handed out, including ones dropped by load_seed
        self._issued_ids: Set[str] = set()
        self._clock = clock

    def _new_id(self) -> str:
        while True:
            record_id = str(uuid.uuid4())
            if record_id not in self._issued_ids:
                self._issued_ids.add(record_id)
                return record_id

    def _build_records(self, entries: Sequence[Any]) -> List[ClassificationRecord]:
        """Parse every entry before assigning ids so a bad entry rejects the batch."""
        parsed = [DocumentEntry.from_dict(entry) for entry in entries]
        now = self._clock()
        records = []
        for entry in parsed:
            record = ClassificationRecord(
                id=self._new_id(),
                document_name=entry.document_name,
                classifications=entry.classifications,
                manually_edited=False,
                created_at=now,
                updated_at=now,
            )
            self._records[record.id] = record
            records.append(record)
        return records

    def load_seed(self, raw_entries: Any) -> int:
        """Replace the whole collection with freshly stamped seed records.

        On any shape error the store is left empty and SeedLoadError is raised.
        """
        self._records = {}
        if not _is_sequence(raw_entries):
            raise SeedLoadError("Seed data must be an array of documents")

        try:
            self._build_records(raw_entries)
        except InvalidInputError as e:
            self._records = {}
            raise SeedLoadError(f"Invalid seed entry: {e}") from e

        return len(self._records)

    def ingest(self, entries: Any) -> List[ClassificationRecord]:
        """Append new records and return copies of them with their ids."""
        if not _is_sequence(entries):
            raise InvalidInputError("Request body must be an array of classifications")

        records = self._build_records(entries)
        logger.log_ingest([r.id for r in records])
        return [r.snapshot() for r in records]

    def _get_live(self, record_id: str) -> ClassificationRecord:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    def get(self, record_id: str) -> ClassificationRecord:
        return self._get_live(record_id).snapshot()

    def list(self) -> List[ClassificationRecord]:
        """Copies of every record; safe to hand to a long query pass."""
        return [r.snapshot() for r in self._records.values()]

    def apply_update(self, record_id: str,
                     fields: Mapping[str, Any]) -> Tuple[ClassificationRecord, ClassificationRecord]:
        """Replace the provided fields and mark the record as manually edited.

        Returns (updated record, snapshot taken just before the mutation).
        Keys outside UPDATABLE_FIELDS are ignored.
        """
        record = self._get_live(record_id)
        if not isinstance(fields, Mapping):
            raise InvalidInputError("Update body must be an object")

        # validate everything before touching the record
        changes = {
            name: FIELD_PARSERS[name](fields[name])
            for name in UPDATABLE_FIELDS if name in fields
        }

        snapshot = record.snapshot()
        for name, value in changes.items():
            setattr(record, name, value)
        record.manually_edited = True
        record.updated_at = self._clock()

        logger.log_record_operation(
            "update", record_id, record.document_name,
            details={"fields": sorted(changes)}
        )
        return record.snapshot(), snapshot

    def restore(self, record_id: str, snapshot: ClassificationRecord) -> ClassificationRecord:
        """Overwrite a record with a saved snapshot, refreshing updated_at.

        All fields come from the snapshot except manually_edited, which is
        OR-ed with the current value so an undo never clears it.
        """
        current = self._get_live(record_id)
        restored = snapshot.snapshot()
        restored.id = record_id
        # manually_edited is never reset once set
        restored.manually_edited = snapshot.manually_edited or current.manually_edited
        restored.updated_at = self._clock()
        self._records[record_id] = restored

        logger.log_record_operation("restore", record_id, restored.document_name)
        return restored.snapshot()

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._records
