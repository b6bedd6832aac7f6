"""
Undo ledger tests - single pending entry per record, lazy expiry, and the
update/undo round trip through the record store.
"""

import pytest
from datetime import timedelta

from docclass.core.errors import NoUndoAvailableError, UndoExpiredError
from docclass.core.store import RecordStore
from docclass.core.undo import UndoLedger


@pytest.fixture
def store(clock, sample_entries):
    store = RecordStore(clock=clock)
    store.load_seed(sample_entries)
    return store


@pytest.fixture
def ledger(clock):
    """Create a fresh ledger with the reference 30 second window."""
    return UndoLedger(ttl_seconds=30, clock=clock)


@pytest.fixture
def record_id(store):
    return store.list()[0].id


def update_and_record(store, ledger, record_id, fields):
    record, snapshot = store.apply_update(record_id, fields)
    ledger.record(record_id, snapshot)
    return record


class TestUndoLedger:

    def test_record_and_size(self, ledger, store, record_id):
        assert ledger.size() == 0

        ledger.record(record_id, store.get(record_id))

        assert ledger.size() == 1
        assert len(ledger) == 1
        assert ledger.has_pending(record_id)

    def test_new_entry_replaces_old(self, ledger, store, record_id):
        update_and_record(store, ledger, record_id, {"document_name": "B"})
        update_and_record(store, ledger, record_id, {"document_name": "C"})

        assert ledger.size() == 1
        snapshot = ledger.undo(record_id)
        # only the most recent pre-update state is kept
        assert snapshot.document_name == "B"

    def test_undo_without_entry(self, ledger, record_id):
        with pytest.raises(NoUndoAvailableError):
            ledger.undo(record_id)

    def test_undo_consumes_entry(self, ledger, store, record_id):
        ledger.record(record_id, store.get(record_id))

        ledger.undo(record_id)

        assert ledger.size() == 0
        with pytest.raises(NoUndoAvailableError):
            ledger.undo(record_id)

    def test_expired_undo_is_rejected_and_cleared(self, ledger, store, record_id, clock):
        ledger.record(record_id, store.get(record_id))
        clock.advance(31)

        with pytest.raises(UndoExpiredError):
            ledger.undo(record_id)

        assert ledger.size() == 0
        with pytest.raises(NoUndoAvailableError):
            ledger.undo(record_id)

    def test_undo_at_exact_ttl_is_allowed(self, ledger, store, record_id, clock):
        ledger.record(record_id, store.get(record_id))
        clock.advance(30)

        assert ledger.undo(record_id).id == record_id

    def test_explicit_now_and_ttl(self, ledger, store, record_id, clock):
        entry = ledger.record(record_id, store.get(record_id))

        with pytest.raises(UndoExpiredError):
            ledger.undo(record_id, now=entry.recorded_at + timedelta(seconds=6), ttl=5)

    def test_expired_entries_linger_until_touched(self, ledger, store, record_id, clock):
        ledger.record(record_id, store.get(record_id))
        clock.advance(120)

        # no background sweep
        assert ledger.size() == 1
        assert not ledger.has_pending(record_id)

    def test_ledger_holds_copy_of_snapshot(self, ledger, store, record_id):
        snapshot = store.get(record_id)
        ledger.record(record_id, snapshot)

        snapshot.document_name = "changed after recording"
        snapshot.classifications.clear()

        restored = ledger.undo(record_id)
        assert restored.document_name == "invoice_001.pdf"
        assert len(restored.classifications) == 1

    def test_default_ttl_from_config(self):
        assert UndoLedger().ttl_seconds == 30


class TestUndoRoundTrip:

    def test_undo_restores_previous_name(self, ledger, store, record_id):
        update_and_record(store, ledger, record_id, {"document_name": "B"})

        restored = store.restore(record_id, ledger.undo(record_id))

        assert restored.document_name == "invoice_001.pdf"
        with pytest.raises(NoUndoAvailableError):
            ledger.undo(record_id)

    def test_undo_restores_classifications(self, ledger, store, record_id):
        update_and_record(store, ledger, record_id, {
            "classifications": [{"label": "receipt", "score": 0.99}]
        })

        restored = store.restore(record_id, ledger.undo(record_id))

        assert [c.to_dict() for c in restored.classifications] == [{"label": "invoice", "score": 0.9}]

    def test_provenance_survives_undo(self, ledger, store, record_id, clock):
        assert store.get(record_id).manually_edited is False

        update_and_record(store, ledger, record_id, {"document_name": "B"})
        assert store.get(record_id).manually_edited is True

        clock.advance(2)
        restored = store.restore(record_id, ledger.undo(record_id))

        assert restored.manually_edited is True
        assert restored.updated_at == clock.now

    def test_undo_after_expiry_leaves_record_as_updated(self, ledger, store, record_id, clock):
        update_and_record(store, ledger, record_id, {"document_name": "B"})
        clock.advance(45)

        with pytest.raises(UndoExpiredError):
            ledger.undo(record_id)

        assert store.get(record_id).document_name == "B"

    def test_undo_is_per_record(self, ledger, store):
        first, second = [r.id for r in store.list()[:2]]
        update_and_record(store, ledger, first, {"document_name": "first-B"})
        update_and_record(store, ledger, second, {"document_name": "second-B"})

        store.restore(first, ledger.undo(first))

        assert store.get(first).document_name == "invoice_001.pdf"
        assert store.get(second).document_name == "second-B"
        assert ledger.has_pending(second)
