"""
Shared fixtures: a controllable clock and sample classification payloads.
"""

import pytest
from datetime import datetime, timedelta, timezone


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_entries():
    return [
        {
            "document_name": "invoice_001.pdf",
            "classifications": [{"label": "invoice", "score": 0.9}],
        },
        {
            "document_name": "receipt_002.jpg",
            "classifications": [{"label": "receipt", "score": 0.4}],
        },
        {
            "document_name": "contract_003.pdf",
            "classifications": [
                {"label": "contract", "score": 0.7},
                {"label": "invoice", "score": 0.2},
            ],
        },
    ]
