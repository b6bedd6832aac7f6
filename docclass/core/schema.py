"""
Record types for the classification store.
Only the structural shape of classification payloads is checked here.
"""

import copy
import math
from dataclasses import dataclass
from datetime import datetime
from numbers import Real
from typing import Any, Dict, List, Mapping

from .errors import InvalidInputError


@dataclass
class ClassificationLabel:
    label: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "score": self.score}

    @classmethod
    def from_dict(cls, data: Any) -> "ClassificationLabel":
        """Build a label from a {label, score} mapping."""
        if not isinstance(data, Mapping):
            raise InvalidInputError("Each classification must be an object with label and score")

        label = data.get("label")
        score = data.get("score")
        if not isinstance(label, str):
            raise InvalidInputError("Classification label must be a string")
        # bool is a Real subclass, reject it explicitly
        if isinstance(score, bool) or not isinstance(score, Real):
            raise InvalidInputError(f"Classification score for '{label}' must be a number")
        try:
            finite = math.isfinite(score)
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidInputError(f"Classification score for '{label}' must be a finite number")

        # ints are kept as supplied so they round-trip unchanged
        if not isinstance(score, (int, float)):
            score = float(score)
        return cls(label=label, score=score)


def parse_labels(value: Any) -> List[ClassificationLabel]:
    """Parse a list of label mappings, preserving order."""
    if not isinstance(value, (list, tuple)):
        raise InvalidInputError("classifications must be an array")
    return [ClassificationLabel.from_dict(item) for item in value]


def parse_document_name(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidInputError("document_name must be a string")
    return value


@dataclass
class DocumentEntry:
    """Caller-supplied document before the store assigns identity."""
    document_name: str
    classifications: List[ClassificationLabel]

    @classmethod
    def from_dict(cls, data: Any) -> "DocumentEntry":
        if not isinstance(data, Mapping):
            raise InvalidInputError("Each entry must be an object with document_name and classifications")
        return cls(
            document_name=parse_document_name(data.get("document_name")),
            classifications=parse_labels(data.get("classifications")),
        )


@dataclass
class ClassificationRecord:
    id: str
    document_name: str
    classifications: List[ClassificationLabel]
    manually_edited: bool
    created_at: datetime
    updated_at: datetime

    @property
    def max_score(self) -> float:
        """Highest label score, negative infinity when there are no labels."""
        return max((c.score for c in self.classifications), default=float("-inf"))

    def snapshot(self) -> "ClassificationRecord":
        """Fully independent copy, including the classifications list."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "id": self.id,
            "document_name": self.document_name,
            "classifications": [c.to_dict() for c in self.classifications],
            "manually_edited": self.manually_edited,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassificationRecord":
        """Create from the wire representation."""
        return cls(
            id=data["id"],
            document_name=data["document_name"],
            classifications=parse_labels(data["classifications"]),
            manually_edited=bool(data["manually_edited"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )


@dataclass
class UndoEntry:
    record_id: str
    snapshot: ClassificationRecord
    recorded_at: datetime
    consumed: bool = False

    def age_seconds(self, now: datetime) -> float:
        return (now - self.recorded_at).total_seconds()

    def is_expired(self, now: datetime, ttl_seconds: float) -> bool:
        return self.age_seconds(now) > ttl_seconds
