"""
Query engine over a snapshot of classification records.

Stages run in a fixed order: type filter, confidence range filter, sort,
pagination. Nothing here mutates the records it is given.
"""

import math
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .config import get_default_page_limit
from .errors import InvalidInputError
from .schema import ClassificationRecord

SORT_FIELDS = ("name", "confidence", "updated")


@dataclass
class QueryParams:
    type: Optional[str] = None
    min_confidence: Optional[float] = None
    max_confidence: Optional[float] = None
    sort: Optional[str] = None
    order: str = "asc"
    page: int = 1
    limit: int = field(default_factory=get_default_page_limit)


@dataclass
class QueryResult:
    page: List[ClassificationRecord]
    pagination: Dict[str, int]


def matches_type(record: ClassificationRecord, type_filter: str) -> bool:
    """Any label contains the filter as a case-insensitive substring."""
    needle = type_filter.casefold()
    return any(needle in c.label.casefold() for c in record.classifications)


def matches_confidence(record: ClassificationRecord,
                       min_confidence: Optional[float],
                       max_confidence: Optional[float]) -> bool:
    """Each bound is checked on its own, possibly against different labels."""
    scores = [c.score for c in record.classifications]
    if min_confidence is not None and not any(s >= min_confidence for s in scores):
        return False
    if max_confidence is not None and not any(s <= max_confidence for s in scores):
        return False
    return True


def name_sort_key(name: str):
    """Collation-style key: accents, then case (lowercase first), only break ties."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name.casefold(), name.swapcase())


SORT_KEYS: Dict[str, Callable[[ClassificationRecord], Any]] = {
    "name": lambda r: name_sort_key(r.document_name),
    "confidence": lambda r: r.max_score,
    "updated": lambda r: r.updated_at,
}


def sort_records(records: List[ClassificationRecord], sort: Optional[str],
                 order: str = "asc") -> List[ClassificationRecord]:
    """Stable sort; unknown sort fields leave the order unchanged."""
    key = SORT_KEYS.get(sort) if sort else None
    if key is None:
        return list(records)
    return sorted(records, key=key, reverse=(order == "desc"))


def paginate(records: List[ClassificationRecord], page: int, limit: int):
    if limit < 1:
        raise InvalidInputError("limit must be >= 1")

    total = len(records)
    pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
    }
    if page < 1:
        return [], pagination

    start = (page - 1) * limit
    return records[start:start + limit], pagination


def query(records: Sequence[ClassificationRecord], params: QueryParams = None) -> QueryResult:
    """Filter, sort and page a record snapshot."""
    params = params or QueryParams()
    results = list(records)

    if params.type:
        results = [r for r in results if matches_type(r, params.type)]

    if params.min_confidence is not None or params.max_confidence is not None:
        results = [
            r for r in results
            if matches_confidence(r, params.min_confidence, params.max_confidence)
        ]

    results = sort_records(results, params.sort, params.order)
    page, pagination = paginate(results, params.page, params.limit)
    return QueryResult(page=page, pagination=pagination)
