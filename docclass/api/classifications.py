"""
Classification endpoints: list/query, ingest, read, correct and undo.

Handlers are async and never await inside the store/ledger calls, so each
update-then-record or undo-then-restore sequence runs without interleaving.
"""

from fastapi import APIRouter, Body, Depends, Query, Request
from typing import Any, Optional

from ..core.config import get_default_page_limit
from ..core.query import QueryParams, query
from ..core.store import RecordStore
from ..core.undo import UndoLedger
from .schemas import (
    ClassificationListResponse,
    ClassificationResponse,
    ClassificationUpdateRequest,
    ErrorResponse,
    IngestResponse,
    UndoResponse,
    UpdateResponse,
)

router = APIRouter()


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_ledger(request: Request) -> UndoLedger:
    return request.app.state.ledger


@router.get("", response_model=ClassificationListResponse)
async def list_classifications(
    type: Optional[str] = Query(None, description="Case-insensitive substring of any label"),
    min_confidence: Optional[float] = Query(None, description="Some label scores at least this"),
    max_confidence: Optional[float] = Query(None, description="Some label scores at most this"),
    sort: Optional[str] = Query(None, description="name, confidence or updated"),
    order: str = Query("asc", description="asc or desc"),
    page: int = Query(1, description="1-indexed page number"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    store: RecordStore = Depends(get_store),
):
    """Filtered, sorted and paginated view of the stored classifications."""
    params = QueryParams(
        type=type,
        min_confidence=min_confidence,
        max_confidence=max_confidence,
        sort=sort,
        order=order,
        page=page,
        limit=limit if limit is not None else get_default_page_limit(),
    )
    result = query(store.list(), params)

    return {
        "data": [r.to_dict() for r in result.page],
        "pagination": result.pagination,
    }


@router.post("", status_code=201, response_model=IngestResponse,
             responses={400: {"model": ErrorResponse}})
async def ingest_classifications(
    entries: Any = Body(...),
    store: RecordStore = Depends(get_store),
):
    """Append an array of {document_name, classifications} documents."""
    records = store.ingest(entries)

    return {
        "message": f"Successfully ingested {len(records)} classifications",
        "data": [r.to_dict() for r in records],
    }


@router.get("/{record_id}", response_model=ClassificationResponse,
            responses={404: {"model": ErrorResponse}})
async def get_classification(record_id: str, store: RecordStore = Depends(get_store)):
    return {"data": store.get(record_id).to_dict()}


@router.patch("/{record_id}", response_model=UpdateResponse,
              responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def update_classification(
    record_id: str,
    update: ClassificationUpdateRequest,
    store: RecordStore = Depends(get_store),
    ledger: UndoLedger = Depends(get_ledger),
):
    """Apply a manual correction and keep the previous state for undo."""
    fields = update.model_dump(exclude_unset=True)
    record, snapshot = store.apply_update(record_id, fields)
    ledger.record(record_id, snapshot)

    return {
        "message": "Classification updated successfully",
        "data": record.to_dict(),
        "canUndo": True,
    }


@router.post("/{record_id}/undo", response_model=UndoResponse,
             responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def undo_classification(
    record_id: str,
    store: RecordStore = Depends(get_store),
    ledger: UndoLedger = Depends(get_ledger),
):
    """Revert the most recent correction if it is still inside the undo window."""
    snapshot = ledger.undo(record_id)
    record = store.restore(record_id, snapshot)

    return {
        "message": "Classification restored successfully",
        "data": record.to_dict(),
    }
