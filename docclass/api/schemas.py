"""
Request and response models for the classification API.
"""

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr
from typing import Optional, List, Dict, Union
from datetime import datetime


class ClassificationLabelModel(BaseModel):
    # strict so PATCH accepts exactly the shapes ingest accepts
    label: StrictStr
    score: Union[StrictInt, StrictFloat]


class ClassificationRecordResponse(BaseModel):
    id: str
    document_name: str
    classifications: List[ClassificationLabelModel]
    manually_edited: bool
    created_at: datetime
    updated_at: datetime


class ClassificationUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are replaced."""
    model_config = ConfigDict(extra="ignore")

    document_name: Optional[StrictStr] = None
    classifications: Optional[List[ClassificationLabelModel]] = None


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ClassificationListResponse(BaseModel):
    data: List[ClassificationRecordResponse]
    pagination: PaginationResponse


class ClassificationResponse(BaseModel):
    data: ClassificationRecordResponse


class IngestResponse(BaseModel):
    message: str
    data: List[ClassificationRecordResponse]


class UpdateResponse(BaseModel):
    message: str
    data: ClassificationRecordResponse
    canUndo: bool


class UndoResponse(BaseModel):
    message: str
    data: ClassificationRecordResponse


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    documents_count: int
    undo_history_count: int
    server: str


class ServiceInfoResponse(BaseModel):
    message: str
    version: str
    documents_loaded: int
    endpoints: List[str]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[List[Dict[str, str]]] = None
