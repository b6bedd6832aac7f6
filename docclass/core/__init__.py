"""
Core record store, query engine and undo ledger for classified documents.
"""

from .errors import (
    ClassificationStoreError,
    NotFoundError,
    InvalidInputError,
    SeedLoadError,
    UndoError,
    NoUndoAvailableError,
    UndoExpiredError,
)
from .schema import ClassificationLabel, ClassificationRecord, DocumentEntry, UndoEntry
from .store import RecordStore
from .query import QueryParams, QueryResult, query
from .undo import UndoLedger
from .seed import load_seed_file, read_seed_file

__all__ = [
    'ClassificationStoreError',
    'NotFoundError',
    'InvalidInputError',
    'SeedLoadError',
    'UndoError',
    'NoUndoAvailableError',
    'UndoExpiredError',
    'ClassificationLabel',
    'ClassificationRecord',
    'DocumentEntry',
    'UndoEntry',
    'RecordStore',
    'QueryParams',
    'QueryResult',
    'query',
    'UndoLedger',
    'load_seed_file',
    'read_seed_file',
]
