"""Exceptions raised by the record store, query engine and undo ledger."""


class ClassificationStoreError(Exception):
    """Base exception for the classification store."""

    status_code = 500


class NotFoundError(ClassificationStoreError):
    """Raised when a record id is unknown."""

    status_code = 404

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Classification not found: {record_id}")


class InvalidInputError(ClassificationStoreError):
    """Raised when caller input does not have the expected shape."""

    status_code = 400


class SeedLoadError(ClassificationStoreError):
    """Raised when seed data cannot be read or parsed."""


class UndoError(ClassificationStoreError):
    """Base for undo failures."""

    status_code = 400

    def __init__(self, record_id: str, message: str):
        self.record_id = record_id
        super().__init__(message)


class NoUndoAvailableError(UndoError):
    """Raised when no pending undo exists for a record."""

    def __init__(self, record_id: str):
        super().__init__(record_id, "No undo available for this classification")


class UndoExpiredError(UndoError):
    """Raised when the pending undo is older than the undo window."""

    def __init__(self, record_id: str, ttl_seconds: float):
        self.ttl_seconds = ttl_seconds
        super().__init__(
            record_id,
            f"Undo window expired (undo is available for {ttl_seconds:g} seconds)"
        )
