"""
Structured logging for record store operations, undo handling and seed loading.
"""

import logging
from typing import Any, Dict, List

NAME_PREVIEW_LENGTH = 50


class StructuredLogger:
    """Structured logger for classification store operations."""

    def __init__(self, name: str = "docclass", level: str = "INFO"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status in ("failed", "error"):
            self.logger.error(message)
        elif status in ("rejected", "expired"):
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def log_record_operation(self, operation: str, record_id: str, document_name: str = None,
                             status: str = "success", details: Dict[str, Any] = None):
        """Log an ingest/update/restore on a single record."""
        log_details = {"record_id": record_id}
        if document_name is not None:
            log_details["document_name"] = truncate(document_name)
        if details:
            log_details.update(details)

        self.log_operation(f"record.{operation}", status, log_details)

    def log_ingest(self, record_ids: List[str], status: str = "success"):
        """Log a batch ingest."""
        self.log_operation("record.ingest", status, {"count": len(record_ids)})

    def log_undo(self, record_id: str, status: str, details: Dict[str, Any] = None):
        """Log undo ledger activity (recorded, applied, expired, unavailable)."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)

        self.log_operation("undo", status, log_details)

    def log_seed_load(self, source: str, count: int = 0, status: str = "success", error: str = None):
        """Log seed data loading at startup."""
        log_details = {"source": source, "count": count}
        if error:
            log_details["error"] = error[:200]

        self.log_operation("seed.load", status, log_details)

    def log_request_error(self, method: str, path: str, status_code: int, error: str):
        """Log an error surfaced to an API caller."""
        self.log_operation(
            "api.request",
            "failed" if status_code >= 500 else "rejected",
            {"method": method, "path": path, "status_code": status_code, "error": error[:200]}
        )

    def set_level(self, level: str):
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def exception(self, message: str) -> None:
        """Log an error message with the active traceback."""
        self.logger.exception(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


def truncate(value: str, length: int = NAME_PREVIEW_LENGTH) -> str:
    """Shorten long values for log details."""
    return value[:length - 3] + "..." if len(value) > length else value


# Global logger instance
logger = StructuredLogger()
