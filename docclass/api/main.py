"""
FastAPI application for the document classification store.

The store and undo ledger are built once per application and reached by
handlers through app.state, so tests can construct isolated apps.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.config import (
    VERSION,
    SERVER_NAME,
    LOG_LEVEL,
    debug_enabled,
    get_cors_origins,
    get_seed_path,
)
from ..core.errors import ClassificationStoreError
from ..core.seed import load_seed_file
from ..core.store import RecordStore
from ..core.undo import UndoLedger
from .classifications import router as classifications_router
from .schemas import HealthResponse, ServiceInfoResponse
from util.logging import logger

ENDPOINTS = [
    "GET /health - Health check",
    "GET /classifications - Query classifications (filter, sort, paginate)",
    "POST /classifications - Ingest classification data",
    "GET /classifications/:id - Get a single classification",
    "PATCH /classifications/:id - Update classification",
    "POST /classifications/:id/undo - Undo the last update",
]


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    content = {"error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI):
    """Map store errors to status codes and hide unexpected failures."""

    @app.exception_handler(ClassificationStoreError)
    async def store_error_handler(request: Request, exc: ClassificationStoreError):
        logger.log_request_error(request.method, request.url.path, exc.status_code, str(exc))
        if exc.status_code >= 500:
            return _error(500, "Internal server error")
        return _error(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": ".".join(str(part) for part in err.get("loc", ())), "msg": str(err.get("msg", ""))}
            for err in exc.errors()
        ]
        logger.log_request_error(request.method, request.url.path, 400, "invalid request")
        return _error(400, "Invalid request", details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error(404, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return _error(500, "Internal server error")


def create_app(store: RecordStore = None, ledger: UndoLedger = None, seed_path=None) -> FastAPI:
    """Build the API around explicit store and ledger instances.

    When seed_path is given the store is (re)loaded from it at startup.
    """
    store = RecordStore() if store is None else store
    ledger = UndoLedger() if ledger is None else ledger
    logger.set_level("DEBUG" if debug_enabled() else LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {SERVER_NAME} v{VERSION}")
        if seed_path is not None:
            load_seed_file(app.state.store, seed_path)
        yield
        logger.info(f"{SERVER_NAME} stopped")

    app = FastAPI(
        title=SERVER_NAME,
        version=VERSION,
        description="In-memory document classification store with manual corrections and undo",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.ledger = ledger

    origins = get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint(request: Request):
        """Check system health."""
        return HealthResponse(
            status="OK",
            timestamp=datetime.now(timezone.utc),
            documents_count=request.app.state.store.count(),
            undo_history_count=request.app.state.ledger.size(),
            server=SERVER_NAME,
        )

    @app.get("/", response_model=ServiceInfoResponse)
    def service_info_endpoint(request: Request):
        return ServiceInfoResponse(
            message="Document Classifier Backend API",
            version=VERSION,
            documents_loaded=request.app.state.store.count(),
            endpoints=ENDPOINTS,
        )

    app.include_router(classifications_router, prefix="/classifications", tags=["classifications"])
    return app


# Application used by the launcher: fresh store seeded from SEED_DATA_PATH
app = create_app(seed_path=get_seed_path())
