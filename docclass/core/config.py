"""
Configuration for the document classification store.
Values come from the environment (optionally a .env file) with local-dev defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Server binding
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3002"))

# Seed data read once at startup
SEED_DATA_PATH = os.getenv("SEED_DATA_PATH", "./data/example-classification.json")

# Undo window and paging defaults
UNDO_TTL_SEC = int(os.getenv("UNDO_TTL_SEC", "30"))
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "100"))

# Comma separated list, "*" allows any origin
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Version string
VERSION = "1.0.0"
SERVER_NAME = "Document Classifier API"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_seed_path() -> Path:
    """Get the seed data file path."""
    return Path(SEED_DATA_PATH)


def get_undo_ttl() -> int:
    """Get undo window in seconds."""
    return UNDO_TTL_SEC


def get_default_page_limit() -> int:
    return DEFAULT_PAGE_LIMIT


def get_cors_origins():
    """Parse CORS_ORIGINS into a list for the middleware."""
    origins = [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]
    return origins or ["*"]


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if UNDO_TTL_SEC < 1:
        issues.append("UNDO_TTL_SEC must be >= 1")

    if DEFAULT_PAGE_LIMIT < 1:
        issues.append("DEFAULT_PAGE_LIMIT must be >= 1")

    if not 0 < PORT < 65536:
        issues.append(f"Invalid PORT: {PORT}")

    if LOG_LEVEL not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        issues.append(f"Invalid LOG_LEVEL: {LOG_LEVEL}")

    return issues
