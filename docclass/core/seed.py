"""
Seed data loading - reads the startup JSON file into a RecordStore.
A missing or malformed file leaves the store empty instead of failing startup.
"""

import json
from pathlib import Path
from typing import Any, Union

from .errors import SeedLoadError
from .store import RecordStore
from util.logging import logger


def read_seed_file(path: Union[str, Path]) -> Any:
    """Read and decode the seed file, raising SeedLoadError on any failure."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise SeedLoadError(f"Seed file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SeedLoadError(f"Could not read seed file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SeedLoadError(f"Seed file {path} is not valid JSON: {e}") from e


def load_seed_file(store: RecordStore, path: Union[str, Path]) -> int:
    """Populate the store from a seed file and return the record count.

    Any SeedLoadError is logged and results in an empty store.
    """
    try:
        count = store.load_seed(read_seed_file(path))
    except SeedLoadError as e:
        store.load_seed([])
        logger.log_seed_load(str(path), status="failed", error=str(e))
        return 0

    logger.log_seed_load(str(path), count=count)
    return count
