# holiday_api/core/storage.py
"""
Loading of the default holiday catalog from its JSON data file.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from holiday_api.core.config import HOLIDAY_CATALOG_PATH
from holiday_api.core.models import HolidayDefinition

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """General error type for problems loading data files."""

    pass


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Read and parse JSON with robust error handling.
    Args:
        file_path: Path to the JSON file
    Returns:
        Parsed JSON data as list or dict
    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def load_holiday_definitions(file_path: Path | str | None = None) -> list[HolidayDefinition]:
    """
    Load holiday definitions from the catalog data file.
    Args:
        file_path: Catalog file, defaults to HOLIDAY_CATALOG_PATH
    Returns:
        List of holiday definitions in file order
    Raises:
        StorageError: If file cannot be loaded or parsed
    """
    file_path = Path(file_path or HOLIDAY_CATALOG_PATH)
    data = _load_json(file_path)
    try:
        if not isinstance(data, list):
            raise TypeError("Expected list of holiday definitions")
        definitions = [HolidayDefinition(**item) for item in data]
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse holiday definitions from %s", file_path)
        raise StorageError(f"Could not parse holiday definitions from {file_path}: {e}") from e

    logger.debug("Loaded %d holiday definitions from %s", len(definitions), file_path)
    return definitions
