import json
import logging
from pathlib import Path
from typing import Dict, Any, List

from .config import get_settings

# This file holds the JSON-file data store. Every mutation reads the whole
# document and writes it back; there is no locking.

logger = logging.getLogger(__name__)

COLLECTIONS = ("products", "users")


class StorageError(Exception):
    """Raised when the data file cannot be written."""


def empty_document() -> Dict[str, List[Dict[str, Any]]]:
    return {name: [] for name in COLLECTIONS}


class JsonStore:
    def __init__(self, path):
        self.path = Path(path)

    def read(self) -> Dict[str, List[Dict[str, Any]]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Data file %s not found, starting empty", self.path)
            return empty_document()
        except OSError as e:
            logger.error("Error reading data file %s: %s", self.path, e)
            return empty_document()

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error("Error parsing data file %s: %s", self.path, e)
            return empty_document()

        if not isinstance(data, dict):
            logger.error("Data file %s does not hold a JSON object", self.path)
            return empty_document()
        for name in COLLECTIONS:
            if not isinstance(data.get(name), list):
                data[name] = []
        return data

    def write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.critical("Failed to write data file %s: %s", self.path, e)
            raise StorageError("Failed to save data to disk.") from e

    def reset(self) -> None:
        self.write(empty_document())

    @staticmethod
    def next_id(records: List[Dict[str, Any]]) -> int:
        ids = [r["id"] for r in records if isinstance(r.get("id"), int)]
        return max(ids) + 1 if ids else 1


def get_store() -> JsonStore:
    """FastAPI dependency returning the store for the configured data file."""
    return JsonStore(get_settings().db_file)
