"""
Durable key-value storage for planner records.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from ..config import DATA_DIR, STORAGE_PREFIX

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """
    Stores each record as a JSON file: {directory}/{prefix}-{key}.json

    load() returns None for a missing or unreadable file, so the store can
    fall back to defaults. save() writes to a temp file in the same
    directory and renames it over the old one, so a reader sees either the
    previous record or the new one, never half of each.

    Failures are logged and reported through the return value; they are
    never raised to the planner, which keeps working with its in-memory
    state.
    """

    def __init__(self, directory=DATA_DIR, prefix: str = STORAGE_PREFIX):
        self.directory = Path(directory)
        self.prefix = prefix

    def path_for(self, key: str) -> Path:
        return self.directory / f"{self.prefix}-{key}.json"

    def load(self, key: str):
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load %s from %s: %s", key, path, e)
            return None

    def save(self, key: str, record) -> bool:
        path = self.path_for(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2)
            os.replace(tmp_name, path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save %s to %s: %s", key, path, e)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
