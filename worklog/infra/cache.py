"""
Cache tier - fast synchronous key-value store.

Behaves like browser local storage: string keys, string values, every
write is visible to the next read. When a file path is given the whole
mapping is mirrored to a JSON file so the last-known-good state survives
a restart.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

KEY_PREFIX = "work-time-"


class LocalCache:
    """In-process key-value cache with an optional JSON file mirror."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self._data: Dict[str, str] = {}
        if self.path is not None:
            self._data = self._read_file()

    def _read_file(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable cache file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_file(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, ensure_ascii=False)
        except OSError as e:
            # The in-memory value is still current; only the mirror is stale
            logger.warning(f"Failed to write cache file {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._data.get(KEY_PREFIX + key)

    def set(self, key: str, value: str) -> None:
        self._data[KEY_PREFIX + key] = value
        if self.path is not None:
            self._write_file()
