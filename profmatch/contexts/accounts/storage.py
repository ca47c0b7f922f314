"""
Key-value storage for accounts and saved searches.

Values are strings (callers serialize to JSON), mirroring browser-style local
storage. MemoryStore keeps everything in a dict; JSONFileStore persists one
JSON object to disk.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from profmatch.contexts.accounts.exceptions import StorageError
from profmatch.contexts.accounts.logger import _log_debug


class KeyValueStore(ABC):
    """String key-value store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Value for key, or None if unset."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key; no-op if unset."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JSONFileStore(KeyValueStore):
    """
    Store backed by a single JSON object file.

    The file is created on first write and replaced atomically on every
    write, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError("Could not read storage file", path=self.path, original_error=e) from e
        if not isinstance(data, dict):
            raise StorageError("Storage file does not hold a JSON object", path=self.path)
        return data

    def _write(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StorageError("Could not write storage file", path=self.path, original_error=e) from e
        _log_debug(f"  Wrote {len(data)} keys to {self.path}")

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
