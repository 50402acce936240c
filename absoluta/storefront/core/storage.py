"""
Durable key/value storage for the storefront.

Mirrors the browser's ``localStorage`` API: string keys, string values.
``FileStorage`` keeps every key in one JSON document on disk and replaces it
atomically, so a write either lands completely or not at all.
"""

import json
import logging
import os
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)


class Storage:
    """Base class for storefront key/value storage"""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(Storage):
    """Storage that lives for the process lifetime"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage(Storage):
    """Storage persisted to a JSON file, shared by every store using the same path"""

    def __init__(self, path: str):
        self.path = os.path.abspath(os.path.expanduser(path))

    def _read(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed storage file {self.path}")
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

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


def create_storage(path: Optional[str] = None) -> Storage:
    """File storage when a path is configured, memory storage otherwise"""
    if path:
        return FileStorage(path)
    return MemoryStorage()
