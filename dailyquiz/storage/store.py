from __future__ import annotations

"""Durable key-value slots backed by a single JSON file.

Each key holds one string value (the history store keeps its serialized
blob under ``"quizHistory"``). :class:`MemoryStore` offers the same
interface without touching disk.
"""

import json
from pathlib import Path
from typing import Dict, Optional


class StorageError(Exception):
    """The backing file could not be read, parsed or written."""


class KeyValueStore:
    """Interface shared by the JSON file and in-memory stores."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All slots live in one JSON object on disk; every write rewrites the file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            tmp.replace(self.path)
        except OSError as e:
            raise StorageError(f"cannot write {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"slot {key!r} does not hold a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            # Unreadable file: the slot being written replaces it
            data = {}
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
