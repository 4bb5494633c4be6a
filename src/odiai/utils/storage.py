"""
Durable key-value slots backed by a single JSON file.

Behaves like browser localStorage: string values under string keys,
whole file rewritten on every change.
"""

import json
import os
import tempfile


class StorageError(Exception):
    """The storage file exists but could not be read or decoded."""


class JsonFileStorage:
    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, str]):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str):
        try:
            data = self._read_all()
        except StorageError:
            # Unreadable file gets replaced rather than blocking every write
            data = {}
        data[key] = value
        self._write_all(data)

    def remove(self, key: str):
        try:
            data = self._read_all()
        except StorageError:
            data = {}
        data.pop(key, None)
        self._write_all(data)
