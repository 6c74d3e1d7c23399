"""JSON file key-value backend.

Keeps every key in one JSON object on disk, the way browser local storage
keeps one origin's keys together. The file is rewritten in full on each
change, through a temporary file and an atomic rename.
"""

import json
import os
import tempfile
from pathlib import Path

from ..errors import PersistenceError
from .base import KeyValueStore


class JsonFileKeyValueStore(KeyValueStore):
    """JSON-file-backed store.

    The whole file is loaded on connect and held in memory; every set or
    remove writes it back before returning.
    """

    def __init__(self, path: str | Path = "~/.studymentor/storage.json"):
        self._path = Path(path).expanduser()
        self._data: dict[str, str] | None = None

    async def connect(self) -> None:
        """Load the file, creating parent directories as needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._data = self._read()

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read store file {self._path}: {e}") from e

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise PersistenceError(f"Store file {self._path} is not a JSON object of strings")
        return data

    def _write(self) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _require_data(self) -> dict[str, str]:
        if self._data is None:
            raise RuntimeError("Store not connected. Call connect() first.")
        return self._data

    async def disconnect(self) -> None:
        """Drop the in-memory copy (every change is already on disk)."""
        self._data = None

    async def get(self, key: str) -> str | None:
        return self._require_data().get(key)

    async def set(self, key: str, value: str) -> None:
        self._require_data()[key] = value
        self._write()

    async def remove(self, key: str) -> None:
        data = self._require_data()
        if key in data:
            del data[key]
            self._write()

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path
