"""Key-value stores holding whole-collection JSON blobs.

Values are opaque strings. Every write replaces the full value of a key;
there are no partial updates.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from fit_engine.serialization.json_codec import DecodeError, dumps, loads

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyValueStore(ABC):
    """Minimal string key-value store (the shape of browser local storage)."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored string or None if the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def load(self, key: str, decode: Callable[[Any], T], default: T) -> T:
        """Read and decode *key*; a missing or malformed value yields *default*."""
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return decode(loads(raw))
        except DecodeError as exc:
            logger.warning("Ignoring malformed value for %s: %s", key, exc)
            return default

    def save(self, key: str, value: Any) -> None:
        """Encode *value* (already JSON-compatible) and write it under *key*."""
        self.set(key, dumps(value))


class MemoryStore(KeyValueStore):
    """In-process store, for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """All keys in one JSON object file, rewritten atomically on every change.

    An unreadable or corrupt file is treated as an empty store.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._data = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read store %s, starting empty: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store %s is not a JSON object, starting empty", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._data = {}
        self._flush()
