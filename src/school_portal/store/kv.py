"""Key-value persistence used by the record store.

Values are anything ``json`` can serialise. ``get`` returns ``default`` for a
missing key and raises ``DataCorruptionError`` for a value it cannot read.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Protocol

from ..core.exceptions import DataCorruptionError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    """Dict backed store. Values round-trip through JSON like the real backends."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return copy.deepcopy(default)
        try:
            return json.loads(raw)
        except ValueError as e:
            raise DataCorruptionError(f"{key!r} is not valid JSON") from e

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileKeyValueStore(KeyValueStore):
    """All keys in one JSON object on disk, rewritten on every ``set``."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _read_all(self, *, strict: bool = False) -> dict[str, Any]:
        """Load the whole file.

        An unreadable file raises ``DataCorruptionError`` when ``strict``,
        otherwise it is treated as empty so the next write replaces it.
        """
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except ValueError as e:
            if strict:
                raise DataCorruptionError(f"store file {self._path} is not valid JSON") from e
            logger.warning("Store file %s is not valid JSON, starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            if strict:
                raise DataCorruptionError(f"store file {self._path} does not hold an object")
            logger.warning("Store file %s does not hold an object, starting empty", self._path)
            return {}
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self._path)

    def get(self, key: str, default: Any = None) -> Any:
        data = self._read_all(strict=True)
        if key not in data:
            return copy.deepcopy(default)
        return data[key]

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
