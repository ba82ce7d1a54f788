"""Key-value persistence for the pocketbook ledger."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from .exceptions import PersistenceError

KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class KeyValueStore(ABC):
    """String-valued store the ledger reads and writes whole collections to."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key has never been written."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store value under key, replacing anything already there."""


class InMemoryStore(KeyValueStore):
    """Dict-backed store, mainly for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._values


class JSONFileStore(KeyValueStore):
    """One JSON file per key with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

    def write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
            # replace is atomic on POSIX, readers never see a half-written file.
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _path_for(self, key: str) -> Path:
        if not KEY_PATTERN.fullmatch(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._base_path / f"{key}.json"
