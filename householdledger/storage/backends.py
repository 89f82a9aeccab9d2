"""Mini README: Concrete key-value backends for ledger persistence.

Structure:
    * InMemoryKeyValueStore - dictionary backed store used by tests and demos.
    * JsonFileKeyValueStore - one UTF-8 file per key inside a data directory.

The file backend writes through a temporary file and an atomic rename so a
crash mid-write never leaves a truncated slot behind.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional

from .base import KeyValueStore
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class InMemoryKeyValueStore(KeyValueStore):
    """Keep values in a process-local dictionary."""

    backend_name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """Persist each key as ``<directory>/<key>.json``."""

    backend_name = "file"

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("File key-value store rooted at %s", self.directory)

    def _path_for(self, key: str) -> Path:
        """Map a key to its file, rejecting keys that could escape the directory."""

        if not _SAFE_KEY.match(key) or key in {".", ".."}:
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}_", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        LOGGER.debug("Wrote %s characters to %s", len(value), path)

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
