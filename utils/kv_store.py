"""Key-value persistence for the local swing vault.

Every store maps a logical key to a serialized blob (a JSON string). Callers
own the blob format; stores only move strings around.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from utils.io import PathLike, dump_json_file, load_json_file


logger = logging.getLogger("kv_store")

DRILL_PROGRESS_KEY = "justswing-drill-progress"
USER_PROFILE_KEY = "justswing-user-profile"
HISTORY_KEY = "justswing_history_v1"

ALL_KEYS = (DRILL_PROGRESS_KEY, USER_PROFILE_KEY, HISTORY_KEY)


class KeyValueStore:
    """Interface for the blob store. Subclasses implement get/set/delete."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def clear(self, keys: Iterable[str] = ALL_KEYS) -> None:
        for key in keys:
            self.delete(key)


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store, used by tests and as a throwaway session store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All keys live in one JSON object on disk, rewritten in full on every set."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = load_json_file(self.path)
        if not isinstance(data, dict):
            raise ValueError(f"Vault file is not a JSON object: {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None:
            return None
        # Hand-edited vaults may hold the decoded structure instead of a string
        return value if isinstance(value, str) else json.dumps(value)

    def _read_for_update(self) -> Dict[str, str]:
        try:
            return self._read_all()
        except ValueError:
            logger.warning(f"Overwriting unreadable vault file {self.path}")
            return {}

    def set(self, key: str, value: str) -> None:
        data = self._read_for_update()
        data[key] = value
        dump_json_file(self.path, data)

    def delete(self, key: str) -> None:
        if not self.path.exists():
            return
        data = self._read_for_update()
        data.pop(key, None)
        dump_json_file(self.path, data)
