"""
History Vault - saved analyses and comparisons

The vault is a newest-first list of HistoryItem records kept under a single
key. Like the other stores it loads once, writes the full list on every
change, and treats unreadable data as an empty vault.
"""

from __future__ import annotations

import json
import logging
import secrets
import string
from datetime import datetime
from typing import Callable, List, Optional, Union

from pydantic import ValidationError

from analysis.models import ComparativeReport, HistoryItem, HistoryType, SwingReport
from drills.assessment import utcnow
from utils.kv_store import HISTORY_KEY, KeyValueStore


logger = logging.getLogger("history_vault")

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def new_history_id() -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def summary_title(item_type: HistoryType, data: Union[SwingReport, ComparativeReport]) -> str:
    if item_type == "analysis" and isinstance(data, SwingReport):
        return f"Swing Score: {data.overall_score:g}/100"
    return "Mechanical Comparison"


class HistoryVault:
    """Analysis and comparison history for the local user."""

    def __init__(self, store: KeyValueStore,
                 clock: Callable[[], datetime] = utcnow,
                 id_factory: Callable[[], str] = new_history_id) -> None:
        self.store = store
        self.clock = clock
        self.id_factory = id_factory
        self._items: List[HistoryItem] = self._load()

    def _load(self) -> List[HistoryItem]:
        try:
            stored = self.store.get(HISTORY_KEY)
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Failed to load history: {exc}")
            return []
        if not stored:
            return []
        try:
            return [HistoryItem.model_validate(item) for item in json.loads(stored)]
        except (TypeError, ValueError, ValidationError) as exc:
            logger.warning(f"Failed to parse history: {exc}")
            return []

    def _save(self) -> None:
        payload = [item.to_json_dict() for item in self._items]
        try:
            self.store.set(HISTORY_KEY, json.dumps(payload))
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Failed to save history: {exc}")

    def add(self, item_type: HistoryType,
            data: Union[SwingReport, ComparativeReport]) -> HistoryItem:
        expected = SwingReport if item_type == "analysis" else ComparativeReport
        if not isinstance(data, expected):
            raise ValueError(f"{item_type} history items need a {expected.__name__}")

        item = HistoryItem(
            id=self.id_factory(),
            timestamp=self.clock(),
            type=item_type,
            data=data,
            summary_title=summary_title(item_type, data),
        )
        self._items.insert(0, item)
        self._save()
        return item

    def items(self) -> List[HistoryItem]:
        """All items, newest first."""
        return sorted(self._items, key=lambda item: item.timestamp, reverse=True)

    def analyses(self) -> List[HistoryItem]:
        return [item for item in self.items() if item.type == "analysis"]

    def get(self, item_id: str) -> Optional[HistoryItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def delete(self, item_id: str) -> bool:
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._save()
        return True
