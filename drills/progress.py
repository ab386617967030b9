"""
Progress Store - drill completion sessions and counters

Holds one DrillProgress per completed drill. The whole collection is read
once when the store is created and written back in full after every change.
Storage problems are logged and absorbed; the in-memory collection stays
authoritative for the rest of the session.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from pydantic import ConfigDict, Field, ValidationError

from analysis.models import CamelModel, UtcDatetime
from drills.assessment import utcnow
from utils.kv_store import DRILL_PROGRESS_KEY, KeyValueStore


logger = logging.getLogger("progress_store")

DEFAULT_SESSION_MINUTES = 15
MIN_RATING = 1
MAX_RATING = 5


class DrillSession(CamelModel):
    model_config = ConfigDict(frozen=True)

    date: UtcDatetime
    duration: int = DEFAULT_SESSION_MINUTES
    completed: bool = True
    rating: Optional[int] = None
    notes: Optional[str] = None


class DrillProgress(CamelModel):
    drill_id: str
    completed_at: UtcDatetime
    sessions: List[DrillSession] = Field(default_factory=list)
    rating: Optional[int] = None
    notes: Optional[str] = None


class ProgressStore:
    """Per-drill completion history backed by a key-value store."""

    def __init__(self, store: KeyValueStore,
                 clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock
        self._progress: Dict[str, DrillProgress] = self._load()

    def _load(self) -> Dict[str, DrillProgress]:
        try:
            stored = self.store.get(DRILL_PROGRESS_KEY)
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Error loading drill progress: {exc}")
            return {}
        if not stored:
            return {}

        try:
            entries = [DrillProgress.model_validate(item) for item in json.loads(stored)]
        except (TypeError, ValueError, ValidationError) as exc:
            logger.warning(f"Discarding malformed drill progress: {exc}")
            return {}

        progress: Dict[str, DrillProgress] = {}
        for entry in entries:
            existing = progress.get(entry.drill_id)
            if existing is None:
                progress[entry.drill_id] = entry
            else:
                # Older vaults could hold a drill twice; fold the later entry in
                existing.sessions.extend(entry.sessions)
                if entry.rating is not None:
                    existing.rating = entry.rating
                if entry.notes:
                    existing.notes = entry.notes
        return progress

    def _save(self) -> None:
        payload = [entry.to_json_dict() for entry in self._progress.values()]
        try:
            self.store.set(DRILL_PROGRESS_KEY, json.dumps(payload))
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Error saving drill progress: {exc}")

    def record_completion(self, drill_id: str, rating: Optional[int] = None,
                          notes: Optional[str] = None) -> DrillProgress:
        """Append a completed session for a drill, creating its progress entry if needed.

        Rating and notes on the entry change only when new values are given.

        Raises:
            ValueError: If drill_id is empty or rating is outside 1-5.
        """
        if not drill_id or not drill_id.strip():
            raise ValueError("drill_id is required")
        if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")

        now = self.clock()
        session = DrillSession(date=now, rating=rating, notes=notes or None)

        entry = self._progress.get(drill_id)
        if entry is None:
            entry = DrillProgress(drill_id=drill_id, completed_at=now, sessions=[session],
                                  rating=rating, notes=notes or None)
            self._progress[drill_id] = entry
        else:
            entry.sessions.append(session)
            if rating is not None:
                entry.rating = rating
            if notes:
                entry.notes = notes

        self._save()
        logger.info(f"Recorded session {len(entry.sessions)} for drill {drill_id}")
        return entry

    def get_progress(self, drill_id: str) -> Optional[DrillProgress]:
        return self._progress.get(drill_id)

    def all_progress(self) -> List[DrillProgress]:
        return list(self._progress.values())

    def completion_count(self) -> int:
        """Number of distinct drills with at least one session."""
        return sum(1 for entry in self._progress.values() if entry.sessions)

    def total_sessions(self) -> int:
        return sum(len(entry.sessions) for entry in self._progress.values())
