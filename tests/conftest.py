"""Shared fixtures: in-memory vault, report builder, deterministic clock."""

from datetime import datetime, timedelta, timezone

import pytest

from analysis.models import SwingReport
from utils.kv_store import InMemoryStore


def build_report(stance=80, load=80, path=80, follow_through=80, overall=None, drills=None):
    """Build a SwingReport dict-first, the way Gemini returns it."""
    drills = drills or {}
    scores = {"stance": stance, "load": load, "path": path, "followThrough": follow_through}
    metrics = {
        phase: {
            "score": score,
            "feedback": f"{phase} feedback",
            "drills": drills.get(phase, []),
            "timestamp": "0:01",
        }
        for phase, score in scores.items()
    }
    return SwingReport.model_validate({
        "overallScore": overall if overall is not None else sum(scores.values()) / 4,
        "estimatedStats": {"exitVelocity": "82 mph", "launchAngle": "14°", "batSpeed": "68 mph"},
        "metrics": metrics,
        "keyIssues": ["Early hip rotation"],
        "summary": "Solid base, late hands.",
    })


class StepClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start=None, step=timedelta(minutes=1)):
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


class FailingStore(InMemoryStore):
    """Store whose reads and/or writes raise, for best-effort persistence tests."""

    def __init__(self, fail_get=False, fail_set=False, initial=None):
        super().__init__(initial)
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get(self, key):
        if self.fail_get:
            raise OSError("disk unavailable")
        return super().get(key)

    def set(self, key, value):
        if self.fail_set:
            raise OSError("disk full")
        super().set(key, value)

    def delete(self, key):
        if self.fail_set:
            raise OSError("disk full")
        super().delete(key)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def report_factory():
    return build_report
