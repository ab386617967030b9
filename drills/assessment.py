"""
Skill Assessor - derive a skill profile from the latest swing report

The profile is rebuilt from scratch for every new report; older profiles are
replaced, never blended.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Callable, List, Literal, Optional

from pydantic import Field, ValidationError

from analysis.models import CamelModel, SwingReport, UtcDatetime
from utils.kv_store import USER_PROFILE_KEY, KeyValueStore


logger = logging.getLogger("skill_assessor")

SkillLevel = Literal["Beginner", "Intermediate", "Advanced"]

ADVANCED_THRESHOLD = 80
INTERMEDIATE_THRESHOLD = 60
STRENGTH_THRESHOLD = 75
WEAKNESS_THRESHOLD = 60
DEFAULT_FOCUS = ("Power", "Path")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserSkillProfile(CamelModel):
    overall_level: SkillLevel
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommended_focus: List[str] = Field(default_factory=list)
    last_assessment: UtcDatetime


def level_for_average(average: float) -> SkillLevel:
    # Boundary values belong to the higher tier
    if average >= ADVANCED_THRESHOLD:
        return "Advanced"
    if average >= INTERMEDIATE_THRESHOLD:
        return "Intermediate"
    return "Beginner"


def phase_label(phase: str) -> str:
    """Display label for a phase key ("followThrough" -> "Followthrough")."""
    return phase.capitalize()


def assess_report(report: SwingReport, now: Optional[datetime] = None) -> UserSkillProfile:
    """Build a skill profile from a report's four phase scores."""
    phases = list(report.metrics.items())
    average = sum(analysis.score for _, analysis in phases) / len(phases)

    strengths = [phase_label(p) for p, analysis in phases if analysis.score >= STRENGTH_THRESHOLD]
    weaknesses = [phase_label(p) for p, analysis in phases if analysis.score < WEAKNESS_THRESHOLD]

    return UserSkillProfile(
        overall_level=level_for_average(average),
        strengths=strengths,
        weaknesses=weaknesses,
        recommended_focus=list(weaknesses) if weaknesses else list(DEFAULT_FOCUS),
        last_assessment=now or utcnow(),
    )


class SkillAssessor:
    """Assesses reports and keeps the single stored profile."""

    def __init__(self, store: KeyValueStore,
                 clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock

    def assess(self, report: SwingReport) -> UserSkillProfile:
        profile = assess_report(report, now=self.clock())
        self.save_profile(profile)
        return profile

    def load_profile(self) -> Optional[UserSkillProfile]:
        try:
            stored = self.store.get(USER_PROFILE_KEY)
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Error loading user profile: {exc}")
            return None
        if not stored:
            return None
        try:
            return UserSkillProfile.model_validate(json.loads(stored))
        except (ValueError, ValidationError) as exc:
            logger.warning(f"Discarding malformed user profile: {exc}")
            return None

    def save_profile(self, profile: UserSkillProfile) -> None:
        try:
            self.store.set(USER_PROFILE_KEY, json.dumps(profile.to_json_dict()))
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Error saving user profile: {exc}")
