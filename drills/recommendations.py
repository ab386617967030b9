"""
Recommendation Ranker - order catalog drills for the "Recommended" shelf

Drills whose category matches a profile weakness come first, then drills for
phases the latest report scored below 70, then the rest of the catalog. The
shelf is capped at six drills.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Sequence

from analysis.models import SwingReport
from drills.assessment import UserSkillProfile
from drills.catalog import Drill
from drills.matcher import DrillMatcher, prescribed_drills
from drills.progress import DrillProgress, ProgressStore


MAX_RECOMMENDATIONS = 6
PHASE_REVIEW_THRESHOLD = 70


def _drills_in_category(catalog: Sequence[Drill], label: str) -> List[Drill]:
    label = label.lower()
    return [drill for drill in catalog if label in drill.category.lower()]


def recommend(catalog: Sequence[Drill],
              profile: Optional[UserSkillProfile] = None,
              recent_report: Optional[SwingReport] = None) -> List[Drill]:
    """Rank catalog drills for the user.

    Args:
        catalog: Drills in catalog order.
        profile: Stored skill profile, if any.
        recent_report: Most recent swing report, if any.

    Returns:
        Up to six drills, or the whole catalog unranked when there is neither
        a profile nor a report.
    """
    if profile is None and recent_report is None:
        return list(catalog)

    candidates: Dict[str, Drill] = {}

    if profile is not None:
        for weakness in profile.weaknesses:
            for drill in _drills_in_category(catalog, weakness):
                candidates.setdefault(drill.id, drill)

    if recent_report is not None:
        for phase, analysis in recent_report.metrics.items():
            if analysis.score < PHASE_REVIEW_THRESHOLD:
                for drill in _drills_in_category(catalog, phase):
                    candidates.setdefault(drill.id, drill)

    ranked = list(candidates.values())
    seen = set(candidates)
    for drill in catalog:
        if drill.id not in seen:
            ranked.append(drill)
            seen.add(drill.id)

    return ranked[:MAX_RECOMMENDATIONS]


class ShelfEntry(NamedTuple):
    drill: Drill
    progress: Optional[DrillProgress]

    @property
    def completed(self) -> bool:
        return self.progress is not None and len(self.progress.sessions) > 0


class LibraryShelves(NamedTuple):
    recommended: List[ShelfEntry]
    prescribed: List[ShelfEntry]
    other: List[ShelfEntry]
    completion_count: int
    total_sessions: int
    skill_level: Optional[str]


def library_shelves(catalog: Sequence[Drill],
                    matcher: DrillMatcher,
                    progress: ProgressStore,
                    profile: Optional[UserSkillProfile] = None,
                    report: Optional[SwingReport] = None) -> LibraryShelves:
    """Everything the drill library view shows, with completion state attached."""

    def annotate(drills: Sequence[Drill]) -> List[ShelfEntry]:
        return [ShelfEntry(drill, progress.get_progress(drill.id)) for drill in drills]

    recommended: List[Drill] = []
    if profile is not None or report is not None:
        recommended = recommend(catalog, profile, report)

    prescribed = prescribed_drills(matcher, report)
    prescribed_ids = {drill.id for drill in prescribed}
    other = [drill for drill in catalog if drill.id not in prescribed_ids]

    return LibraryShelves(
        recommended=annotate(recommended),
        prescribed=annotate(prescribed),
        other=annotate(other),
        completion_count=progress.completion_count(),
        total_sessions=progress.total_sessions(),
        skill_level=profile.overall_level if profile else None,
    )
