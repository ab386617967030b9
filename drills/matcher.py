"""
Drill Matcher - resolve free-text AI drill suggestions to catalog drills

The AI coach names drills in free text ("stride work", "Weighted bat swings
with a donut"). Matching runs two passes, always in this order:

1. Direct pass: scan the catalog in declaration order; the first drill whose
   lowercased title is contained in the suggestion, or contains it, wins.
2. Keyword pass: scan DRILL_KEYWORD_MAP in insertion order; for a keyword
   found in the suggestion, take the first candidate title fragment that
   appears in a catalog title.

Suggestions that match nothing are turned into a placeholder drill by
`resolve`. Placeholders are built per call and never enter the catalog.
"""

from __future__ import annotations

import re
from typing import Dict, List, NamedTuple, Optional, Sequence, Set

from analysis.models import SwingReport
from drills.catalog import ALL_DRILLS, Drill


DRILL_KEYWORD_MAP: Dict[str, List[str]] = {
    "stride": ["stride freeze", "walking happy gilmore"],
    "balance": ["balance beam", "closed eyes", "narrow stance"],
    "load": ["stride freeze", "walking happy gilmore", "variable timing"],
    "timing": ["variable timing", "quick hands"],
    "path": ["stop at contact", "knee down tee", "top hand", "bottom hand", "towel drill", "follow through"],
    "power": ["med ball toss", "weighted bat", "quick hands", "resistance band"],
    "hand": ["top hand", "bottom hand", "quick hands"],
    "stance": ["narrow stance", "mirror work", "two-ball toss", "chair drill"],
    "extension": ["follow through", "stop at contact"],
    "mechanics": ["mirror work", "stop at contact", "towel drill"],
    "rhythm": ["walking happy gilmore", "variable timing"],
    "speed": ["quick hands", "weighted bat"],
    "strength": ["med ball toss", "resistance band", "weighted bat"],
    "posture": ["balance beam", "mirror work", "narrow stance"],
    "sequence": ["stride freeze", "walking happy gilmore"],
    "recognition": ["two-ball toss"],
    "feel": ["closed eyes", "mirror work"],
    "connection": ["towel drill", "chair drill"],
}

PLACEHOLDER_STEPS = (
    "Review the feedback in your analysis regarding this phase.",
    "Setup in a controlled environment (tee or soft toss).",
    "Execute the movement at 50% speed, focusing on the mechanical correction.",
    "Gradually increase speed as the feeling becomes natural.",
    "Complete 20 repetitions focused on quality over power.",
)

_WHITESPACE = re.compile(r"\s+")


class ActionPlanItem(NamedTuple):
    name: str
    phase: str
    drill: Drill


def placeholder_id(suggestion: str) -> str:
    return "gen-" + _WHITESPACE.sub("-", suggestion.lower())


def make_placeholder_drill(suggestion: str, phase: str) -> Drill:
    """Generic corrective drill for a suggestion that matches nothing in the catalog."""
    return Drill(
        id=placeholder_id(suggestion),
        title=suggestion,
        description=(
            "A targeted corrective drill specifically suggested by AI Coach "
            f"to improve your {phase} mechanics."
        ),
        steps=PLACEHOLDER_STEPS,
        category="Path",
        difficulty="Intermediate",
        duration="15 mins",
    )


class DrillMatcher:
    """Maps AI drill suggestions onto a drill catalog."""

    def __init__(self, catalog: Sequence[Drill] = ALL_DRILLS,
                 keyword_map: Optional[Dict[str, List[str]]] = None) -> None:
        self.catalog = tuple(catalog)
        self.keyword_map = DRILL_KEYWORD_MAP if keyword_map is None else keyword_map

    def _direct_match(self, suggestion_lower: str, exclude: Set[str]) -> Optional[Drill]:
        for drill in self.catalog:
            if drill.id in exclude:
                continue
            title = drill.title.lower()
            if title in suggestion_lower or suggestion_lower in title:
                return drill
        return None

    def _fragment_match(self, fragment: str, exclude: Set[str]) -> Optional[Drill]:
        for drill in self.catalog:
            if drill.id not in exclude and fragment in drill.title.lower():
                return drill
        return None

    def match_drill(self, suggestion: str) -> Optional[Drill]:
        """Resolve one suggestion to a catalog drill, or None when nothing matches."""
        if not suggestion or not suggestion.strip():
            return None
        suggestion_lower = suggestion.lower()

        drill = self._direct_match(suggestion_lower, set())
        if drill is not None:
            return drill

        for keyword, fragments in self.keyword_map.items():
            if keyword in suggestion_lower:
                for fragment in fragments:
                    drill = self._fragment_match(fragment, set())
                    if drill is not None:
                        return drill
        return None

    def match_all(self, suggestions: Sequence[str]) -> List[Drill]:
        """Resolve a batch of suggestions into a deduplicated, ordered drill list.

        Drills already selected in this batch are skipped by both passes. The
        keyword pass runs while the batch still has fewer drills than
        suggestions and may add one drill per keyword found in a suggestion.
        """
        matched: List[Drill] = []
        selected: Set[str] = set()

        def take(drill: Drill) -> None:
            matched.append(drill)
            selected.add(drill.id)

        for suggestion in suggestions:
            if not suggestion or not suggestion.strip():
                continue
            suggestion_lower = suggestion.lower()

            drill = self._direct_match(suggestion_lower, selected)
            if drill is not None:
                take(drill)

            if len(matched) < len(suggestions):
                for keyword, fragments in self.keyword_map.items():
                    if keyword not in suggestion_lower:
                        continue
                    for fragment in fragments:
                        drill = self._fragment_match(fragment, selected)
                        if drill is not None:
                            take(drill)
                            break

        return matched

    def resolve(self, suggestion: str, phase: str) -> Drill:
        drill = self.match_drill(suggestion)
        if drill is None:
            return make_placeholder_drill(suggestion, phase)
        return drill

    def action_plan(self, report: SwingReport) -> List[ActionPlanItem]:
        """One item per drill suggestion in the report, phases in declaration order."""
        items: List[ActionPlanItem] = []
        for phase, analysis in report.metrics.items():
            for name in analysis.drills:
                if not name or not name.strip():
                    continue
                items.append(ActionPlanItem(name, phase, self.resolve(name, phase)))
        return items

    def history_preview(self, report: SwingReport, limit: int = 3) -> List[Drill]:
        """The first few action-plan drills, as shown on a history vault card."""
        return [item.drill for item in self.action_plan(report)[:limit]]


def prescribed_drills(matcher: DrillMatcher, report: Optional[SwingReport]) -> List[Drill]:
    """Batch-matched drills for every suggestion in a report (empty without one)."""
    if report is None:
        return []
    return matcher.match_all(report.drill_suggestions())

