"""
Report models returned by the AI coach.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the model is asked to produce and the blobs kept in the vault.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from analysis.scoring import parse_timestamp


def as_utc(value: datetime) -> datetime:
    """Naive datetimes (hand-edited or older vaults) are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SwingPhaseAnalysis(CamelModel):
    score: float
    feedback: str = ""
    drills: List[str] = Field(default_factory=list)
    timestamp: Optional[str] = None

    def timestamp_seconds(self) -> Optional[int]:
        return parse_timestamp(self.timestamp)


class SwingMetrics(CamelModel):
    stance: SwingPhaseAnalysis
    load: SwingPhaseAnalysis
    path: SwingPhaseAnalysis
    follow_through: SwingPhaseAnalysis

    def items(self) -> Iterator[Tuple[str, SwingPhaseAnalysis]]:
        """Yield (phase name, analysis) in declaration order."""
        yield "stance", self.stance
        yield "load", self.load
        yield "path", self.path
        yield "followThrough", self.follow_through


class EstimatedStats(CamelModel):
    exit_velocity: Optional[str] = None
    launch_angle: Optional[str] = None
    bat_speed: Optional[str] = None


class SwingReport(CamelModel):
    overall_score: float
    estimated_stats: EstimatedStats = Field(default_factory=EstimatedStats)
    metrics: SwingMetrics
    key_issues: List[str] = Field(default_factory=list)
    summary: str = ""
    video_url: Optional[str] = None

    def drill_suggestions(self) -> List[str]:
        """All per-phase drill suggestions, phases in declaration order."""
        return [name for _, analysis in self.metrics.items() for name in analysis.drills]


class MetricDelta(CamelModel):
    label: str
    change: str
    direction: Literal["better", "worse", "neutral"]


class ComparativeReport(CamelModel):
    comparison_summary: str
    improvements: List[str] = Field(default_factory=list)
    regressions: List[str] = Field(default_factory=list)
    metric_deltas: List[MetricDelta] = Field(default_factory=list)


HistoryType = Literal["analysis", "comparison"]


class HistoryItem(CamelModel):
    id: str
    timestamp: UtcDatetime
    type: HistoryType
    data: Union[SwingReport, ComparativeReport]
    summary_title: str

    @field_validator("data", mode="before")
    @classmethod
    def _parse_by_type(cls, value: Any, info):
        if isinstance(value, dict):
            if info.data.get("type") == "analysis":
                return SwingReport.model_validate(value)
            return ComparativeReport.model_validate(value)
        return value
