#!/usr/bin/env python3
"""Swing Coach Agent (Gemini Flash)

Sends baseball swing clips to Gemini and returns structured reports:
- analyze_swing_video: one clip -> SwingReport (phase scores, feedback, drills)
- compare_swings: reference clip + current clip -> ComparativeReport

Usage:
  python -m agents.swing_coach_agent videos/swing.mp4
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from analysis.models import ComparativeReport, SwingReport
from analysis.scoring import normalize_score
from utils.config import DEFAULT_MODEL, get_required_env, load_env
from utils.io import load_video

try:
    from google import genai
    from google.genai import types
except ImportError as exc:
    raise ImportError(
        f"Google GenAI library not installed: {exc}\n"
        "Install with: pip install google-genai"
    ) from exc


logger = logging.getLogger("swing_coach_agent")


ANALYSIS_PROMPT = (
    "Act as an MLB coach. Analyze this baseball swing video frame-by-frame. "
    "Provide specific timestamps (0:00) for the start of each phase (Stance, Load, "
    "Contact/Path, Follow-through). Be critical about mechanics and output in JSON format. "
    "IMPORTANT: All scores must be on a scale of 0-100, not 0-10."
)

COMPARISON_PROMPT = """Analyze these two baseball swings side-by-side.
Video A is the "Before" or "Reference" swing.
Video B is the "Current" swing.
Highlight improvements in mechanics, timing, and power generation.
Identify any regressions.
Output a JSON comparison report."""


def _phase_schema(moment: str) -> Dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": {
            "score": {"type": "NUMBER"},
            "feedback": {"type": "STRING"},
            "drills": {"type": "ARRAY", "items": {"type": "STRING"}},
            "timestamp": {"type": "STRING", "description": f"Format '0:00'. {moment}"},
        },
        "required": ["score", "feedback", "drills", "timestamp"],
    }


SWING_ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "overallScore": {"type": "NUMBER"},
        "estimatedStats": {
            "type": "OBJECT",
            "properties": {
                "exitVelocity": {"type": "STRING"},
                "launchAngle": {"type": "STRING"},
                "batSpeed": {"type": "STRING"},
            },
            "required": ["exitVelocity", "launchAngle", "batSpeed"],
        },
        "metrics": {
            "type": "OBJECT",
            "properties": {
                "stance": _phase_schema("The exact moment the stance is set."),
                "load": _phase_schema("The moment the weight shifts back."),
                "path": _phase_schema("The point of contact."),
                "followThrough": _phase_schema("The peak of the finish."),
            },
            "required": ["stance", "load", "path", "followThrough"],
        },
        "keyIssues": {"type": "ARRAY", "items": {"type": "STRING"}},
        "summary": {"type": "STRING"},
    },
    "required": ["overallScore", "estimatedStats", "metrics", "keyIssues", "summary"],
}

COMPARISON_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "comparisonSummary": {"type": "STRING"},
        "improvements": {"type": "ARRAY", "items": {"type": "STRING"}},
        "regressions": {"type": "ARRAY", "items": {"type": "STRING"}},
        "metricDeltas": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "label": {"type": "STRING"},
                    "change": {"type": "STRING"},
                    "direction": {"type": "STRING", "enum": ["better", "worse", "neutral"]},
                },
                "required": ["label", "change", "direction"],
            },
        },
    },
    "required": ["comparisonSummary", "improvements", "regressions", "metricDeltas"],
}


class SwingAnalysisError(RuntimeError):
    """Raised when Gemini fails or returns something that is not a usable report."""


def normalize_report(report: SwingReport) -> SwingReport:
    """Rescale overall and phase scores that came back on a 0-10 scale."""
    report.overall_score = normalize_score(report.overall_score)
    for _, analysis in report.metrics.items():
        analysis.score = normalize_score(analysis.score)
    return report


class SwingCoachAgent:
    """
    Gemini-backed swing analyst.

    A client can be injected (tests pass a fake); otherwise one is built from
    GOOGLE_API_KEY.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODEL,
                 client: Any = None):
        self.model = model
        if client is None:
            client = genai.Client(api_key=api_key or get_required_env("GOOGLE_API_KEY"))
        self.client = client

    def _generate_json(self, parts: list, schema: Dict[str, Any]) -> Any:
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=parts,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=schema,
                ),
            )
        except Exception as exc:
            logger.error(f"Gemini request failed: {exc}")
            raise SwingAnalysisError(f"Gemini request failed: {exc}") from exc

        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise SwingAnalysisError("No analysis received.")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SwingAnalysisError(f"Gemini returned invalid JSON: {exc}") from exc

    def analyze_swing_video(self, video: bytes, mime_type: str) -> SwingReport:
        """
        Analyze a single swing clip.

        Args:
            video: Raw video bytes
            mime_type: Video mime type, e.g. "video/mp4"

        Returns:
            SwingReport with scores normalized to 0-100
        """
        raw = self._generate_json(
            [types.Part.from_bytes(data=video, mime_type=mime_type), ANALYSIS_PROMPT],
            SWING_ANALYSIS_SCHEMA,
        )
        try:
            report = SwingReport.model_validate(raw)
        except ValidationError as exc:
            raise SwingAnalysisError(f"Malformed swing report: {exc}") from exc
        logger.info(f"Swing analysis received (overall {report.overall_score})")
        return normalize_report(report)

    def compare_swings(self, video_a: bytes, video_b: bytes, mime_type: str) -> ComparativeReport:
        """Compare a reference swing (A) against the current swing (B)."""
        raw = self._generate_json(
            [
                types.Part.from_bytes(data=video_a, mime_type=mime_type),
                types.Part.from_bytes(data=video_b, mime_type=mime_type),
                COMPARISON_PROMPT,
            ],
            COMPARISON_SCHEMA,
        )
        try:
            return ComparativeReport.model_validate(raw)
        except ValidationError as exc:
            raise SwingAnalysisError(f"Malformed comparison report: {exc}") from exc


def main() -> None:
    load_env()
    parser = argparse.ArgumentParser(description="Swing Coach Agent")
    parser.add_argument("video_path", help="Path to a swing video")
    args = parser.parse_args()

    video, mime_type = load_video(args.video_path)
    report = SwingCoachAgent().analyze_swing_video(video, mime_type)
    print(json.dumps(report.to_json_dict(), indent=2))


if __name__ == "__main__":
    main()
