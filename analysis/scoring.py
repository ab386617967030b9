"""Score and timestamp helpers for AI-produced swing reports."""

from __future__ import annotations

from typing import Optional


def normalize_score(score: float) -> float:
    """Bring a score onto the 0-100 scale.

    The model is asked for 0-100 but sometimes answers on a 0-10 scale, so any
    score <= 10 is multiplied by 10.

    Known risk: a genuine low score such as 8/100 is indistinguishable from
    8/10 and comes back as 80.
    """
    return score * 10 if score <= 10 else score


def parse_timestamp(timestamp: Optional[str]) -> Optional[int]:
    """Convert an "m:ss" marker into seconds. Returns None when unparseable."""
    if not timestamp:
        return None
    parts = timestamp.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        minutes, seconds = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if minutes < 0 or not 0 <= seconds < 60:
        return None
    return minutes * 60 + seconds
