#!/usr/bin/env python3
"""
JustSwing - AI baseball swing coach (command line)

Analyze a swing clip with Gemini, keep a local vault of reports and
comparisons, and work through the drill library with progress tracking.

Usage:
  justswing analyze videos/swing.mp4
  justswing compare before.mp4 after.mp4
  justswing compare --history 4k2j9x0ab after.mp4
  justswing drills [--all]
  justswing drill stride-freeze
  justswing complete stride-freeze --rating 4 --notes "felt balanced"
  justswing profile | progress | history [show ID | delete ID] | reset
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from analysis.history import HistoryVault
from analysis.models import ComparativeReport, HistoryItem, SwingReport
from drills.assessment import SkillAssessor, UserSkillProfile
from drills.catalog import ALL_DRILLS, Drill, get_drill
from drills.matcher import DrillMatcher
from drills.progress import DrillProgress, ProgressStore
from drills.recommendations import ShelfEntry, library_shelves
from utils.config import Settings, load_env, load_settings
from utils.io import VideoValidationError, load_video
from utils.kv_store import ALL_KEYS, JsonFileStore, KeyValueStore


logger = logging.getLogger("swing_coach")

PHASE_TITLES = {
    "stance": "Stance",
    "load": "Load",
    "path": "Path / Contact",
    "followThrough": "Follow-Through",
}


def build_store(settings: Settings) -> KeyValueStore:
    if settings.store_backend == "firestore":
        from utils.firebase_storage import FirestoreStore

        logger.info(f"Using Firestore collection {settings.firestore_collection}")
        return FirestoreStore(collection=settings.firestore_collection,
                              project_id=settings.firebase_project_id)
    logger.info(f"Using local vault {settings.vault_path}")
    return JsonFileStore(settings.vault_path)


class CoachContext:
    """Stores and services shared by every command."""

    def __init__(self, store: KeyValueStore, settings: Optional[Settings] = None,
                 agent=None) -> None:
        self.settings = settings or Settings()
        self.store = store
        self.matcher = DrillMatcher(ALL_DRILLS)
        self._agent = agent
        self.reload()

    def reload(self) -> None:
        """Re-read progress, profile and history from the store."""
        self.progress = ProgressStore(self.store)
        self.assessor = SkillAssessor(self.store)
        self.history = HistoryVault(self.store)

    @property
    def agent(self):
        if self._agent is None:
            from agents.swing_coach_agent import SwingCoachAgent

            self._agent = SwingCoachAgent(model=self.settings.model)
            logger.info("Swing coach agent initialised")
        return self._agent

    def latest_report(self) -> Optional[SwingReport]:
        analyses = self.history.analyses()
        return analyses[0].data if analyses else None


# ----------------------------------------------------------------------
# Formatting
# ----------------------------------------------------------------------
def _progress_badge(progress: Optional[DrillProgress]) -> str:
    if progress is None or not progress.sessions:
        return ""
    count = len(progress.sessions)
    return f"  ✅ {count} session{'s' if count != 1 else ''}"


def format_drill_line(drill: Drill, progress: Optional[DrillProgress] = None) -> str:
    return (f"  [{drill.id}] {drill.title} - {drill.category}, {drill.difficulty}, "
            f"{drill.duration}{_progress_badge(progress)}")


def format_drill_detail(drill: Drill, progress: Optional[DrillProgress]) -> List[str]:
    lines = [
        f"🏋️  {drill.title}",
        f"Focus: {drill.category} | {drill.difficulty} | {drill.duration}",
        "",
        drill.description,
        "",
        "Step-by-Step Guide:",
    ]
    lines += [f"  {i}. {step}" for i, step in enumerate(drill.steps, 1)]
    if progress is not None:
        lines += ["", f"Completed {len(progress.sessions)} time(s), first on {progress.completed_at:%Y-%m-%d}"]
        if progress.rating is not None:
            lines.append(f"Rating: {'★' * progress.rating}{'☆' * (5 - progress.rating)}")
        if progress.notes:
            lines.append(f"Notes: {progress.notes}")
    return lines


def format_report(report: SwingReport, ctx: CoachContext) -> List[str]:
    stats = report.estimated_stats
    lines = [
        f"⚾ Swing Score: {report.overall_score:g}/100",
        f"Exit velocity: {stats.exit_velocity or 'N/A'} | Launch angle: {stats.launch_angle or 'N/A'} "
        f"| Bat speed: {stats.bat_speed or 'N/A'}",
        "",
        report.summary,
        "",
    ]
    for phase, analysis in report.metrics.items():
        marker = f" @ {analysis.timestamp}" if analysis.timestamp else ""
        lines.append(f"{PHASE_TITLES[phase]}: {analysis.score:g}/100{marker}")
        if analysis.feedback:
            lines.append(f"  {analysis.feedback}")
    if report.key_issues:
        lines += ["", "Key issues:"] + [f"  - {issue}" for issue in report.key_issues]

    plan = ctx.matcher.action_plan(report)
    if plan:
        lines += ["", "Action plan:"]
        for item in plan:
            progress = ctx.progress.get_progress(item.drill.id)
            lines.append(f"  ({PHASE_TITLES[item.phase]}) {item.name} -> "
                         f"[{item.drill.id}] {item.drill.title}{_progress_badge(progress)}")
    return lines


def format_comparison(report: ComparativeReport) -> List[str]:
    arrows = {"better": "⬆️", "worse": "⬇️", "neutral": "➡️"}
    lines = ["🔁 Swing Evolution", "", report.comparison_summary]
    if report.improvements:
        lines += ["", "Improvements:"] + [f"  + {x}" for x in report.improvements]
    if report.regressions:
        lines += ["", "Regressions:"] + [f"  - {x}" for x in report.regressions]
    if report.metric_deltas:
        lines += ["", "Metric deltas:"]
        lines += [f"  {arrows[d.direction]} {d.label}: {d.change}" for d in report.metric_deltas]
    return lines


def format_profile(profile: UserSkillProfile) -> List[str]:
    return [
        f"🎯 Skill level: {profile.overall_level}",
        f"Strengths: {', '.join(profile.strengths) or 'None yet'}",
        f"Weaknesses: {', '.join(profile.weaknesses) or 'None'}",
        f"Recommended focus: {', '.join(profile.recommended_focus)}",
        f"Last assessed: {profile.last_assessment:%Y-%m-%d %H:%M}",
    ]


def format_history_item(item: HistoryItem, ctx: CoachContext) -> List[str]:
    lines = [f"[{item.id}] {item.timestamp:%Y-%m-%d %H:%M} {item.type.upper()} - {item.summary_title}"]
    if isinstance(item.data, SwingReport):
        preview = ctx.matcher.history_preview(item.data)
        if preview:
            lines.append("    Drills: " + ", ".join(drill.title for drill in preview))
    return lines


def _print(lines: Sequence[str]) -> None:
    print("\n".join(lines))


def _print_shelf(title: str, entries: Sequence[ShelfEntry]) -> None:
    print(f"\n{title}")
    for entry in entries:
        print(format_drill_line(entry.drill, entry.progress))


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------
def cmd_analyze(args: argparse.Namespace, ctx: CoachContext) -> int:
    path = Path(args.video)
    video, mime_type = load_video(path, ctx.settings.max_video_mb)
    print(f"📤 Analyzing {path.name} ...")
    report = ctx.agent.analyze_swing_video(video, mime_type)
    report.video_url = str(path.resolve())

    item = ctx.history.add("analysis", report)
    profile = ctx.assessor.assess(report)

    _print(format_report(report, ctx))
    print("")
    _print(format_profile(profile))
    print(f"\n✅ Saved to history as {item.id}")
    return 0


def cmd_compare(args: argparse.Namespace, ctx: CoachContext) -> int:
    if args.history:
        reference = ctx.history.get(args.history)
        if reference is None or not isinstance(reference.data, SwingReport):
            raise KeyError(f"No analysis in history with id {args.history}")
        if not reference.data.video_url:
            raise ValueError("No video available in history item")
        if len(args.videos) != 1:
            raise ValueError("Pass exactly one current video with --history")
        path_a, path_b = Path(reference.data.video_url), Path(args.videos[0])
    else:
        if len(args.videos) != 2:
            raise ValueError("Pass a reference video and a current video")
        path_a, path_b = Path(args.videos[0]), Path(args.videos[1])

    video_a, mime_a = load_video(path_a, ctx.settings.max_video_mb)
    video_b, mime_b = load_video(path_b, ctx.settings.max_video_mb)
    print(f"📤 Comparing {path_a.name} -> {path_b.name} ...")
    # History comparisons send the current clip's type, fresh uploads the reference's
    mime_type = mime_b if args.history else mime_a
    result = ctx.agent.compare_swings(video_a, video_b, mime_type)

    item = ctx.history.add("comparison", result)
    _print(format_comparison(result))
    print(f"\n✅ Saved to history as {item.id}")
    return 0


def cmd_drills(args: argparse.Namespace, ctx: CoachContext) -> int:
    profile = ctx.assessor.load_profile()
    report = ctx.latest_report()
    shelves = library_shelves(ALL_DRILLS, ctx.matcher, ctx.progress, profile, report)

    print("📚 DRILL LIBRARY")
    if shelves.completion_count:
        level = f" | Skill level: {shelves.skill_level}" if shelves.skill_level else ""
        print(f"{shelves.completion_count} drills completed | {shelves.total_sessions} total sessions{level}")

    if shelves.recommended:
        _print_shelf("⭐ Recommended for You", shelves.recommended)
    if shelves.prescribed:
        _print_shelf("🩺 Your Prescribed Plan", shelves.prescribed)
    if args.all or not (shelves.recommended or shelves.prescribed):
        _print_shelf("All Training Drills", shelves.other)
    return 0


def cmd_drill(args: argparse.Namespace, ctx: CoachContext) -> int:
    drill = get_drill(args.drill_id)
    if drill is None:
        raise KeyError(f"Unknown drill: {args.drill_id}")
    _print(format_drill_detail(drill, ctx.progress.get_progress(drill.id)))
    return 0


def cmd_complete(args: argparse.Namespace, ctx: CoachContext) -> int:
    if get_drill(args.drill_id) is None and not args.drill_id.startswith("gen-"):
        raise KeyError(f"Unknown drill: {args.drill_id}")
    entry = ctx.progress.record_completion(args.drill_id, rating=args.rating, notes=args.notes)
    print(f"✅ {args.drill_id} completed ({len(entry.sessions)} session(s) total)")
    return 0


def cmd_profile(args: argparse.Namespace, ctx: CoachContext) -> int:
    profile = ctx.assessor.load_profile()
    if profile is None:
        print("💡 No skill profile yet. Run `justswing analyze VIDEO` first.")
        return 0
    _print(format_profile(profile))
    return 0


def cmd_progress(args: argparse.Namespace, ctx: CoachContext) -> int:
    print(f"📈 {ctx.progress.completion_count()} drills completed | "
          f"{ctx.progress.total_sessions()} total sessions")
    for entry in ctx.progress.all_progress():
        drill = get_drill(entry.drill_id)
        title = drill.title if drill else entry.drill_id
        print(f"  {title}: {len(entry.sessions)} session(s){_progress_rating(entry)}")
    return 0


def _progress_rating(entry: DrillProgress) -> str:
    return f", rated {entry.rating}/5" if entry.rating is not None else ""


def cmd_history(args: argparse.Namespace, ctx: CoachContext) -> int:
    if args.action == "show":
        item = ctx.history.get(args.item_id)
        if item is None:
            raise KeyError(f"No history item with id {args.item_id}")
        if isinstance(item.data, SwingReport):
            _print(format_report(item.data, ctx))
        else:
            _print(format_comparison(item.data))
        return 0

    if args.action == "delete":
        if not ctx.history.delete(args.item_id):
            raise KeyError(f"No history item with id {args.item_id}")
        print(f"🗑️  Deleted {args.item_id}")
        return 0

    items = ctx.history.items()
    if not items:
        print("NO SESSIONS RECORDED. Run an analysis to start building your swing history vault.")
        return 0
    print(f"🗄️  SESSION VAULT - {len(items)} sessions saved")
    for item in items:
        _print(format_history_item(item, ctx))
    return 0


def cmd_reset(args: argparse.Namespace, ctx: CoachContext) -> int:
    if not args.yes:
        try:
            answer = input("Clear ALL app data? This will reset history, progress, and profile. [y/N] ")
        except EOFError:
            answer = ""
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled.")
            return 0
    # Store errors propagate to main
    ctx.store.clear(ALL_KEYS)
    ctx.reload()
    print("✅ All data cleared")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="justswing", description="AI baseball swing coach")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show info logs")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("analyze", help="Analyze a swing video")
    p.add_argument("video")
    p.set_defaults(func=cmd_analyze)

    p = sub.add_parser("compare", help="Compare two swings")
    p.add_argument("videos", nargs="+", help="Reference then current video (or just current with --history)")
    p.add_argument("--history", metavar="ID", help="Use a saved analysis as the reference swing")
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("drills", help="Show the drill library")
    p.add_argument("--all", action="store_true", help="Also list every other drill")
    p.set_defaults(func=cmd_drills)

    p = sub.add_parser("drill", help="Show one drill")
    p.add_argument("drill_id")
    p.set_defaults(func=cmd_drill)

    p = sub.add_parser("complete", help="Mark a drill session complete")
    p.add_argument("drill_id")
    p.add_argument("--rating", type=int, choices=range(1, 6), metavar="1-5")
    p.add_argument("--notes")
    p.set_defaults(func=cmd_complete)

    p = sub.add_parser("profile", help="Show your skill profile")
    p.set_defaults(func=cmd_profile)

    p = sub.add_parser("progress", help="Show drill progress")
    p.set_defaults(func=cmd_progress)

    p = sub.add_parser("history", help="List, show or delete saved sessions")
    p.add_argument("action", nargs="?", choices=["list", "show", "delete"], default="list")
    p.add_argument("item_id", nargs="?")
    p.set_defaults(func=cmd_history)

    p = sub.add_parser("reset", help="Clear all saved data")
    p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    p.set_defaults(func=cmd_reset)

    return parser


def main(argv: Optional[Sequence[str]] = None, ctx: Optional[CoachContext] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "history" and args.action in ("show", "delete") and not args.item_id:
        parser.error(f"history {args.action} needs an item id")

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        if ctx is None:
            load_env()
            settings = load_settings()
            ctx = CoachContext(build_store(settings), settings)
        return args.func(args, ctx)
    except (OSError, VideoValidationError) as exc:
        print(f"❌ {exc}")
        return 1
    except KeyError as exc:
        print(f"❌ {exc.args[0] if exc.args else exc}")
        return 1
    except (ValueError, RuntimeError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
