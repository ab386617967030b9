"""Drill matching: direct pass, keyword fallback, batch dedupe, placeholders."""

import pytest

from drills.catalog import ALL_DRILLS, get_drill
from drills.matcher import (
    DRILL_KEYWORD_MAP,
    PLACEHOLDER_STEPS,
    DrillMatcher,
    make_placeholder_drill,
    prescribed_drills,
)


@pytest.fixture
def matcher():
    return DrillMatcher(ALL_DRILLS)


@pytest.mark.parametrize("drill", ALL_DRILLS, ids=lambda d: d.id)
def test_exact_title_matches_that_drill(matcher, drill):
    assert matcher.match_drill(drill.title) == drill


def test_match_is_case_insensitive(matcher):
    assert matcher.match_drill("STOP AT CONTACT").id == "stop-at-contact"


def test_title_inside_longer_suggestion(matcher):
    assert matcher.match_drill("Do the Towel Under Arm drill daily").id == "towel-drill"


def test_suggestion_inside_title(matcher):
    assert matcher.match_drill("happy gilmore").id == "walking-start"


def test_direct_pass_is_first_match_in_catalog_order(matcher):
    # "tee work" is contained in both "High/Low Tee Work" and "Knee Down Tee Work"
    assert matcher.match_drill("tee work").id == "tee-height"


def test_keyword_fallback_stride(matcher):
    assert matcher.match_drill("stride work").id == "stride-freeze"


def test_keyword_fallback_skips_fragments_missing_from_catalog(matcher):
    # "med ball toss" is not a substring of "med ball side toss"; next fragment wins
    assert matcher.match_drill("explosive power").id == "weighted-bat"


def test_keyword_table_iterates_in_insertion_order(matcher):
    # both "balance" and "stance" appear; "balance" comes first in the table
    assert matcher.match_drill("stance balance").id == "balance-beam"


def test_direct_pass_beats_keyword_pass(matcher):
    # contains keyword "power" but also the full "Quick Hands Drill" title
    assert matcher.match_drill("power quick hands drill").id == "quick-hands"


def test_no_title_and_no_keyword_returns_none(matcher):
    assert matcher.match_drill("juggling oranges") is None


def test_blank_suggestion_returns_none(matcher):
    assert matcher.match_drill("   ") is None


def test_keyword_map_fragments_are_lowercase():
    for fragments in DRILL_KEYWORD_MAP.values():
        assert all(fragment == fragment.lower() for fragment in fragments)


class TestMatchAll:

    def test_never_returns_duplicate_ids(self, matcher):
        drills = matcher.match_all(["Stride Freeze Drill", "stride freeze", "stride work"])
        ids = [drill.id for drill in drills]
        assert len(ids) == len(set(ids))

    def test_repeat_suggestion_falls_through_to_next_candidate(self, matcher):
        drills = matcher.match_all(["stride work", "stride work"])
        assert [d.id for d in drills] == ["stride-freeze", "walking-start"]

    def test_keyword_pass_runs_while_batch_is_short(self, matcher):
        # direct match fills slot one; keyword "hand" adds another while 1 < 2
        drills = matcher.match_all(["Top Hand Isolation", "juggling oranges"])
        assert [d.id for d in drills] == ["one-hand", "back-hand"]

    def test_keyword_pass_skipped_once_batch_is_full(self, matcher):
        drills = matcher.match_all(["Quick Hands Drill"])
        assert [d.id for d in drills] == ["quick-hands"]

    def test_preserves_suggestion_order(self, matcher):
        drills = matcher.match_all(["Seat Belt Chair Drill", "High/Low Tee Work"])
        assert [d.id for d in drills] == ["chair-drill", "tee-height"]

    def test_unmatched_suggestions_are_dropped(self, matcher):
        assert matcher.match_all(["juggling oranges"]) == []

    def test_no_memo_between_calls(self, matcher):
        first = matcher.match_all(["stride work"])
        second = matcher.match_all(["stride work"])
        assert first == second


class TestPlaceholders:

    def test_placeholder_shape(self):
        drill = make_placeholder_drill("Juggle  Oranges\tFast", "load")
        assert drill.id == "gen-juggle-oranges-fast"
        assert drill.title == "Juggle  Oranges\tFast"
        assert "load" in drill.description
        assert drill.steps == PLACEHOLDER_STEPS
        assert (drill.category, drill.difficulty, drill.duration) == ("Path", "Intermediate", "15 mins")

    def test_resolve_falls_back_to_placeholder(self, matcher):
        drill = matcher.resolve("juggling oranges", "stance")
        assert drill.id == "gen-juggling-oranges"
        assert get_drill(drill.id) is None

    def test_resolve_prefers_catalog(self, matcher):
        assert matcher.resolve("stride work", "load").id == "stride-freeze"

    def test_placeholders_never_join_catalog(self, matcher):
        matcher.resolve("juggling oranges", "stance")
        assert len(matcher.catalog) == len(ALL_DRILLS)
        assert matcher.match_drill("juggling oranges") is None


class TestActionPlan:

    def test_one_item_per_suggestion_in_phase_order(self, matcher, report_factory):
        report = report_factory(drills={
            "followThrough": ["Perfect Follow-Through"],
            "stance": ["narrow stance drill", "juggling oranges"],
            "load": ["stride work"],
        })
        plan = matcher.action_plan(report)
        assert [(i.phase, i.drill.id) for i in plan] == [
            ("stance", "narrow-stance"),
            ("stance", "gen-juggling-oranges"),
            ("load", "stride-freeze"),
            ("followThrough", "follow-through"),
        ]

    def test_history_preview_is_first_three(self, matcher, report_factory):
        report = report_factory(drills={"stance": ["qqq1", "qqq2"], "path": ["qqq3", "qqq4"]})
        preview = matcher.history_preview(report)
        assert [d.id for d in preview] == ["gen-qqq1", "gen-qqq2", "gen-qqq3"]

    def test_prescribed_drills_without_report(self, matcher):
        assert prescribed_drills(matcher, None) == []

    def test_prescribed_drills_batches_all_phases(self, matcher, report_factory):
        report = report_factory(drills={"stance": ["stride work"], "load": ["stride work"]})
        assert [d.id for d in prescribed_drills(matcher, report)] == ["stride-freeze", "walking-start"]
