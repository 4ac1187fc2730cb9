"""
Test suite for heuristic brief scoring.

System role: Verification of brief checks and agent score normalisation
"""

import pytest

from cigno.core.brief_scoring import (
    derive_brief_insights,
    merge_agent_evaluation,
    normalize_score,
    normalize_text_list,
)

STRONG_BRIEF = (
    "Objective: define the growth strategy for the client's wealth business in Switzerland. "
    "The audience is the executive board. We need market sizing of the affluent segment, a "
    "competitive benchmark against peers, a capability assessment of the operating model, a gap "
    "analysis versus leaders and strategic options (build, partner, acquisition) with a roadmap "
    "and implementation sequencing. "
) * 4


class TestDeriveBriefInsights:
    def test_empty_brief_should_score_zero(self) -> None:
        insights = derive_brief_insights("   ")

        assert insights["score"] == 0.0
        assert insights["strengths"] == []
        assert len(insights["improvements"]) == 1

    def test_short_vague_brief_should_list_gaps(self) -> None:
        insights = derive_brief_insights("Look at the market.")

        assert insights["score"] < 5
        assert any("Expand the brief" in item for item in insights["improvements"])
        assert insights["summary"].startswith("Key gaps detected:")

    def test_complete_brief_should_score_high(self) -> None:
        insights = derive_brief_insights(STRONG_BRIEF)

        assert insights["score"] >= 8
        assert "Specifies the geography or market focus." in insights["strengths"]
        assert "Market sizing is called out." in insights["strengths"]

    def test_score_should_stay_within_bounds(self) -> None:
        for brief in ("x", STRONG_BRIEF * 3):
            assert 0 <= derive_brief_insights(brief)["score"] <= 10


@pytest.mark.parametrize(
    ("value", "expected"),
    [(7, 7.0), (85, 8.5), ("8.25 / 10", 8.2), ("n/a", None), (None, None), (True, None), (float("nan"), None)],
)
def test_normalize_score(value, expected) -> None:
    assert normalize_score(value) == expected


def test_normalize_text_list_should_split_bullets() -> None:
    assert normalize_text_list("first; second\n• third") == ["first", "second", "third"]
    assert normalize_text_list([" a ", "", "b"]) == ["a", "b"]


class TestMergeAgentEvaluation:
    def test_agent_score_and_lists_should_come_first(self) -> None:
        heuristic = derive_brief_insights("Look at the market.")

        merged = merge_agent_evaluation(
            {"qualityScore": 72, "strengths": ["Clear scope"], "summary": "Solid"}, heuristic
        )

        assert merged["quality_score"] == 7.2
        assert merged["strengths"][0] == "Clear scope"
        assert merged["improvements"] == heuristic["improvements"]
        assert merged["summary"] == "Solid"

    def test_missing_agent_payload_should_use_heuristic(self) -> None:
        heuristic = derive_brief_insights("Look at the market.")

        merged = merge_agent_evaluation(None, heuristic)

        assert merged["quality_score"] == heuristic["score"]
        assert merged["summary"] == heuristic["summary"]
