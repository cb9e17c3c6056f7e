"""Unit tests for the relevance scoring tables."""

import pytest

from ai_tool_recommender.discovery.normalize import normalize
from ai_tool_recommender.discovery.scoring import (
    explain,
    score,
    score_needs,
    score_terms,
)
from ai_tool_recommender.discovery.types import QueryContext


class TestNeedsTable:
    """Tests for needs, priorities, limitations and budget scoring."""

    @pytest.fixture
    def image_tool(self, make_tool):
        return make_tool(
            "img",
            features=["image generation"],
            has_free=True,
        )

    def test_scenario_free_image_generation(self, image_tool):
        ctx = QueryContext(needs=("image generation",), budget="free")
        assert score_needs(image_tool, ctx) == 5

    def test_scenario_limitation_penalty(self, make_tool):
        tool = make_tool(
            "img",
            features=["image generation"],
            cons=["no offline support"],
            has_free=True,
        )
        base = QueryContext(needs=("image generation",), budget="free")
        limited = QueryContext(
            needs=("image generation",),
            budget="free",
            limitations=("no offline support",),
        )
        assert score_needs(tool, limited) == score_needs(tool, base) - 2

    def test_need_points_per_field(self, make_tool):
        tool = make_tool(
            "t",
            features=["video editing"],
            use_cases=["video editing for ads"],
            description="Fast video editing.",
        )
        ctx = QueryContext(needs=("video editing",))
        assert score_needs(tool, ctx) == 3 + 2 + 1

    def test_points_accumulate_across_needs(self, make_tool):
        tool = make_tool("t", features=["translation", "summarization", "chat"])
        ctx = QueryContext(needs=("translation", "summarization", "chat"))
        assert score_needs(tool, ctx) == 9

    def test_matching_is_case_insensitive_substring(self, make_tool):
        tool = make_tool("t", features=["Image Generation (HD)"])
        ctx = QueryContext(needs=("IMAGE generation",))
        assert score_needs(tool, ctx) == 3

    def test_priorities(self, make_tool):
        tool = make_tool("t", pros=["easy to use"], features=["easy to use editor"])
        ctx = QueryContext(needs=("x",), priorities=("easy to use",))
        assert score_needs(tool, ctx) == 2 + 1

    def test_free_budget_without_free_plan_adds_nothing(self, make_tool):
        tool = make_tool("t", price="$10/month")
        ctx = QueryContext(needs=("x",), budget="無料")
        assert score_needs(tool, ctx) == 0

    def test_paid_budget_within(self, make_tool):
        tool = make_tool("t", price="$10/month")
        ctx = QueryContext(needs=("x",), budget="up to $20 per month")
        assert score_needs(tool, ctx) == 1

    def test_paid_budget_exceeded(self, make_tool):
        tool = make_tool("t", price="$30/month")
        ctx = QueryContext(needs=("x",), budget="$20")
        assert score_needs(tool, ctx) == -2

    def test_paid_budget_tool_without_price_counts_as_zero(self, make_tool):
        tool = make_tool("t")
        ctx = QueryContext(needs=("x",), budget="1000円")
        assert score_needs(tool, ctx) == 1

    def test_unconstrained_budget_adds_nothing(self, make_tool):
        tool = make_tool("t", price="$300/month", has_free=True)
        assert score_needs(tool, QueryContext(needs=("x",))) == 0
        assert score_needs(tool, QueryContext(needs=("x",), budget="")) == 0

    def test_negative_totals_allowed(self, make_tool):
        tool = make_tool("t", cons=["slow", "expensive"])
        ctx = QueryContext(needs=("x",), limitations=("slow", "expensive"))
        assert score_needs(tool, ctx) == -4

    def test_monotonic_in_needs(self, make_tool):
        tool = make_tool("t", features=["translation"], use_cases=["subtitles"])
        fewer = QueryContext(needs=("translation",))
        more = QueryContext(needs=("translation", "subtitles"))
        assert score_needs(tool, more) > score_needs(tool, fewer)


class TestTermsTable:
    """Tests for plain search scoring."""

    def test_points_per_field(self, make_tool):
        tool = make_tool(
            "t",
            name="Video Maker",
            category="video",
            subcategory="video tools",
            description="Makes video.",
            features=["video export"],
            use_cases=["video ads"],
            pros=["great video quality"],
        )
        assert score_terms(tool, {"video"}) == 10 + 8 + 6 + 5 + 4 + 3 + 2

    def test_free_bonus(self, make_tool):
        tool = make_tool("t", has_free=True)
        assert score_terms(tool, normalize("無料")) == 5

    def test_free_bonus_requires_free_plan(self, make_tool):
        tool = make_tool("t", price="$5")
        assert score_terms(tool, normalize("free")) == 0

    def test_beginner_bonus(self, make_tool):
        tool = make_tool("t", cons=["limited exports"])
        assert score_terms(tool, normalize("初心者")) == 3

    def test_beginner_bonus_blocked_by_difficulty(self, make_tool):
        tool = make_tool("t", cons=["steep learning curve"])
        assert score_terms(tool, normalize("easy")) == 0

    def test_no_terms_scores_zero(self, make_tool):
        tool = make_tool("t", name="Anything", has_free=True)
        assert score_terms(tool, set()) == 0


class TestCombinedScore:
    """Tests for the combined score and explanations."""

    def test_tables_are_summed(self, make_tool):
        tool = make_tool("t", name="Translator", features=["translation"], has_free=True)
        ctx = QueryContext(needs=("translation",), budget="free")
        terms = {"translat"}
        assert score(tool, ctx, terms) == score_needs(tool, ctx) + score_terms(tool, terms)

    def test_no_inputs_scores_zero(self, make_tool):
        assert score(make_tool("t")) == 0

    def test_explain_lists_contributing_rows(self, make_tool):
        tool = make_tool("t", features=["image generation"], has_free=True)
        ctx = QueryContext(needs=("image generation",), budget="free")
        reasons = explain(tool, ctx)
        assert "need in features: image generation" in reasons
        assert "free plan available" in reasons

    def test_scoring_does_not_mutate_tool(self, make_tool):
        tool = make_tool("t", features=["image generation"])
        before = repr(tool)
        score(tool, QueryContext(needs=("image",)), normalize("image"))
        assert repr(tool) == before
