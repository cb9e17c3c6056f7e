"""Unit tests for tool name resolution."""

import pytest

from ai_tool_recommender.discovery.resolution import normalize_name, resolve_tool_name


@pytest.fixture
def tools(make_tool):
    return [
        make_tool("chatgpt", name="ChatGPT"),
        make_tool("midjourney", name="Midjourney"),
        make_tool("dall-e-3", name="DALL-E 3"),
        make_tool("stable-diffusion", name="Stable Diffusion"),
        make_tool("github-copilot", name="GitHub Copilot"),
    ]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ChatGPT", "chatgpt"),
        ("Chat-GPT 4", "chatgpt4"),
        ("ＣｈａｔＧＰＴ", "chatgpt"),
        ("DALL·E_3", "dalle3"),
        ("画像 生成AI", "画像生成ai"),
        ("", ""),
    ],
)
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


class TestResolveToolName:
    """Tests for the three resolution stages."""

    def test_exact_match(self, tools):
        assert resolve_tool_name("chat gpt", tools).id == "chatgpt"

    def test_exact_match_ignores_width_and_punctuation(self, tools):
        assert resolve_tool_name("ＤＡＬＬ・Ｅ ３", tools).id == "dall-e-3"

    def test_name_contained_in_catalog_name(self, tools):
        assert resolve_tool_name("Copilot", tools).id == "github-copilot"

    def test_catalog_name_contained_in_name(self, tools):
        assert resolve_tool_name("Midjourney v6", tools).id == "midjourney"

    def test_edit_distance_fallback(self, tools):
        assert resolve_tool_name("Midjorney", tools).id == "midjourney"
        assert resolve_tool_name("Stabel Difusion", tools).id == "stable-diffusion"

    def test_exact_beats_containment(self, make_tool):
        tools = [make_tool("notion-ai", name="Notion AI"), make_tool("notion", name="Notion")]
        assert resolve_tool_name("Notion", tools).id == "notion"

    def test_containment_tie_goes_to_catalog_order(self, make_tool):
        tools = [
            make_tool("gen", name="Runway Gen"),
            make_tool("studio", name="Runway Studio"),
        ]
        assert resolve_tool_name("Runway", tools).id == "gen"

    def test_distance_tie_goes_to_catalog_order(self, make_tool):
        tools = [make_tool("abcx", name="abcx"), make_tool("abcy", name="abcy")]
        assert resolve_tool_name("abcz", tools).id == "abcx"

    def test_unknown_name_degrades_to_closest(self, tools):
        assert resolve_tool_name("Photoshop", tools) is not None

    def test_blank_name(self, tools):
        assert resolve_tool_name("", tools) is None
        assert resolve_tool_name(" - ", tools) is None

    def test_empty_catalog(self):
        assert resolve_tool_name("ChatGPT", []) is None
