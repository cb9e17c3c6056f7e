"""Unit tests for the tool catalog."""

import json

import pytest

from ai_tool_recommender.discovery.catalog import ToolCatalog, load_default_catalog
from ai_tool_recommender.discovery.types import ToolRecord, parse_number
from ai_tool_recommender.exceptions import CatalogError

ENTRY = {
    "id": "runway",
    "name": "Runway",
    "category": "Video Editing",
    "subcategory": "Video Generation",
    "description": "AI video generation.",
    "features": ["video generation"],
    "useCases": ["social media clips"],
    "pricing": {
        "hasFree": True,
        "freeFeatures": ["125 credits"],
        "paidPlans": [
            {"name": "Standard", "price": "$15/month", "billingCycle": "monthly"}
        ],
    },
    "officialUrl": "https://runwayml.com",
    "apiAvailable": True,
    "pros": ["browser based"],
    "cons": ["learning curve for advanced tools"],
    "imageUrl": "https://example.com/runway.png",
}


class TestToolRecord:
    """Tests for building records from catalog entries."""

    def test_from_dict_maps_camel_case(self):
        tool = ToolRecord.from_dict(ENTRY)
        assert tool.use_cases == ("social media clips",)
        assert tool.official_url == "https://runwayml.com"
        assert tool.image_url == "https://example.com/runway.png"
        assert tool.api_available is True
        assert tool.pricing.has_free is True
        assert tool.pricing.paid_plans[0].billing_cycle == "monthly"

    def test_missing_optional_fields(self):
        tool = ToolRecord.from_dict({"id": "x", "name": "X"})
        assert tool.features == ()
        assert tool.pricing.paid_plans == ()
        assert tool.price_label == "free"
        assert tool.first_paid_price == 0

    def test_price_helpers(self):
        tool = ToolRecord.from_dict(ENTRY)
        assert tool.first_paid_price == 15
        assert tool.price_label == "$15/month"

    def test_beginner_friendly(self):
        assert not ToolRecord.from_dict(ENTRY).is_beginner_friendly
        assert ToolRecord.from_dict({"id": "x", "name": "X"}).is_beginner_friendly

    def test_records_are_frozen(self):
        tool = ToolRecord.from_dict(ENTRY)
        with pytest.raises(AttributeError):
            tool.name = "Other"


class TestParseNumber:
    """Tests for price parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("$20/month", 20),
            ("月額1,500円", 1500),
            ("$8.74/month", 8.74),
            ("up to 30 dollars, maybe 40", 30),
            ("free", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_parse_number(self, text, expected):
        assert parse_number(text) == expected


class TestToolCatalog:
    """Tests for catalog construction and lookup."""

    def test_from_entries_keeps_order(self):
        catalog = ToolCatalog.from_entries(
            [ENTRY, {"id": "b", "name": "B"}, {"id": "a", "name": "A"}]
        )
        assert [t.id for t in catalog] == ["runway", "b", "a"]
        assert len(catalog) == 3

    @pytest.mark.parametrize(
        "entry",
        [
            "not an object",
            {"name": "No Id"},
            {"id": "no-name"},
            {"id": "", "name": "Blank"},
        ],
    )
    def test_invalid_entry(self, entry):
        with pytest.raises(CatalogError):
            ToolCatalog.from_entries([entry])

    def test_get_by_id(self, sample_catalog):
        assert sample_catalog.get_by_id("deepl").name == "DeepL"
        assert sample_catalog.get_by_id("missing") is None

    def test_duplicate_id_first_wins(self, make_tool):
        first = make_tool("dup", name="First")
        second = make_tool("dup", name="Second")
        assert ToolCatalog([first, second]).get_by_id("dup") is first

    def test_find_by_name_ignores_case(self, sample_catalog):
        assert sample_catalog.find_by_name("github copilot").id == "copilot"
        assert sample_catalog.find_by_name(" DEEPL ").id == "deepl"
        assert sample_catalog.find_by_name("copilot") is None

    def test_position(self, sample_catalog, make_tool):
        assert sample_catalog.position(sample_catalog.get_by_id("midjourney")) == 0
        assert sample_catalog.position(sample_catalog.get_by_id("copilot")) == 3
        assert sample_catalog.position(make_tool("outsider")) == len(sample_catalog)

    def test_empty_catalog_is_falsy(self):
        assert not ToolCatalog()
        assert list(ToolCatalog()) == []


class TestCatalogFiles:
    """Tests for loading catalogs from disk."""

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "tools.json"
        path.write_text(json.dumps([ENTRY]), encoding="utf-8")
        catalog = ToolCatalog.from_json_file(path)
        assert catalog.get_by_id("runway").name == "Runway"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Failed to read catalog"):
            ToolCatalog.from_json_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tools.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(CatalogError):
            ToolCatalog.from_json_file(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "tools.json"
        path.write_text(json.dumps({"tools": [ENTRY]}), encoding="utf-8")
        with pytest.raises(CatalogError, match="JSON list"):
            ToolCatalog.from_json_file(path)

    def test_bundled_catalog(self):
        catalog = load_default_catalog()
        assert len(catalog) == 10
        assert catalog.get_by_id("chatgpt").name == "ChatGPT"
        assert len({tool.id for tool in catalog}) == len(catalog)
