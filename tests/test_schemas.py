"""
Tests for search schemas and configuration.
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from toolcatalog.core.config import Settings
from toolcatalog.core.errors import MalformedConditions
from toolcatalog.core.schemas import (
    AdvancedSearchConditions,
    DateRange,
    RatingRange,
    ScoredResult,
    SearchableItem,
    SearchIntent,
    SearchOperator,
    ToolCategory,
)


class TestSearchableItem:

    def test_naive_timestamps_become_utc(self):
        item = SearchableItem(
            id="1", name="ChatGPT", category="text", rating=5,
            created_at="2024-01-01T00:00:00", usage_date=datetime(2024, 1, 15),
        )
        assert item.created_at.tzinfo == timezone.utc
        assert item.usage_date == datetime(2024, 1, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            SearchableItem(
                id="1", name="x", category="text", rating=rating,
                created_at="2024-01-01T00:00:00Z", usage_date="2024-01-01T00:00:00Z",
            )

    def test_unknown_category(self):
        with pytest.raises(ValidationError):
            SearchableItem(
                id="1", name="x", category="music", rating=3,
                created_at="2024-01-01T00:00:00Z", usage_date="2024-01-01T00:00:00Z",
            )

    def test_items_are_immutable(self, sample_tools):
        with pytest.raises(ValidationError):
            sample_tools[0].name = "changed"

    def test_from_record_maps_catalog_columns(self):
        item = SearchableItem.from_record({
            "id": 7,
            "tool_name": "Suno",
            "category": "audio",
            "rating": 4,
            "created_at": "2024-03-01T00:00:00Z",
            "usage_date": "2024-03-02T00:00:00Z",
            "usage_purpose": "作曲",
            "user_experience": "良い",
            "deleted_at": None,
        })
        assert item.id == "7"
        assert item.name == "Suno"
        assert item.category == ToolCategory.AUDIO
        assert item.description == "作曲"

    def test_from_record_prefers_description(self):
        item = SearchableItem.from_record({
            "id": "8", "tool_name": "Runway", "category": "video", "rating": 3,
            "created_at": "2024-03-01T00:00:00Z", "usage_date": "2024-03-02T00:00:00Z",
            "description": "video editing", "usage_purpose": "ads",
        })
        assert item.description == "video editing"


class TestConditions:

    def test_rating_range_order(self):
        assert RatingRange(min=2, max=2).min == 2
        with pytest.raises(ValidationError):
            RatingRange(min=4, max=3)

    def test_date_range_order(self):
        with pytest.raises(ValidationError):
            DateRange(start="2024-02-01T00:00:00Z", end="2024-01-01T00:00:00Z")

    def test_parse_wraps_validation_errors(self):
        with pytest.raises(MalformedConditions) as excinfo:
            AdvancedSearchConditions.parse({"operator": "AND", "ratingRange": {"min": 5, "max": 2}})
        assert isinstance(excinfo.value.__cause__, ValidationError)

    def test_direct_construction_raises_validation_error(self):
        raw = {"operator": "AND", "rating_range": {"min": 5, "max": 1}}
        with pytest.raises(ValidationError):
            AdvancedSearchConditions(**raw)
        with pytest.raises(MalformedConditions):
            AdvancedSearchConditions.parse(raw)

    def test_parse_accepts_camel_case(self):
        conditions = AdvancedSearchConditions.parse({
            "operator": "OR",
            "category": ["text", "code"],
            "dateRange": {"start": "2024-01-01T00:00:00", "end": "2024-12-31T23:59:59"},
        })
        assert conditions.operator == SearchOperator.OR
        assert conditions.category == frozenset({ToolCategory.TEXT, ToolCategory.CODE})
        assert conditions.date_range.start.tzinfo == timezone.utc

    def test_operator_is_required(self):
        with pytest.raises(MalformedConditions):
            AdvancedSearchConditions.parse({"keyword": "chat"})


class TestSearchIntent:

    def test_keywords_never_blank(self):
        intent = SearchIntent(keywords=[" a ", "", "\t"])
        assert intent.keywords == ["a"]

    def test_field_names_and_aliases(self):
        assert SearchIntent(min_rating=3) == SearchIntent.model_validate({"minRating": 3})


class TestScoredResult:

    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_bounds(self, sample_tools, score):
        with pytest.raises(ValidationError):
            ScoredResult(item=sample_tools[0], relevance_score=score)


def test_default_settings(monkeypatch):
    for var in ["LLM_MODEL", "LLM_BASE_URL", "INTENT_TIMEOUT_SECONDS", "USE_LLM_INTENT"]:
        monkeypatch.delenv(var, raising=False)
    s = Settings()
    assert s.llm.model == "gpt-4o-mini"
    assert s.llm.base_url == "https://api.openai.com/v1"
    assert s.search.intent_timeout == 5.0
    assert s.search.use_llm_intent is True


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("INTENT_TIMEOUT_SECONDS", "1.5")
    monkeypatch.setenv("USE_LLM_INTENT", "false")
    s = Settings()
    assert s.search.intent_timeout == 1.5
    assert s.search.use_llm_intent is False


def test_settings_read_dotenv_and_ignore_unknown_keys():
    assert Settings.model_config["env_file"] == ".env"
    assert Settings.model_config["extra"] == "ignore"
