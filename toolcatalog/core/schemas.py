"""
Pydantic schemas for catalog search.

These schemas define the catalog items the engine searches over, the
conditions and intents that drive a search, and the scored results it
returns. All of them are immutable snapshots.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import MalformedConditions


def _as_utc(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC so comparisons never mix kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ============================================================
# Enumerations
# ============================================================

class ToolCategory(str, Enum):
    """Catalog categories an AI tool can belong to."""
    TEXT = "text"      # Text generation, chat, writing support
    IMAGE = "image"    # Image generation and editing
    VIDEO = "video"    # Video generation and editing
    AUDIO = "audio"    # Speech synthesis and recognition
    CODE = "code"      # Code generation, programming support
    OTHER = "other"


class SearchOperator(str, Enum):
    """How the predicates of an advanced search are combined."""
    AND = "AND"
    OR = "OR"


class DateBucket(str, Enum):
    """Relative usage-date windows understood by natural-language search."""
    RECENT = "recent"
    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"
    LAST_YEAR = "last_year"


# ============================================================
# Catalog Items
# ============================================================

class SearchableItem(BaseModel):
    """A catalog entry as seen by the search engine."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Catalog identifier")
    name: str = Field(..., description="Tool name")
    category: ToolCategory
    rating: int = Field(..., ge=1, le=5, description="User rating, 1-5")
    created_at: datetime = Field(..., description="When the entry was created")
    usage_date: datetime = Field(..., description="When the tool was last used")
    description: str | None = None

    @field_validator("created_at", "usage_date")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SearchableItem":
        """
        Build an item from a persisted catalog row.

        Accepts the repository's column names (``tool_name``, ``usage_date``,
        ``created_at``) and uses ``usage_purpose`` as the description when no
        explicit ``description`` is stored.
        """
        return cls(
            id=str(record["id"]),
            name=record.get("tool_name") or record.get("name"),
            category=record["category"],
            rating=record["rating"],
            created_at=record["created_at"],
            usage_date=record["usage_date"],
            description=record.get("description") or record.get("usage_purpose"),
        )


# ============================================================
# Structured (Advanced) Search
# ============================================================

class RatingRange(BaseModel):
    """Inclusive rating bounds."""
    model_config = ConfigDict(frozen=True)

    min: int = Field(..., ge=1, le=5)
    max: int = Field(..., ge=1, le=5)

    @model_validator(mode="after")
    def _check_order(self) -> "RatingRange":
        if self.min > self.max:
            raise ValueError(f"rating range min ({self.min}) exceeds max ({self.max})")
        return self


class DateRange(BaseModel):
    """Inclusive creation-date bounds."""
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.start > self.end:
            raise ValueError(
                f"date range start ({self.start.isoformat()}) is after end ({self.end.isoformat()})"
            )
        return self


class AdvancedSearchConditions(BaseModel):
    """
    Conditions for the structured search engine.

    Every field except ``operator`` is optional. Absent fields take no part
    in the match decision.

    Build conditions from untrusted input with ``parse()``, which reports
    reversed ranges and other invalid values as MalformedConditions.
    Direct construction raises pydantic's ValidationError instead.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    operator: SearchOperator
    keyword: str | None = None
    category: frozenset[ToolCategory] | None = None
    rating_range: RatingRange | None = Field(None, alias="ratingRange")
    date_range: DateRange | None = Field(None, alias="dateRange")

    @field_validator("keyword")
    @classmethod
    def _empty_keyword_is_absent(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("category")
    @classmethod
    def _empty_category_is_absent(cls, value: frozenset[ToolCategory] | None):
        if value is not None and len(value) == 0:
            return None
        return value

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "AdvancedSearchConditions":
        """Validate raw condition input, raising MalformedConditions on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedConditions(str(e)) from e


# ============================================================
# Natural-Language Search
# ============================================================

class SearchIntent(BaseModel):
    """
    Structured intent extracted from a free-text query.

    Produced either by the LLM extractor or by the keyword fallback; the
    shape is identical so scoring does not care where it came from.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    keywords: list[str] = Field(default_factory=list)
    category: ToolCategory | None = None
    min_rating: int | None = Field(None, ge=1, le=5, alias="minRating")
    date_range: DateBucket | None = Field(None, alias="dateRange")

    @field_validator("keywords", mode="before")
    @classmethod
    def _null_keywords(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("keywords")
    @classmethod
    def _drop_blank_keywords(cls, value: list[str]) -> list[str]:
        return [k.strip() for k in value if k.strip()]


class ScoredResult(BaseModel):
    """A catalog item paired with its relevance to a search intent."""
    model_config = ConfigDict(frozen=True)

    item: SearchableItem
    relevance_score: int = Field(..., ge=0, le=100)


class NaturalLanguageSearchResult(BaseModel):
    """Ranked results plus how the query was interpreted."""
    model_config = ConfigDict(frozen=True)

    results: list[ScoredResult]
    intent: SearchIntent
    used_fallback: bool = False
    execution_time_ms: float = 0.0
