"""
Core module - Configuration, schemas, errors, and LLM client.
"""
from .config import Settings, get_settings
from .errors import ExternalServiceError, InvalidInput, MalformedConditions
from .llm_client import LLMClient, LLMResponse
from .schemas import (
    ToolCategory,
    SearchOperator,
    DateBucket,
    SearchableItem,
    RatingRange,
    DateRange,
    AdvancedSearchConditions,
    SearchIntent,
    ScoredResult,
    NaturalLanguageSearchResult,
)

__all__ = [
    "Settings",
    "get_settings",
    "ExternalServiceError",
    "InvalidInput",
    "MalformedConditions",
    "LLMClient",
    "LLMResponse",
    "ToolCategory",
    "SearchOperator",
    "DateBucket",
    "SearchableItem",
    "RatingRange",
    "DateRange",
    "AdvancedSearchConditions",
    "SearchIntent",
    "ScoredResult",
    "NaturalLanguageSearchResult",
]
