"""
Search module - Structured filtering, intent extraction, and relevance ranking.

Provides:
- StructuredSearchEngine: AND/OR multi-field filter
- IntentExtractor: LLM intent extraction with keyword fallback
- RelevanceScorer: 0-100 additive relevance score
- NaturalLanguageSearchPipeline: query → intent → ranked results
"""
from .structured_search import StructuredSearchEngine
from .intent_extractor import (
    IntentExtractor,
    LLMIntentExtractor,
    FallbackIntentExtractor,
    IntentValidation,
    validate_intent,
)
from .relevance import RelevanceScorer, ScoreBreakdown
from .nl_search import NaturalLanguageSearchPipeline

__all__ = [
    "StructuredSearchEngine",
    "IntentExtractor",
    "LLMIntentExtractor",
    "FallbackIntentExtractor",
    "IntentValidation",
    "validate_intent",
    "RelevanceScorer",
    "ScoreBreakdown",
    "NaturalLanguageSearchPipeline",
]
