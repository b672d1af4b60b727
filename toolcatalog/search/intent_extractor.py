"""
Intent extraction for natural-language search.

Provides:
- IntentExtractor: abstract capability turning a query into a SearchIntent
- LLMIntentExtractor: one JSON-mode call to the language-understanding service
- FallbackIntentExtractor: offline whitespace tokenization
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from ..core.errors import ExternalServiceError
from ..core.llm_client import LLMClient, extract_json
from ..core.schemas import SearchIntent

logger = logging.getLogger(__name__)


INTENT_SYSTEM_PROMPT = """You are a search assistant for a catalog of AI tools.
Analyze the user's natural-language query and return the search intent as a JSON object with exactly these fields:

{
  "keywords": ["keyword1", "keyword2"],
  "category": "text" | "image" | "video" | "audio" | "code" | "other" | null,
  "minRating": integer from 1 to 5 | null,
  "dateRange": "recent" | "last_week" | "last_month" | "last_year" | null
}

Categories:
- text: text generation, chat, writing support
- image: image generation, image editing
- video: video generation, video editing
- audio: speech synthesis, speech recognition
- code: code generation, programming support
- other: anything else

Date ranges (by when the tool was last used):
- "recently", "lately": recent
- "last week", "a week ago": last_week
- "last month", "a month ago": last_month
- "last year", "a year ago": last_year

Keywords must be non-empty strings taken from the query, in the query's language.
Use null for any field the query does not mention. Respond with the JSON object only."""


@dataclass
class IntentValidation:
    """Outcome of validating a decoded LLM payload: an intent or an error."""
    intent: SearchIntent | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.intent is not None


def validate_intent(payload: Any) -> IntentValidation:
    """
    Check a decoded JSON payload against the SearchIntent shape.

    Unknown keys are ignored; wrong types, out-of-range ratings and
    unknown category or date-bucket names are errors.
    """
    if not isinstance(payload, dict):
        return IntentValidation(error=f"expected a JSON object, got {type(payload).__name__}")
    try:
        return IntentValidation(intent=SearchIntent.model_validate(payload))
    except ValidationError as e:
        return IntentValidation(error=str(e))


class IntentExtractor(ABC):
    """Base class for anything that can turn a query into a SearchIntent."""

    @abstractmethod
    async def extract(self, query: str) -> SearchIntent:
        """
        Extract a search intent from a free-text query.

        Raises:
            ExternalServiceError: If the intent cannot be obtained
        """
        pass

    async def aclose(self):
        """Release any resources held by the extractor."""
        pass


class LLMIntentExtractor(IntentExtractor):
    """
    Extracts intents with a single call to an LLM in JSON mode.

    Transport failures, non-2xx statuses, unparsable bodies and schema
    violations all surface as ExternalServiceError.
    """

    def __init__(self, llm_client: LLMClient | None = None, system_prompt: str = INTENT_SYSTEM_PROMPT):
        self._owns_client = llm_client is None
        self.llm_client = llm_client or LLMClient()
        self.system_prompt = system_prompt

    async def aclose(self):
        """Close the LLM client if this extractor created it."""
        if self._owns_client:
            await self.llm_client.aclose()

    async def extract(self, query: str) -> SearchIntent:
        try:
            response = await self.llm_client.complete_json(self.system_prompt, query)
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Intent request failed: {e}") from e
        except ValueError as e:
            # Non-JSON envelope or missing message content
            raise ExternalServiceError(f"Intent response unusable: {e}") from e

        try:
            payload = json.loads(extract_json(response.content))
        except json.JSONDecodeError as e:
            logger.debug(f"Raw intent response: {response.content[:500]}")
            raise ExternalServiceError(f"Intent response is not valid JSON: {e}") from e

        validation = validate_intent(payload)
        if not validation.ok:
            logger.debug(f"Rejected intent payload: {payload}")
            raise ExternalServiceError(f"Intent response failed schema validation: {validation.error}")

        logger.debug(f"Extracted intent: {validation.intent.model_dump(exclude_none=True)}")
        return validation.intent


class FallbackIntentExtractor(IntentExtractor):
    """Keyword-only intent from whitespace splitting. Never fails."""

    def extract_fallback(self, query: str) -> SearchIntent:
        tokens = [token for token in query.strip().split() if token]
        return SearchIntent(keywords=tokens)

    async def extract(self, query: str) -> SearchIntent:
        return self.extract_fallback(query)
