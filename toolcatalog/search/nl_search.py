"""
Natural-language search over catalog items.

Pipeline:
1. Intent extraction via the primary extractor (LLM), bounded by a timeout
2. Keyword-splitting fallback when extraction fails
3. Relevance scoring of every candidate
4. Zero-score removal and stable descending sort
"""
import asyncio
import logging
import time
from datetime import datetime

from ..core.config import get_settings
from ..core.errors import ExternalServiceError, InvalidInput
from ..core.schemas import NaturalLanguageSearchResult, ScoredResult, SearchIntent, SearchableItem
from .intent_extractor import FallbackIntentExtractor, IntentExtractor, LLMIntentExtractor
from .relevance import RelevanceScorer

logger = logging.getLogger(__name__)


class NaturalLanguageSearchPipeline:
    """
    Ranks catalog items against a free-text query.

    The pipeline holds no per-search state, so one instance can serve
    concurrent searches. Each search makes at most one call to the
    primary extractor and never retries it.
    """

    def __init__(
        self,
        extractor: IntentExtractor | None = None,
        fallback: FallbackIntentExtractor | None = None,
        scorer: RelevanceScorer | None = None,
        intent_timeout: float | None = None
    ):
        """
        Initialize the pipeline.

        Args:
            extractor: Primary intent extractor. Defaults to the LLM extractor,
                or to keyword splitting when USE_LLM_INTENT is off.
            fallback: Extractor used when the primary one fails
            scorer: Relevance scorer
            intent_timeout: Seconds to wait for the primary extractor
        """
        settings = get_settings()

        self.fallback = fallback or FallbackIntentExtractor()
        self._owns_extractor = extractor is None
        if extractor is None:
            extractor = LLMIntentExtractor() if settings.search.use_llm_intent else self.fallback
        self.extractor = extractor
        self.scorer = scorer or RelevanceScorer()
        self.intent_timeout = intent_timeout if intent_timeout is not None else settings.search.intent_timeout

        logger.info(
            f"NaturalLanguageSearchPipeline initialized "
            f"(extractor={type(self.extractor).__name__}, timeout={self.intent_timeout}s)"
        )

    async def search(self, query: str, items: list[SearchableItem]) -> list[ScoredResult]:
        """
        Rank items by relevance to a free-text query.

        Args:
            query: Natural-language query
            items: Candidate items, in caller order

        Returns:
            Items with a non-zero score, highest first; ties keep input order

        Raises:
            InvalidInput: If the query is empty or whitespace-only
        """
        detailed = await self.search_detailed(query, items)
        return detailed.results

    async def search_detailed(
        self,
        query: str,
        items: list[SearchableItem]
    ) -> NaturalLanguageSearchResult:
        """Like search(), also reporting the intent used and whether it came from the fallback."""
        if not query or not query.strip():
            raise InvalidInput("Search query must not be empty")

        start_time = time.time()

        intent, used_fallback = await self.resolve_intent(query)
        results = self.rank(items, intent)

        execution_time = (time.time() - start_time) * 1000  # ms
        logger.info(
            f"NL search '{query[:50]}': {len(results)}/{len(items)} results "
            f"(fallback={used_fallback}, {execution_time:.1f}ms)"
        )

        return NaturalLanguageSearchResult(
            results=results,
            intent=intent,
            used_fallback=used_fallback,
            execution_time_ms=execution_time
        )

    async def resolve_intent(self, query: str) -> tuple[SearchIntent, bool]:
        """
        Get the intent for a query: primary extractor first, fallback on failure.

        Returns:
            (intent, used_fallback); used_fallback is also True when the
            primary extractor is itself keyword splitting (offline mode)
        """
        try:
            intent = await asyncio.wait_for(self.extractor.extract(query), timeout=self.intent_timeout)
            return intent, isinstance(self.extractor, FallbackIntentExtractor)
        except asyncio.TimeoutError:
            logger.warning(
                f"Intent extraction timed out after {self.intent_timeout}s, falling back to keyword search"
            )
        except ExternalServiceError as e:
            logger.warning(f"Intent extraction failed, falling back to keyword search: {e}")

        return self.fallback.extract_fallback(query), True

    def rank(
        self,
        items: list[SearchableItem],
        intent: SearchIntent,
        now: datetime | None = None
    ) -> list[ScoredResult]:
        """Score every item, drop zero scores, sort descending (stable)."""
        scored = [
            ScoredResult(item=item, relevance_score=self.scorer.score(item, intent, now))
            for item in items
        ]
        # sorted() is stable: equal scores keep their input order
        return sorted(
            (r for r in scored if r.relevance_score > 0),
            key=lambda r: r.relevance_score,
            reverse=True
        )

    async def aclose(self):
        """Close the extractor if this pipeline created it."""
        if self._owns_extractor:
            await self.extractor.aclose()

    async def __aenter__(self) -> "NaturalLanguageSearchPipeline":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
