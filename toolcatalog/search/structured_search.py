"""
Structured multi-field filtering over catalog items.

Provides:
- Keyword, category, rating-range and date-range predicates
- AND/OR combination of whichever predicates are present
- Order-preserving results (sorting is left to the caller)
"""
import logging
import operator
from functools import reduce
from typing import Any, Callable, Mapping

from ..core.schemas import AdvancedSearchConditions, SearchOperator, SearchableItem

logger = logging.getLogger(__name__)

Predicate = Callable[[SearchableItem], bool]


class StructuredSearchEngine:
    """
    Deterministic filter for advanced search.

    Each present condition becomes an independent predicate. Predicates are
    folded with the operator starting from its identity element (True for
    AND, False for OR), so AND with no conditions keeps everything and OR
    with no conditions keeps nothing.
    """

    def filter(
        self,
        items: list[SearchableItem],
        conditions: AdvancedSearchConditions | Mapping[str, Any]
    ) -> list[SearchableItem]:
        """
        Filter items against advanced search conditions.

        Args:
            items: Candidate items, in caller order
            conditions: Parsed conditions or a raw mapping to validate

        Returns:
            Matching items in their original relative order

        Raises:
            MalformedConditions: If a raw mapping fails validation
        """
        if not isinstance(conditions, AdvancedSearchConditions):
            conditions = AdvancedSearchConditions.parse(conditions)

        predicates = self._build_predicates(conditions)
        if conditions.operator == SearchOperator.AND:
            combine, seed = operator.and_, True
        else:
            combine, seed = operator.or_, False

        results = [
            item for item in items
            if reduce(lambda acc, pred: combine(acc, pred(item)), predicates, seed)
        ]

        logger.debug(
            f"Structured search ({conditions.operator.value}, "
            f"{len(predicates)} conditions): {len(results)}/{len(items)} matched"
        )
        return results

    def _build_predicates(self, conditions: AdvancedSearchConditions) -> list[Predicate]:
        """Turn each present condition into a predicate; absent ones are skipped."""
        optional: list[Predicate | None] = [
            self._keyword_predicate(conditions.keyword),
            self._category_predicate(conditions.category),
            self._rating_predicate(conditions.rating_range),
            self._date_predicate(conditions.date_range),
        ]
        return [p for p in optional if p is not None]

    # --------------------------------------------------------
    # Predicates
    # --------------------------------------------------------

    @staticmethod
    def _keyword_predicate(keyword) -> Predicate | None:
        # Name only; descriptions are considered by relevance scoring
        if keyword is None:
            return None
        needle = keyword.lower()
        return lambda item: needle in item.name.lower()

    @staticmethod
    def _category_predicate(categories) -> Predicate | None:
        if not categories:
            return None
        return lambda item: item.category in categories

    @staticmethod
    def _rating_predicate(rating_range) -> Predicate | None:
        if rating_range is None:
            return None
        return lambda item: rating_range.min <= item.rating <= rating_range.max

    @staticmethod
    def _date_predicate(date_range) -> Predicate | None:
        if date_range is None:
            return None
        return lambda item: date_range.start <= item.created_at <= date_range.end

    # --------------------------------------------------------
    # Convenience Methods
    # --------------------------------------------------------

    @staticmethod
    def result_count(results: list[SearchableItem]) -> int:
        """Number of items in a result set."""
        return len(results)
