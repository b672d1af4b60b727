"""
Relevance scoring of catalog items against a search intent.

Scores are additive across four components and always fall in [0, 100]:

    keywords   up to 60  (+20 exact name, +15 name substring, +10 description)
    category   20
    rating     10        (item rating at or above the requested minimum)
    date       10        (last used within the requested window)
"""
from dataclasses import dataclass
from datetime import datetime, timezone

from ..core.schemas import DateBucket, SearchIntent, SearchableItem

EXACT_NAME_POINTS = 20
NAME_SUBSTRING_POINTS = 15
TEXT_SUBSTRING_POINTS = 10
KEYWORD_CAP = 60
CATEGORY_POINTS = 20
RATING_POINTS = 10
DATE_POINTS = 10

MAX_SCORE = 100

# Maximum days since last use for each bucket
DATE_BUCKET_DAYS: dict[DateBucket, int] = {
    DateBucket.RECENT: 7,
    DateBucket.LAST_WEEK: 7,
    DateBucket.LAST_MONTH: 30,
    DateBucket.LAST_YEAR: 365,
}

_SECONDS_PER_DAY = 60 * 60 * 24


@dataclass
class ScoreBreakdown:
    """Per-component contributions to a relevance score."""
    keyword: int = 0
    category: int = 0
    rating: int = 0
    date: int = 0

    @property
    def total(self) -> int:
        raw = self.keyword + self.category + self.rating + self.date
        return min(max(raw, 0), MAX_SCORE)

    def to_dict(self) -> dict:
        return {
            "keyword": self.keyword,
            "category": self.category,
            "rating": self.rating,
            "date": self.date,
            "total": self.total,
        }


class RelevanceScorer:
    """
    Pure scoring function over (item, intent).

    ``now`` can be passed to make date matching deterministic; it defaults
    to the current UTC time.
    """

    def score(
        self,
        item: SearchableItem,
        intent: SearchIntent,
        now: datetime | None = None
    ) -> int:
        """Relevance of item to intent, clamped to [0, 100]."""
        return self.breakdown(item, intent, now).total

    def breakdown(
        self,
        item: SearchableItem,
        intent: SearchIntent,
        now: datetime | None = None
    ) -> ScoreBreakdown:
        """Compute each scoring component separately."""
        return ScoreBreakdown(
            keyword=self._keyword_component(item, intent.keywords),
            category=CATEGORY_POINTS if intent.category is not None and item.category == intent.category else 0,
            rating=RATING_POINTS if intent.min_rating is not None and item.rating >= intent.min_rating else 0,
            date=self._date_component(item, intent.date_range, now),
        )

    @staticmethod
    def _keyword_component(item: SearchableItem, keywords: list[str]) -> int:
        if not keywords:
            return 0

        name = item.name.lower()
        text = f"{item.name} {item.description or ''}".lower()

        subtotal = 0
        for keyword in keywords:
            needle = keyword.lower()
            if name == needle:
                subtotal += EXACT_NAME_POINTS
            elif needle in name:
                subtotal += NAME_SUBSTRING_POINTS
            elif needle in text:
                subtotal += TEXT_SUBSTRING_POINTS

        return min(subtotal, KEYWORD_CAP)

    @staticmethod
    def _date_component(
        item: SearchableItem,
        bucket: DateBucket | None,
        now: datetime | None
    ) -> int:
        if bucket is None:
            return 0

        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        days_since = (now - item.usage_date).total_seconds() / _SECONDS_PER_DAY
        return DATE_POINTS if days_since <= DATE_BUCKET_DAYS[bucket] else 0
