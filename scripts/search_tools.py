"""
Search a catalog export from the terminal.

Usage:
    python scripts/search_tools.py tools.json filter --keyword chat --category text --operator AND
    python scripts/search_tools.py tools.json search "image tools I used last year" [--offline] [--explain]

The catalog file is a JSON array of rows as stored by the app
(id, tool_name, category, rating, created_at, usage_date, description).
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from toolcatalog.core.config import load_dotenv_if_exists
from toolcatalog.core.errors import InvalidInput, MalformedConditions
from toolcatalog.core.schemas import SearchableItem

load_dotenv_if_exists()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger("search_tools")


def load_items(path: Path) -> list[SearchableItem]:
    """Load catalog rows from a JSON export."""
    rows = json.loads(path.read_text(encoding="utf-8"))
    return [SearchableItem.from_record(row) for row in rows]


def run_filter(items: list[SearchableItem], args) -> int:
    from toolcatalog.search import StructuredSearchEngine

    conditions = {"operator": args.operator}
    if args.keyword:
        conditions["keyword"] = args.keyword
    if args.category:
        conditions["category"] = args.category
    if args.min_rating is not None or args.max_rating is not None:
        conditions["rating_range"] = {
            "min": args.min_rating if args.min_rating is not None else 1,
            "max": args.max_rating if args.max_rating is not None else 5,
        }
    if args.start or args.end:
        conditions["date_range"] = {
            "start": args.start or "1970-01-01T00:00:00Z",
            "end": args.end or "9999-12-31T23:59:59Z",
        }

    engine = StructuredSearchEngine()
    try:
        results = engine.filter(items, conditions)
    except MalformedConditions as e:
        print(f"❌ Invalid conditions: {e}")
        return 2

    print(f"✅ {engine.result_count(results)} of {len(items)} tools matched\n")
    for item in results:
        print(f"  [{item.category.value:<5}] {item.name}  ★{item.rating}  (created {item.created_at:%Y-%m-%d})")
    return 0


async def run_search(items: list[SearchableItem], args) -> int:
    from toolcatalog.search import FallbackIntentExtractor, NaturalLanguageSearchPipeline

    extractor = FallbackIntentExtractor() if args.offline else None
    async with NaturalLanguageSearchPipeline(extractor=extractor) as pipeline:
        try:
            outcome = await pipeline.search_detailed(args.query, items)
        except InvalidInput as e:
            print(f"❌ {e}")
            return 2

    intent = outcome.intent.model_dump(mode="json", exclude_none=True)
    source = "keyword fallback" if outcome.used_fallback else type(pipeline.extractor).__name__
    print(f"🔎 Intent ({source}): {json.dumps(intent, ensure_ascii=False)}")
    print(f"✅ {len(outcome.results)} results in {outcome.execution_time_ms:.0f}ms\n")

    for rank, result in enumerate(outcome.results, 1):
        item = result.item
        print(f"{rank:>3}. {result.relevance_score:>3}  {item.name}  [{item.category.value}] ★{item.rating}")
        if args.explain:
            parts = pipeline.scorer.breakdown(item, outcome.intent).to_dict()
            print(f"       {parts}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Search an AI tool catalog export")
    parser.add_argument("catalog", type=Path, help="JSON file with catalog rows")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_filter = subparsers.add_parser("filter", help="Structured AND/OR filter")
    p_filter.add_argument("--keyword", "-k", help="Substring of the tool name")
    p_filter.add_argument("--category", "-c", action="append",
                          choices=["text", "image", "video", "audio", "code", "other"],
                          help="Category (repeatable)")
    p_filter.add_argument("--min-rating", type=int, help="Minimum rating (1-5)")
    p_filter.add_argument("--max-rating", type=int, help="Maximum rating (1-5)")
    p_filter.add_argument("--start", help="Created on or after (ISO 8601)")
    p_filter.add_argument("--end", help="Created on or before (ISO 8601)")
    p_filter.add_argument("--operator", "-o", choices=["AND", "OR"], default="AND",
                          help="How conditions combine (default: AND)")

    p_search = subparsers.add_parser("search", help="Natural-language ranked search")
    p_search.add_argument("query", help="Free-text query")
    p_search.add_argument("--offline", action="store_true",
                          help="Skip the LLM and split the query into keywords")
    p_search.add_argument("--explain", action="store_true",
                          help="Show the score breakdown for each result")

    args = parser.parse_args()

    if not args.catalog.exists():
        print(f"❌ Catalog file not found: {args.catalog}")
        sys.exit(1)

    items = load_items(args.catalog)
    logger.info(f"Loaded {len(items)} tools from {args.catalog}")

    if args.command == "filter":
        sys.exit(run_filter(items, args))
    sys.exit(asyncio.run(run_search(items, args)))


if __name__ == "__main__":
    main()
