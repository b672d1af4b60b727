"""
Pytest configuration and fixtures.
"""
import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from toolcatalog.core.schemas import SearchableItem, ToolCategory


def make_item(
    id: str,
    name: str,
    category: str = "text",
    rating: int = 3,
    created_at: str = "2024-01-01T00:00:00Z",
    usage_date: str = "2024-01-15T00:00:00Z",
    description: str | None = None
) -> SearchableItem:
    """Build a SearchableItem with sensible defaults."""
    return SearchableItem(
        id=id,
        name=name,
        category=ToolCategory(category),
        rating=rating,
        created_at=created_at,
        usage_date=usage_date,
        description=description,
    )


@pytest.fixture
def sample_tools():
    """ChatGPT, DALL-E and Sora, in that order."""
    return [
        make_item(
            "1", "ChatGPT", "text", 5,
            created_at="2024-01-01T00:00:00Z",
            usage_date="2024-01-15T00:00:00Z",
            description="AI対話ツール",
        ),
        make_item(
            "2", "DALL-E", "image", 4,
            created_at="2024-01-05T00:00:00Z",
            usage_date="2024-01-20T00:00:00Z",
            description="画像生成AI",
        ),
        make_item(
            "3", "Sora", "video", 5,
            created_at="2024-01-10T00:00:00Z",
            usage_date="2024-01-25T00:00:00Z",
            description="動画生成AI",
        ),
    ]


@pytest.fixture
def fixed_now():
    """Reference time for date-bucket scoring."""
    return datetime(2024, 2, 1, tzinfo=timezone.utc)
