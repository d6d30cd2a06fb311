"""
Domain entities for the news bounded context.

They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class FetchState(Enum):
    """Whether the article fetcher has a request in flight."""

    IDLE = "idle"
    FETCHING = "fetching"


@dataclass(frozen=True)
class Article:
    """A news article returned by the remote search API."""

    id: str
    title: str
    description: str
    url: str
    published_at: datetime
    source: str
    categories: tuple[str, ...] = ()
    keywords: Optional[str] = None
    snippet: Optional[str] = None
    image_url: Optional[str] = None
    language: Optional[str] = None
    relevance_score: Optional[float] = None


@dataclass(frozen=True)
class ArticleQuery:
    """One page request against an article source.

    Attributes:
        search: Keyword query.
        published_after: Lower bound on the publication date.
        categories: Category filter.
        language: Language filter.
        page: 1-based page number.
        limit: Page size.
    """

    search: str
    published_after: date
    categories: tuple[str, ...]
    language: str
    page: int = 1
    limit: int = 3


@dataclass(frozen=True)
class ArticlePage:
    """A decoded result envelope: one page of articles plus the total count."""

    articles: list[Article] = field(default_factory=list)
    found: int = 0
