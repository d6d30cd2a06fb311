"""
Pydantic schemas for the news API.

No business logic belongs here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pocketvest.application.dtos import NewsSnapshot
from pocketvest.domain.news.entities import Article

QUERY_MAX_LEN = 200


class ArticleItem(BaseModel):
    """A single article in the feed."""

    id: str
    title: str
    description: str
    url: str
    published_at: datetime
    source: str
    categories: list[str]
    snippet: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_entity(cls, article: Article) -> "ArticleItem":
        return cls(
            id=article.id,
            title=article.title,
            description=article.description,
            url=article.url,
            published_at=article.published_at,
            source=article.source,
            categories=list(article.categories),
            snippet=article.snippet,
            image_url=article.image_url,
        )


class NewsResponse(BaseModel):
    """Accumulated feed state."""

    articles: list[ArticleItem]
    current_page: int
    total_found: int
    is_loading: bool
    has_more: bool
    alert_message: Optional[str]

    @classmethod
    def from_snapshot(cls, snapshot: NewsSnapshot) -> "NewsResponse":
        return cls(
            articles=[ArticleItem.from_entity(a) for a in snapshot.articles],
            current_page=snapshot.current_page,
            total_found=snapshot.total_found,
            is_loading=snapshot.is_loading,
            has_more=snapshot.has_more,
            alert_message=snapshot.alert_message,
        )


class FetchPageRequest(BaseModel):
    """Request schema for fetching one page of articles."""

    query: str = Field(..., max_length=QUERY_MAX_LEN, description="Keyword query")
    page: int = Field(default=1, ge=1, description="1-based page number")


class LoadMoreRequest(BaseModel):
    """Request schema for the load-more trigger near the end of the list."""

    query: str = Field(..., max_length=QUERY_MAX_LEN, description="Keyword query")
    last_seen_id: Optional[str] = Field(
        default=None, description="Id of the article row that came into view"
    )


class FetchResponse(BaseModel):
    """Result of a fetch or load-more request."""

    issued: bool = Field(..., description="False when dropped or not needed")
    feed: NewsResponse
