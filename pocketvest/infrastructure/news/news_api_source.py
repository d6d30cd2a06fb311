"""
Adapter: remote news search API.

Implements the ArticleSource port against an HTTP GET endpoint that
accepts api_token, search, categories, published_after, language,
page and limit, and answers with:

    {"data": [Article, ...], "meta": {"found": 42, ...}}

Transport failures and non-2xx statuses raise ArticleNetworkError.
Empty bodies, invalid JSON and schema mismatches raise ArticleDecodeError.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from pocketvest.domain.news.entities import Article, ArticlePage, ArticleQuery
from pocketvest.domain.news.errors import ArticleDecodeError, ArticleNetworkError
from pocketvest.domain.news.ports import ArticleSource

logger = logging.getLogger(__name__)


class _ArticlePayload(BaseModel):
    """Wire format of one article. Accepts snake_case and camelCase keys."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(validation_alias=AliasChoices("uuid", "id"))
    title: str
    description: Optional[str] = None
    keywords: Optional[str] = None
    snippet: Optional[str] = None
    url: str
    image_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("image_url", "imageUrl")
    )
    language: Optional[str] = None
    published_at: datetime = Field(
        validation_alias=AliasChoices("published_at", "publishedAt")
    )
    source: str
    categories: list[str] = Field(default_factory=list)
    relevance_score: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("relevance_score", "relevanceScore")
    )

    def to_entity(self) -> Article:
        return Article(
            id=self.id,
            title=self.title,
            description=self.description or "",
            url=self.url,
            published_at=self.published_at,
            source=self.source,
            categories=tuple(self.categories),
            keywords=self.keywords,
            snippet=self.snippet,
            image_url=self.image_url,
            language=self.language,
            relevance_score=self.relevance_score,
        )


class _MetaPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    found: int = Field(ge=0)


class _EnvelopePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[_ArticlePayload]
    meta: _MetaPayload


def decode_envelope(body: bytes) -> ArticlePage:
    """Decode a response body into an ArticlePage.

    Raises:
        ArticleDecodeError: The body is empty or does not match the envelope.
    """
    if not body or not body.strip():
        raise ArticleDecodeError("No data received from the server.")
    try:
        envelope = _EnvelopePayload.model_validate_json(body)
    except ValidationError as exc:
        raise ArticleDecodeError(
            f"unexpected response format ({exc.error_count()} errors)"
        ) from exc
    return ArticlePage(
        articles=[item.to_entity() for item in envelope.data],
        found=envelope.meta.found,
    )


class NewsApiArticleSource(ArticleSource):
    """Fetches article pages over HTTPS with httpx.

    Args:
        base_url: Full URL of the search endpoint.
        api_token: Value of the api_token query parameter.
        client: Optional pre-configured AsyncClient. When omitted the
            adapter creates one and closes it in aclose().
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url
        self._api_token = api_token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    def build_params(self, query: ArticleQuery) -> dict[str, str | int]:
        """Return the query string parameters for one page request."""
        return {
            "api_token": self._api_token,
            "search": query.search,
            "categories": ",".join(query.categories),
            "published_after": query.published_after.isoformat(),
            "language": query.language,
            "page": query.page,
            "limit": query.limit,
        }

    async def fetch(self, query: ArticleQuery) -> ArticlePage:
        try:
            response = await self._client.get(
                self._base_url, params=self.build_params(query)
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ArticleNetworkError(
                f"server responded with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ArticleNetworkError(str(exc) or type(exc).__name__) from exc

        page = decode_envelope(response.content)
        logger.debug(
            "Decoded %d articles (found=%d) for page %d",
            len(page.articles),
            page.found,
            query.page,
        )
        return page

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
