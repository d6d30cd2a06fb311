"""
Adapter: built-in sample articles.

Implements the ArticleSource port without any network access, for
offline demos and UI work. Enabled with NEWS_USE_FIXTURES=true.
The keyword query filters on title, description and keywords; the
publication window is ignored so the samples never age out.
"""

from datetime import datetime, timezone

from pocketvest.domain.news.entities import Article, ArticlePage, ArticleQuery
from pocketvest.domain.news.ports import ArticleSource

SAMPLE_ARTICLES: tuple[Article, ...] = (
    Article(
        id="sample-001",
        title="Bitcoin closes the week above $95K",
        description="A late rally erased midweek losses for the largest coin.",
        url="https://example.com/markets/bitcoin-weekly-close",
        published_at=datetime(2024, 12, 1, 16, 36, 46, tzinfo=timezone.utc),
        source="example.com",
        categories=("business", "general"),
        keywords="crypto, bitcoin",
        snippet="Bitcoin ended the week higher after a brief correction.",
        language="en",
        relevance_score=20.11,
    ),
    Article(
        id="sample-002",
        title="Regulators weigh a lighter touch on digital assets",
        description="Policy shifts could reshape how exchanges list new tokens.",
        url="https://example.com/policy/digital-asset-rules",
        published_at=datetime(2024, 11, 30, 5, 30, tzinfo=timezone.utc),
        source="example.com",
        categories=("business", "general"),
        keywords="crypto, regulation",
        snippet="Lawmakers signalled support for clearer listing rules.",
        language="en",
        relevance_score=19.23,
    ),
    Article(
        id="sample-003",
        title="Ethereum fees fall to a six-month low",
        description="Layer-2 adoption keeps settlement costs down.",
        url="https://example.com/markets/ethereum-fees",
        published_at=datetime(2024, 11, 28, 5, 34, 25, tzinfo=timezone.utc),
        source="example.com",
        categories=("business",),
        keywords="crypto, ethereum",
        snippet="Average gas prices dropped again this week.",
        language="en",
        relevance_score=18.25,
    ),
    Article(
        id="sample-004",
        title="Index funds see record inflows in November",
        description="Retail investors kept buying broad-market funds.",
        url="https://example.com/investing/index-fund-inflows",
        published_at=datetime(2024, 11, 27, 14, 0, tzinfo=timezone.utc),
        source="example.com",
        categories=("business",),
        keywords="stocks, funds",
        snippet="Flows into passive funds hit a new monthly high.",
        language="en",
        relevance_score=17.24,
    ),
    Article(
        id="sample-005",
        title="Stablecoin supply grows as trading picks up",
        description="Dollar-pegged tokens expanded for a third straight month.",
        url="https://example.com/markets/stablecoin-supply",
        published_at=datetime(2024, 11, 26, 9, 15, tzinfo=timezone.utc),
        source="example.com",
        categories=("business", "general"),
        keywords="crypto, stablecoins",
        snippet="Combined stablecoin supply reached a new record.",
        language="en",
        relevance_score=16.9,
    ),
)


def _matches(article: Article, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    haystack = " ".join(
        filter(None, [article.title, article.description, article.keywords])
    ).lower()
    return needle in haystack


class FixtureArticleSource(ArticleSource):
    """Pages through a fixed tuple of articles."""

    def __init__(self, articles: tuple[Article, ...] = SAMPLE_ARTICLES) -> None:
        self._articles = articles

    async def fetch(self, query: ArticleQuery) -> ArticlePage:
        matching = [a for a in self._articles if _matches(a, query.search)]
        start = (max(query.page, 1) - 1) * query.limit
        return ArticlePage(
            articles=matching[start : start + query.limit],
            found=len(matching),
        )
