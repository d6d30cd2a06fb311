"""
Port interfaces (ABCs) for the news bounded context.

Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod

from pocketvest.domain.news.entities import ArticlePage, ArticleQuery


class ArticleSource(ABC):
    """Port for retrieving pages of articles from a remote source."""

    @abstractmethod
    async def fetch(self, query: ArticleQuery) -> ArticlePage:
        """Return one page of articles.

        Raises:
            ArticleNetworkError: The request failed in transport or was refused.
            ArticleDecodeError: The response could not be decoded.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release any held connections."""
