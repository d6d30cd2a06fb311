"""
Paginated article fetcher.

State machine over FetchState.IDLE / FetchState.FETCHING:

    IDLE ──fetch_page──▶ FETCHING ──success | failure──▶ IDLE

At most one request is in flight. A fetch_page call made while FETCHING
is dropped, not queued. Page 1 replaces the accumulated articles, later
pages append. Failures surface as a one-shot alert message and leave the
accumulated articles untouched.

reset() invalidates the in-flight request; its result is discarded when
it arrives.
"""

import logging
from datetime import date, timedelta
from typing import Callable, Optional

from pocketvest.domain.events import ChangeNotifier, Unsubscribe
from pocketvest.domain.news.entities import (
    Article,
    ArticlePage,
    ArticleQuery,
    FetchState,
)
from pocketvest.domain.news.errors import ArticleDecodeError, ArticleNetworkError
from pocketvest.domain.news.ports import ArticleSource

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 3
DEFAULT_LOOKBACK_DAYS = 7
DEFAULT_CATEGORIES = ("business", "general")
DEFAULT_LANGUAGE = "en"

NO_MORE_ARTICLES_MESSAGE = "No more articles found."


class ArticleFetcher:
    """Accumulates pages of articles for one keyword query at a time.

    Args:
        source: Remote article source.
        page_size: Articles requested per page.
        lookback_days: Only articles published in the last N days.
        categories: Category filter sent with every request.
        language: Language filter sent with every request.
        clock: Returns today's date; the lookback window is computed from it.
    """

    def __init__(
        self,
        source: ArticleSource,
        page_size: int = DEFAULT_PAGE_SIZE,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        categories: tuple[str, ...] = DEFAULT_CATEGORIES,
        language: str = DEFAULT_LANGUAGE,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._source = source
        self._page_size = page_size
        self._lookback_days = lookback_days
        self._categories = tuple(categories)
        self._language = language
        self._clock = clock

        self._state = FetchState.IDLE
        self._articles: list[Article] = []
        self._current_page = 1
        self._total_found = 0
        self._alert_message: Optional[str] = None

        self._request_counter = 0
        self._active_request: Optional[int] = None
        self._events: ChangeNotifier["ArticleFetcher"] = ChangeNotifier()

    # ── Observable state ────────────────────────────────────────────

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is FetchState.FETCHING

    @property
    def articles(self) -> list[Article]:
        return list(self._articles)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_found(self) -> int:
        return self._total_found

    @property
    def alert_message(self) -> Optional[str]:
        return self._alert_message

    @property
    def has_more(self) -> bool:
        return len(self._articles) < self._total_found

    def subscribe(self, callback: Callable[["ArticleFetcher"], None]) -> Unsubscribe:
        """Register an observer called after every state change."""
        return self._events.subscribe(callback)

    def dismiss_alert(self) -> None:
        if self._alert_message is not None:
            self._alert_message = None
            self._events.publish(self)

    # ── Operations ──────────────────────────────────────────────────

    async def fetch_page(self, query: str, page: int = 1) -> bool:
        """Fetch one page and merge it into the accumulated articles.

        Args:
            query: Keyword query.
            page: 1-based page number.

        Returns:
            False if the call was dropped because a request is in flight,
            True once the issued request has completed (either way).
        """
        if self._state is FetchState.FETCHING:
            logger.debug("Dropped fetch of page %d: a request is in flight.", page)
            return False

        self._request_counter += 1
        request_id = self._request_counter
        self._active_request = request_id
        self._state = FetchState.FETCHING
        self._events.publish(self)

        request = ArticleQuery(
            search=query,
            published_after=self._clock() - timedelta(days=self._lookback_days),
            categories=self._categories,
            language=self._language,
            page=page,
            limit=self._page_size,
        )
        logger.info("Fetching articles query=%r page=%d", query, page)

        try:
            result = await self._source.fetch(request)
        except ArticleNetworkError as exc:
            self._fail(request_id, f"Network error: {exc.message}")
        except ArticleDecodeError as exc:
            self._fail(request_id, f"Decoding error: {exc.message}")
        else:
            self._apply(request_id, page, result)
        finally:
            if self._active_request == request_id:
                self._active_request = None
                self._state = FetchState.IDLE
                self._events.publish(self)

        return True

    async def load_more_if_needed(
        self, last_seen: Optional[Article], query: str
    ) -> bool:
        """Fetch the next page when fewer articles are loaded than were found.

        Called by the UI when the row for `last_seen` comes into view
        near the end of the list.

        Returns:
            True if a next-page request was issued.
        """
        if not self.has_more:
            return False
        logger.debug(
            "Loading more after article=%s (%d/%d)",
            last_seen.id if last_seen else None,
            len(self._articles),
            self._total_found,
        )
        return await self.fetch_page(query, self._current_page + 1)

    def reset(self) -> None:
        """Forget accumulated articles and any in-flight request."""
        self._active_request = None
        self._state = FetchState.IDLE
        self._articles = []
        self._current_page = 1
        self._total_found = 0
        self._alert_message = None
        self._events.publish(self)

    # ── Internals ───────────────────────────────────────────────────

    def _apply(self, request_id: int, page: int, result: ArticlePage) -> None:
        if self._active_request != request_id:
            logger.debug("Discarded stale result for page %d.", page)
            return

        if page == 1:
            self._articles = list(result.articles)
        else:
            self._articles.extend(result.articles)
        # a shrinking live count must not fall below what is already shown
        self._total_found = max(result.found, len(self._articles))
        self._current_page = page

        if not result.articles:
            self._alert_message = NO_MORE_ARTICLES_MESSAGE

        logger.info(
            "Received %d articles for page %d (%d/%d loaded)",
            len(result.articles),
            page,
            len(self._articles),
            self._total_found,
        )

    def _fail(self, request_id: int, message: str) -> None:
        if self._active_request != request_id:
            return
        logger.warning("Article fetch failed: %s", message)
        self._alert_message = message
