"""
Process-wide application context.

One AppContext owns the identity manager, the onboarding flow, the
watchlist manager and the article fetcher for the lifetime of the
process. It is built once by build_context() and injected into the
interface layer; there are no module-level state globals.

Observers subscribe on the individual services:

    ctx.identity.subscribe(on_session_event)
    ctx.watchlist.subscribe(on_watchlist_change)
"""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from pocketvest.application.dtos import NewsSnapshot, SessionSnapshot, WatchlistSnapshot
from pocketvest.core.config import Settings
from pocketvest.domain.identity.identity_manager import IdentityManager
from pocketvest.domain.identity.onboarding import OnboardingFlow
from pocketvest.domain.news.article_fetcher import ArticleFetcher
from pocketvest.domain.news.ports import ArticleSource
from pocketvest.domain.watchlist.watchlist_manager import WatchlistManager
from pocketvest.infrastructure.identity.json_credential_store import (
    JsonCredentialStore,
)
from pocketvest.infrastructure.news.fixture_source import FixtureArticleSource
from pocketvest.infrastructure.news.news_api_source import NewsApiArticleSource
from pocketvest.infrastructure.watchlist.sql_watchlist_repository import (
    SqlWatchlistRepository,
)

logger = logging.getLogger(__name__)


class AppContext:
    """Holds one instance of every stateful service.

    Args:
        identity: Session owner.
        onboarding: Onboarding flow following the identity manager.
        watchlist: Favorited items manager, already loaded.
        news: Article fetcher.
        engine: Watchlist database engine, disposed by aclose().
        article_source: Article source, closed by aclose().
    """

    def __init__(
        self,
        identity: IdentityManager,
        onboarding: OnboardingFlow,
        watchlist: WatchlistManager,
        news: ArticleFetcher,
        engine: Optional[Engine] = None,
        article_source: Optional[ArticleSource] = None,
    ) -> None:
        self.identity = identity
        self.onboarding = onboarding
        self.watchlist = watchlist
        self.news = news
        self._engine = engine
        self._article_source = article_source

    @property
    def shows_home(self) -> bool:
        """True when the authenticated view replaces onboarding."""
        return self.identity.session.is_authenticated

    def session_snapshot(self) -> SessionSnapshot:
        session = self.identity.session
        return SessionSnapshot(
            current_username=session.current_username,
            signed_in=session.signed_in,
            join_date=session.join_date,
            onboarding_step=int(self.onboarding.step),
            continue_enabled=self.onboarding.continue_enabled,
            has_attempted_login=self.onboarding.has_attempted_login,
            validation_message=self.onboarding.validation_message,
            error_message=self.onboarding.error_message,
            shows_home=self.shows_home,
        )

    def watchlist_snapshot(self) -> WatchlistSnapshot:
        return WatchlistSnapshot(items=tuple(sorted(self.watchlist.items)))

    def news_snapshot(self) -> NewsSnapshot:
        return NewsSnapshot(
            articles=tuple(self.news.articles),
            current_page=self.news.current_page,
            total_found=self.news.total_found,
            is_loading=self.news.is_loading,
            has_more=self.news.has_more,
            alert_message=self.news.alert_message,
        )

    async def aclose(self) -> None:
        """Release the HTTP client and the database engine."""
        self.onboarding.close()
        if self._article_source is not None:
            await self._article_source.aclose()
        if self._engine is not None:
            self._engine.dispose()


def _build_engine(settings: Settings) -> Engine:
    """Build the watchlist engine, creating the SQLite directory if needed."""
    url = settings.get_watchlist_database_url()
    if url.startswith("sqlite"):
        if not settings.watchlist_database_url:
            Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


def _build_article_source(settings: Settings) -> ArticleSource:
    if settings.news_use_fixtures:
        logger.info("Serving built-in sample articles.")
        return FixtureArticleSource()
    if not settings.news_api_token:
        logger.warning("NEWS_API_TOKEN is not set; article requests will be refused.")
    return NewsApiArticleSource(
        base_url=settings.news_api_base_url,
        api_token=settings.news_api_token,
    )


def build_context(settings: Settings) -> AppContext:
    """Create every service from settings and load the watchlist.

    This is the composition root of the application.
    """
    identity = IdentityManager(JsonCredentialStore(settings.get_credentials_path()))
    onboarding = OnboardingFlow(identity)

    engine = _build_engine(settings)
    watchlist = WatchlistManager(SqlWatchlistRepository(engine))
    watchlist.load()

    source = _build_article_source(settings)
    news = ArticleFetcher(
        source,
        page_size=settings.news_page_size,
        lookback_days=settings.news_lookback_days,
        categories=settings.get_news_categories(),
        language=settings.news_language,
    )

    logger.info("Application context ready.")
    return AppContext(
        identity=identity,
        onboarding=onboarding,
        watchlist=watchlist,
        news=news,
        engine=engine,
        article_source=source,
    )
