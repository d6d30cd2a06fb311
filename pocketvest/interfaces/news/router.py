"""
FastAPI router for the news bounded context.

All routes delegate to the ArticleFetcher. Requests that arrive while
a fetch is in flight are answered with issued=false.
"""

from fastapi import APIRouter, Depends

from pocketvest.application.context import AppContext
from pocketvest.interfaces.dependencies import get_context
from pocketvest.interfaces.news.schemas import (
    FetchPageRequest,
    FetchResponse,
    LoadMoreRequest,
    NewsResponse,
)

router = APIRouter(prefix="/news", tags=["news"])


def _feed(ctx: AppContext) -> NewsResponse:
    return NewsResponse.from_snapshot(ctx.news_snapshot())


@router.get("", response_model=NewsResponse, summary="Current article feed")
def get_feed(ctx: AppContext = Depends(get_context)) -> NewsResponse:
    return _feed(ctx)


@router.post("/fetch", response_model=FetchResponse, summary="Fetch one page")
async def fetch_page(
    request: FetchPageRequest, ctx: AppContext = Depends(get_context)
) -> FetchResponse:
    issued = await ctx.news.fetch_page(request.query, request.page)
    return FetchResponse(issued=issued, feed=_feed(ctx))


@router.post("/load-more", response_model=FetchResponse, summary="Fetch the next page if any")
async def load_more(
    request: LoadMoreRequest, ctx: AppContext = Depends(get_context)
) -> FetchResponse:
    last_seen = next(
        (a for a in ctx.news.articles if a.id == request.last_seen_id), None
    )
    issued = await ctx.news.load_more_if_needed(last_seen, request.query)
    return FetchResponse(issued=issued, feed=_feed(ctx))


@router.post("/alert/dismiss", response_model=NewsResponse, summary="Dismiss the alert")
def dismiss_alert(ctx: AppContext = Depends(get_context)) -> NewsResponse:
    ctx.news.dismiss_alert()
    return _feed(ctx)
