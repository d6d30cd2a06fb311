"""
FastAPI router for the watchlist bounded context.

All routes delegate to the WatchlistManager. No business logic here.
"""

from fastapi import APIRouter, Depends, Path

from pocketvest.application.context import AppContext
from pocketvest.interfaces.dependencies import get_context
from pocketvest.interfaces.watchlist.schemas import (
    ITEM_ID_DESCRIPTION,
    ITEM_ID_MAX_LEN,
    WatchlistChangeResponse,
    WatchlistEntryItem,
    WatchlistResponse,
)

router = APIRouter(prefix="/watchlist", tags=["watchlist"])

ItemIdPath = Path(..., min_length=1, max_length=ITEM_ID_MAX_LEN, description=ITEM_ID_DESCRIPTION)


@router.get("", response_model=WatchlistResponse, summary="List the watchlist")
def get_watchlist(ctx: AppContext = Depends(get_context)) -> WatchlistResponse:
    snapshot = ctx.watchlist_snapshot()
    return WatchlistResponse(
        items=list(snapshot.items),
        entries=[
            WatchlistEntryItem(item_id=e.item_id, date_added=e.date_added)
            for e in ctx.watchlist.entries()
        ],
    )


@router.put(
    "/{item_id}",
    response_model=WatchlistChangeResponse,
    summary="Add an item to the watchlist",
)
def add_item(
    item_id: str = ItemIdPath, ctx: AppContext = Depends(get_context)
) -> WatchlistChangeResponse:
    changed = ctx.watchlist.add(item_id)
    return WatchlistChangeResponse(
        item_id=item_id, in_watchlist=ctx.watchlist.contains(item_id), changed=changed
    )


@router.delete(
    "/{item_id}",
    response_model=WatchlistChangeResponse,
    summary="Remove an item from the watchlist",
)
def remove_item(
    item_id: str = ItemIdPath, ctx: AppContext = Depends(get_context)
) -> WatchlistChangeResponse:
    changed = ctx.watchlist.remove(item_id)
    return WatchlistChangeResponse(
        item_id=item_id, in_watchlist=ctx.watchlist.contains(item_id), changed=changed
    )


@router.post(
    "/{item_id}/toggle",
    response_model=WatchlistChangeResponse,
    summary="Toggle an item's membership",
)
def toggle_item(
    item_id: str = ItemIdPath, ctx: AppContext = Depends(get_context)
) -> WatchlistChangeResponse:
    was_present = ctx.watchlist.contains(item_id)
    now_present = ctx.watchlist.toggle(item_id)
    return WatchlistChangeResponse(
        item_id=item_id, in_watchlist=now_present, changed=was_present != now_present
    )
