"""
Pydantic schemas for the watchlist API.

No business logic belongs here.
"""

from datetime import datetime

from pydantic import BaseModel, Field

ITEM_ID_DESCRIPTION = "Identifier of the favorited item, e.g. a coin id"
ITEM_ID_MAX_LEN = 128


class WatchlistEntryItem(BaseModel):
    """A durable watchlist entry."""

    item_id: str
    date_added: datetime


class WatchlistResponse(BaseModel):
    """Current watchlist: sorted ids plus the durable entries, newest first."""

    items: list[str]
    entries: list[WatchlistEntryItem]


class WatchlistChangeResponse(BaseModel):
    """Result of an add, remove or toggle."""

    item_id: str = Field(..., description=ITEM_ID_DESCRIPTION)
    in_watchlist: bool
    changed: bool
