"""
Domain entities for the watchlist bounded context.

They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WatchlistEntry:
    """A favorited item and the moment it was added."""

    item_id: str
    date_added: datetime
