"""
Watchlist manager.

Keeps the in-memory set of favorited item ids as a projection of the
durable repository. All mutations are write-through: the repository is
updated first and the in-memory set only after it succeeded, so the set
never claims membership the store cannot back up.

Storage failures are logged and degrade to the previous in-memory state;
they are never raised to the caller.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from pocketvest.domain.events import ChangeNotifier, Unsubscribe
from pocketvest.domain.watchlist.entities import WatchlistEntry
from pocketvest.domain.watchlist.errors import (
    InvalidItemIdError,
    WatchlistPersistenceError,
)
from pocketvest.domain.watchlist.ports import WatchlistRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WatchlistManager:
    """Owner of the favorited item set.

    Args:
        repository: Durable watchlist storage.
        clock: Returns the timestamp recorded on new entries.
    """

    def __init__(
        self,
        repository: WatchlistRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._items: frozenset[str] = frozenset()
        self._events: ChangeNotifier[frozenset[str]] = ChangeNotifier()

    @property
    def items(self) -> frozenset[str]:
        return self._items

    def contains(self, item_id: str) -> bool:
        return item_id in self._items

    def subscribe(self, callback: Callable[[frozenset[str]], None]) -> Unsubscribe:
        """Register an observer called with the new item set after each change."""
        return self._events.subscribe(callback)

    def load(self) -> frozenset[str]:
        """Rebuild the in-memory set from durable storage.

        Returns:
            The loaded item ids, or an empty set if storage is unreadable.
        """
        try:
            entries = self._repository.list_entries()
        except WatchlistPersistenceError as exc:
            logger.warning("Could not load watchlist, starting empty: %s", exc.reason)
            self._items = frozenset()
            return self._items

        self._items = frozenset(entry.item_id for entry in entries)
        logger.info("Loaded %d watchlist items.", len(self._items))
        return self._items

    def entries(self) -> list[WatchlistEntry]:
        """Return the durable entries, newest first, or [] if storage fails."""
        try:
            return self._repository.list_entries()
        except WatchlistPersistenceError as exc:
            logger.warning("Could not list watchlist entries: %s", exc.reason)
            return []

    def add(self, item_id: str) -> bool:
        """Add an item. Returns True if the watchlist changed.

        Raises:
            InvalidItemIdError: item_id is empty or blank.
        """
        _check_item_id(item_id)
        if item_id in self._items:
            return False

        entry = WatchlistEntry(item_id=item_id, date_added=self._clock())
        try:
            self._repository.add(entry)
        except WatchlistPersistenceError as exc:
            logger.error("Could not add %s to watchlist: %s", item_id, exc.reason)
            return False

        self._items = self._items | {item_id}
        logger.debug("Added %s to watchlist.", item_id)
        self._events.publish(self._items)
        return True

    def remove(self, item_id: str) -> bool:
        """Remove an item and every durable entry for it.

        Returns:
            True if the watchlist changed.

        Raises:
            InvalidItemIdError: item_id is empty or blank.
        """
        _check_item_id(item_id)
        try:
            deleted = self._repository.remove(item_id)
        except WatchlistPersistenceError as exc:
            logger.error("Could not remove %s from watchlist: %s", item_id, exc.reason)
            return False

        if item_id not in self._items and not deleted:
            return False

        self._items = self._items - {item_id}
        logger.debug("Removed %s from watchlist (%d rows).", item_id, deleted)
        self._events.publish(self._items)
        return True

    def toggle(self, item_id: str) -> bool:
        """Add the item if absent, remove it if present.

        Returns:
            Whether the item is in the watchlist afterwards.
        """
        if item_id in self._items:
            self.remove(item_id)
        else:
            self.add(item_id)
        return item_id in self._items


def _check_item_id(item_id: str) -> None:
    if not item_id or not item_id.strip():
        raise InvalidItemIdError(item_id)
