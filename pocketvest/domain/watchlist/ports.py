"""
Port interfaces (ABCs) for the watchlist bounded context.

Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod

from pocketvest.domain.watchlist.entities import WatchlistEntry


class WatchlistRepository(ABC):
    """Port for the durable collection of watchlist entries.

    Every method raises WatchlistPersistenceError when storage fails.
    """

    @abstractmethod
    def list_entries(self) -> list[WatchlistEntry]:
        """Return all entries ordered by date_added descending."""
        raise NotImplementedError

    @abstractmethod
    def add(self, entry: WatchlistEntry) -> None:
        """Persist a single entry."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, item_id: str) -> int:
        """Delete every entry whose item_id matches exactly.

        Returns:
            Number of rows deleted.
        """
        raise NotImplementedError
