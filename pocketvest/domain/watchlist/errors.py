"""
Domain-specific errors for the watchlist bounded context.

All errors raised from the watchlist domain must be defined here.
No framework imports allowed.
"""


class WatchlistDomainError(Exception):
    """Base error for all watchlist domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidItemIdError(WatchlistDomainError):
    """Raised when an item identifier is empty or blank."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Invalid watchlist item id: {item_id!r}")
        self.item_id = item_id


class WatchlistPersistenceError(WatchlistDomainError):
    """Raised by repositories when the durable store cannot be read or written."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Watchlist storage failed: {reason}")
        self.reason = reason
