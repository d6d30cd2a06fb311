"""Infrastructure adapters for the watchlist bounded context."""
