"""HTTP interface for the watchlist bounded context."""
