"""
Watchlist bounded context, domain layer.

Set of favorited item identifiers kept in step with a durable store.
"""
