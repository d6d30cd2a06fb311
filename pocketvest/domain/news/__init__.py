"""
News bounded context, domain layer.

Paginated article feed with a single-flight fetch guard.
"""
