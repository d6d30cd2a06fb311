"""
Domain-specific errors for the news bounded context.

Raised by article source adapters and turned into a user-visible alert
by the article fetcher. No framework imports allowed.
"""


class NewsDomainError(Exception):
    """Base error for all news domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ArticleNetworkError(NewsDomainError):
    """Raised when the article request cannot be completed."""


class ArticleDecodeError(NewsDomainError):
    """Raised when the response is empty, unreadable or malformed."""
