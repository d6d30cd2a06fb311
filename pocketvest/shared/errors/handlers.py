"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the {"error": ..., "detail": ...} shape.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pocketvest.domain.identity.errors import (
    CredentialPersistenceError,
    IdentityDomainError,
    InvalidPasswordError,
    InvalidUsernameError,
    NotSignedInError,
    UsernameTakenError,
)
from pocketvest.domain.news.errors import NewsDomainError
from pocketvest.domain.watchlist.errors import (
    InvalidItemIdError,
    WatchlistDomainError,
)

logger = logging.getLogger(__name__)

HTTP_401 = 401
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500
HTTP_503 = 503


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(UsernameTakenError)
    async def handle_username_taken(
        _request: Request, exc: UsernameTakenError
    ) -> JSONResponse:
        logger.warning("Username taken: %s", exc.username)
        return _error_response(HTTP_409, "Username is unavailable")

    @app.exception_handler(InvalidUsernameError)
    async def handle_invalid_username(
        _request: Request, exc: InvalidUsernameError
    ) -> JSONResponse:
        return _error_response(HTTP_422, "Invalid username", exc.message)

    @app.exception_handler(InvalidPasswordError)
    async def handle_invalid_password(
        _request: Request, exc: InvalidPasswordError
    ) -> JSONResponse:
        return _error_response(HTTP_422, "Invalid password", exc.message)

    @app.exception_handler(NotSignedInError)
    async def handle_not_signed_in(
        _request: Request, exc: NotSignedInError
    ) -> JSONResponse:
        return _error_response(HTTP_401, "Not signed in")

    @app.exception_handler(CredentialPersistenceError)
    async def handle_credential_persistence(
        _request: Request, exc: CredentialPersistenceError
    ) -> JSONResponse:
        logger.error("Credential persistence error: %s", exc.reason)
        return _error_response(HTTP_503, "Credential store unavailable")

    @app.exception_handler(InvalidItemIdError)
    async def handle_invalid_item_id(
        _request: Request, exc: InvalidItemIdError
    ) -> JSONResponse:
        return _error_response(HTTP_422, "Invalid item id")

    @app.exception_handler(IdentityDomainError)
    async def handle_identity_domain(
        _request: Request, exc: IdentityDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled identity domain errors."""
        logger.error("Unhandled identity domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(WatchlistDomainError)
    async def handle_watchlist_domain(
        _request: Request, exc: WatchlistDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled watchlist domain errors."""
        logger.error("Unhandled watchlist domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(NewsDomainError)
    async def handle_news_domain(
        _request: Request, exc: NewsDomainError
    ) -> JSONResponse:
        """Catch-all for news errors that escaped the fetcher."""
        logger.error("Unhandled news domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
