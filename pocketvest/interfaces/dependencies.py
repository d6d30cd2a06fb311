"""
Dependency injection for the interface layer.

Routers receive the process-wide AppContext stored on the FastAPI
application state by create_app().
"""

from fastapi import Request

from pocketvest.application.context import AppContext


def get_context(request: Request) -> AppContext:
    """Return the AppContext of the running application."""
    return request.app.state.context
