"""
Data Transfer Objects for the application layer.

Snapshots carry the observable state of the domain services to the
interface layer. They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from typing import Optional

from pocketvest.domain.news.entities import Article


@dataclass(frozen=True)
class SessionSnapshot:
    """Session and onboarding flags read by the UI.

    Attributes:
        current_username: Signed-in username, or "" when signed out.
        signed_in: Whether a user is signed in.
        join_date: Display date the account was created, if known.
        onboarding_step: Integer value of the active OnboardingStep.
        continue_enabled: Whether the continue button may be pressed.
        has_attempted_login: A login attempt on this step failed.
        validation_message: Inline hint for the current fields.
        error_message: Last sign-up failure that was not a validation issue.
        shows_home: Whether the authenticated view should be shown.
    """

    current_username: str
    signed_in: bool
    join_date: Optional[str]
    onboarding_step: int
    continue_enabled: bool
    has_attempted_login: bool
    validation_message: Optional[str]
    error_message: Optional[str]
    shows_home: bool


@dataclass(frozen=True)
class WatchlistSnapshot:
    """Sorted ids of the favorited items."""

    items: tuple[str, ...]


@dataclass(frozen=True)
class NewsSnapshot:
    """Accumulated article feed state."""

    articles: tuple[Article, ...]
    current_page: int
    total_found: int
    is_loading: bool
    has_more: bool
    alert_message: Optional[str]
