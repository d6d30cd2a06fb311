"""
Domain entities for the identity bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class OnboardingStep(IntEnum):
    """Screen shown by the onboarding flow.

    The integer values are part of the contract with the UI layer.
    """

    WELCOME = 0
    ENTER_USERNAME = 1
    ENTER_PASSWORD = 2
    CONFIRMATION = 3
    LOGIN = 4


class SessionEvent(Enum):
    """Session changes published by the identity manager."""

    SIGNED_UP = "signed_up"
    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"
    ACCOUNT_DELETED = "account_deleted"


@dataclass(frozen=True)
class CredentialRecord:
    """A stored username and the hex digest of its password."""

    username: str
    password_hash: str


@dataclass(frozen=True)
class Session:
    """The current user session.

    signed_in implies current_username is non-empty and has a
    credential record.
    """

    current_username: str = ""
    signed_in: bool = False
    join_date: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        """True when the authenticated view should be shown."""
        return self.signed_in and bool(self.current_username)
