"""
Identity manager.

Owns the current session and the sign-up / sign-in / sign-out /
account-deletion operations on top of a CredentialStore port.

Rules:
    - Usernames: 3-16 characters, letters, digits or underscore,
      case-sensitive, unique in the store.
    - Passwords: at least 6 characters, confirmed by a second entry.
    - Passwords are stored as SHA-256 hex digests, never in clear.

Validation predicates never raise. Mutations change the session only
after the credential store reports the change as durable.
"""

import hashlib
import logging
from datetime import datetime
from typing import Callable

from pocketvest.domain.events import ChangeNotifier, Unsubscribe
from pocketvest.domain.identity.entities import Session, SessionEvent
from pocketvest.domain.identity.errors import (
    CredentialPersistenceError,
    InvalidPasswordError,
    InvalidUsernameError,
    NotSignedInError,
    UsernameTakenError,
)
from pocketvest.domain.identity.ports import CredentialStore

logger = logging.getLogger(__name__)

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 16
PASSWORD_MIN_LEN = 6


def hash_password(password: str) -> str:
    """Return the SHA-256 hex digest of a password (64 characters)."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def sanitize_username(raw: str) -> str:
    """Keep only letters, digits and underscores, truncated to the max length."""
    kept = "".join(ch for ch in raw if ch.isalnum() or ch == "_")
    return kept[:USERNAME_MAX_LEN]


def format_join_date(moment: datetime) -> str:
    """Format a join date the way it is shown on the profile, e.g. 'Nov 14, 2024'."""
    return f"{moment:%b} {moment.day}, {moment.year}"


def _has_valid_shape(username: str) -> bool:
    return USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN and all(
        ch.isalnum() or ch == "_" for ch in username
    )


class IdentityManager:
    """Session owner and entry point for every credential mutation.

    Args:
        store: Durable credential store.
        clock: Returns the current local time; used for join dates.
    """

    def __init__(
        self,
        store: CredentialStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._session = Session()
        self._events: ChangeNotifier[SessionEvent] = ChangeNotifier()

    # ── Observable state ────────────────────────────────────────────

    @property
    def session(self) -> Session:
        return self._session

    @property
    def current_username(self) -> str:
        return self._session.current_username

    @property
    def signed_in(self) -> bool:
        return self._session.signed_in

    def subscribe(self, callback: Callable[[SessionEvent], None]) -> Unsubscribe:
        """Register an observer for session events."""
        return self._events.subscribe(callback)

    # ── Pure predicates ─────────────────────────────────────────────

    def is_username_taken(self, username: str) -> bool:
        return self._store.contains(username)

    def validate_username(self, candidate: str) -> bool:
        """Return True if the candidate may be used for a new account."""
        return _has_valid_shape(candidate) and not self.is_username_taken(candidate)

    @staticmethod
    def validate_password(password: str, confirm_password: str) -> bool:
        """Return True if the password is long enough and confirmed."""
        return len(password) >= PASSWORD_MIN_LEN and password == confirm_password

    @staticmethod
    def hash_password(password: str) -> str:
        return hash_password(password)

    def is_password_correct(self, username: str, password: str) -> bool:
        """Compare a password against the stored digest. No side effects."""
        stored = self._store.get(username)
        if stored is None:
            return False
        return stored == hash_password(password)

    # ── Mutations ───────────────────────────────────────────────────

    def sign_up(self, username: str, password: str) -> Session:
        """Create an account and sign it in.

        Args:
            username: New, unused username.
            password: Already-confirmed password.

        Returns:
            The new signed-in session.

        Raises:
            InvalidUsernameError: The username breaks the length/character rules.
            UsernameTakenError: A record already exists for the username.
            InvalidPasswordError: The password is too short.
            CredentialPersistenceError: The record could not be stored.
        """
        if not _has_valid_shape(username):
            raise InvalidUsernameError(username)
        if self.is_username_taken(username):
            raise UsernameTakenError(username)
        if not self.validate_password(password, password):
            raise InvalidPasswordError()

        if not self._store.put(username, hash_password(password)):
            raise CredentialPersistenceError("could not save the new account")

        self._session = Session(
            current_username=username,
            signed_in=True,
            join_date=format_join_date(self._clock()),
        )
        logger.info("Signed up user=%s", username)
        self._events.publish(SessionEvent.SIGNED_UP)
        return self._session

    def login(self, username: str, password: str) -> bool:
        """Sign in an existing user. Leaves the session untouched on failure."""
        if not self.is_password_correct(username, password):
            logger.info("Rejected login for user=%s", username)
            return False

        self._session = Session(
            current_username=username,
            signed_in=True,
            join_date=(
                self._session.join_date
                if self._session.current_username == username
                else None
            ),
        )
        logger.info("Signed in user=%s", username)
        self._events.publish(SessionEvent.SIGNED_IN)
        return True

    def sign_out(self) -> None:
        """Clear the session. Observers reset the onboarding flow."""
        previous = self._session.current_username
        self._session = Session()
        logger.info("Signed out user=%s", previous or "<none>")
        self._events.publish(SessionEvent.SIGNED_OUT)

    def delete_account(self) -> None:
        """Remove the current user's credential record, then sign out.

        Raises:
            NotSignedInError: No user is signed in.
            CredentialPersistenceError: The removal could not be stored;
                the session is kept so the user can retry.
        """
        username = self._session.current_username
        if not self._session.signed_in or not username:
            raise NotSignedInError()

        if not self._store.remove(username):
            raise CredentialPersistenceError("could not delete the account")

        self._session = Session()
        logger.info("Deleted account user=%s", username)
        self._events.publish(SessionEvent.ACCOUNT_DELETED)
