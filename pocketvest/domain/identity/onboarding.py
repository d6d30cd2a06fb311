"""
Onboarding flow state machine.

Decides which onboarding screen is active and holds the form fields
being typed. Forward moves are gated by the identity manager's
validation results:

    WELCOME ──sign up──▶ ENTER_USERNAME ──valid name──▶ ENTER_PASSWORD
       │                                                   │
       └──log in──▶ LOGIN ──login ok──▶ CONFIRMATION ◀──sign up ok

Back moves retrace the first three edges. Any step returns to WELCOME
when the identity manager reports a sign-out or an account deletion.
CONFIRMATION is terminal: the session is active and the app switches
to its authenticated view.
"""

import logging
from typing import Callable, Optional

from pocketvest.domain.events import ChangeNotifier, Unsubscribe
from pocketvest.domain.identity.entities import OnboardingStep, SessionEvent
from pocketvest.domain.identity.errors import IdentityDomainError
from pocketvest.domain.identity.identity_manager import (
    PASSWORD_MIN_LEN,
    USERNAME_MIN_LEN,
    IdentityManager,
    sanitize_username,
)

logger = logging.getLogger(__name__)

LOGIN_ERROR_MESSAGE = "Incorrect username and/or password."
USERNAME_TOO_SHORT_MESSAGE = "Username must be at least 3 characters."
USERNAME_UNAVAILABLE_MESSAGE = "Username is unavailable."
PASSWORD_TOO_SHORT_MESSAGE = "Password must be at least 6 characters."
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match."

_FORWARD_EDGES: dict[OnboardingStep, frozenset[OnboardingStep]] = {
    OnboardingStep.WELCOME: frozenset(
        {OnboardingStep.ENTER_USERNAME, OnboardingStep.LOGIN}
    ),
    OnboardingStep.ENTER_USERNAME: frozenset({OnboardingStep.ENTER_PASSWORD}),
    OnboardingStep.ENTER_PASSWORD: frozenset({OnboardingStep.CONFIRMATION}),
    OnboardingStep.LOGIN: frozenset({OnboardingStep.CONFIRMATION}),
    OnboardingStep.CONFIRMATION: frozenset(),
}

_BACK_EDGES: dict[OnboardingStep, OnboardingStep] = {
    OnboardingStep.ENTER_USERNAME: OnboardingStep.WELCOME,
    OnboardingStep.ENTER_PASSWORD: OnboardingStep.ENTER_USERNAME,
    OnboardingStep.LOGIN: OnboardingStep.WELCOME,
}


class OnboardingFlow:
    """Finite-state controller for the first-run flow.

    Every action returns True iff the step changed. Invalid input never
    raises; it keeps the step and shows up in `continue_enabled`,
    `validation_message` or `login_error`.

    Args:
        identity: Identity manager used for validation, sign-up and login.
    """

    def __init__(self, identity: IdentityManager) -> None:
        self._identity = identity
        self._step = OnboardingStep.WELCOME
        self.name = ""
        self.password = ""
        self.confirm_password = ""
        self.has_attempted_login = False
        self.error_message: Optional[str] = None
        self._events: ChangeNotifier[OnboardingStep] = ChangeNotifier()
        self._unsubscribe_identity = identity.subscribe(self._on_session_event)

    @property
    def step(self) -> OnboardingStep:
        return self._step

    def subscribe(self, callback: Callable[[OnboardingStep], None]) -> Unsubscribe:
        """Register an observer for step changes."""
        return self._events.subscribe(callback)

    def close(self) -> None:
        """Stop following the identity manager's session events."""
        self._unsubscribe_identity()

    # ── Form fields ─────────────────────────────────────────────────

    def set_name(self, value: str) -> str:
        """Store the typed username, sanitized. Returns the kept value."""
        self.name = sanitize_username(value)
        self.has_attempted_login = False
        return self.name

    def set_password(self, value: str) -> None:
        self.password = value
        self.has_attempted_login = False

    def set_confirm_password(self, value: str) -> None:
        self.confirm_password = value

    # ── Derived flags ───────────────────────────────────────────────

    @property
    def continue_enabled(self) -> bool:
        """Whether the UI's continue button may be pressed on this step."""
        if self._step == OnboardingStep.WELCOME:
            return True
        if self._step == OnboardingStep.ENTER_USERNAME:
            return self._identity.validate_username(self.name)
        if self._step == OnboardingStep.ENTER_PASSWORD:
            return self._identity.validate_password(
                self.password, self.confirm_password
            )
        if self._step == OnboardingStep.LOGIN:
            return bool(self.name) and bool(self.password)
        return False

    @property
    def validation_message(self) -> Optional[str]:
        """Inline hint for the fields of the current step, if any."""
        if self._step == OnboardingStep.ENTER_USERNAME and self.name:
            if len(self.name) < USERNAME_MIN_LEN:
                return USERNAME_TOO_SHORT_MESSAGE
            if self._identity.is_username_taken(self.name):
                return USERNAME_UNAVAILABLE_MESSAGE
        if self._step == OnboardingStep.ENTER_PASSWORD:
            if self.password and len(self.password) < PASSWORD_MIN_LEN:
                return PASSWORD_TOO_SHORT_MESSAGE
            if self.password != self.confirm_password:
                return PASSWORD_MISMATCH_MESSAGE
        if self._step == OnboardingStep.LOGIN:
            return self.login_error
        return None

    @property
    def login_error(self) -> Optional[str]:
        if self._step == OnboardingStep.LOGIN and self.has_attempted_login:
            return LOGIN_ERROR_MESSAGE
        return None

    # ── Actions ─────────────────────────────────────────────────────

    def choose_sign_up(self) -> bool:
        return self._move(OnboardingStep.ENTER_USERNAME)

    def choose_login(self) -> bool:
        self.has_attempted_login = False
        return self._move(OnboardingStep.LOGIN)

    def advance(self) -> bool:
        """Handle the continue button for the current step."""
        self.error_message = None

        if self._step == OnboardingStep.ENTER_USERNAME:
            if not self._identity.validate_username(self.name):
                return False
            return self._move(OnboardingStep.ENTER_PASSWORD)

        if self._step == OnboardingStep.ENTER_PASSWORD:
            if not self._identity.validate_password(
                self.password, self.confirm_password
            ):
                return False
            try:
                self._identity.sign_up(self.name, self.password)
            except IdentityDomainError as exc:
                logger.warning("Sign-up failed: %s", exc.message)
                self.error_message = exc.message
                return False
            self._clear_secrets()
            return self._move(OnboardingStep.CONFIRMATION)

        if self._step == OnboardingStep.LOGIN:
            if not self._identity.login(self.name, self.password):
                self.has_attempted_login = True
                return False
            self.has_attempted_login = False
            self._clear_secrets()
            return self._move(OnboardingStep.CONFIRMATION)

        return False

    def back(self) -> bool:
        target = _BACK_EDGES.get(self._step)
        if target is None:
            return False
        self.error_message = None
        self.has_attempted_login = False
        self._set_step(target)
        return True

    def reset(self) -> None:
        """Return to WELCOME from any step and clear the form."""
        self.name = ""
        self._clear_secrets()
        self.has_attempted_login = False
        self.error_message = None
        self._set_step(OnboardingStep.WELCOME)

    # ── Internals ───────────────────────────────────────────────────

    def _move(self, target: OnboardingStep) -> bool:
        if target not in _FORWARD_EDGES[self._step]:
            logger.debug("Ignored onboarding move %s -> %s", self._step.name, target.name)
            return False
        self._set_step(target)
        return True

    def _set_step(self, target: OnboardingStep) -> None:
        if target == self._step:
            return
        logger.debug("Onboarding step %s -> %s", self._step.name, target.name)
        self._step = target
        self._events.publish(target)

    def _clear_secrets(self) -> None:
        self.password = ""
        self.confirm_password = ""

    def _on_session_event(self, event: SessionEvent) -> None:
        if event in (SessionEvent.SIGNED_OUT, SessionEvent.ACCOUNT_DELETED):
            self.reset()
