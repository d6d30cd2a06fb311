"""
Tests for the onboarding flow state machine.

Drives OnboardingFlow through its edges with a real IdentityManager
over the in-memory credential store.
"""

import pytest

from conftest import FakeCredentialStore
from pocketvest.domain.identity.entities import OnboardingStep
from pocketvest.domain.identity.identity_manager import IdentityManager
from pocketvest.domain.identity.onboarding import (
    LOGIN_ERROR_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    PASSWORD_TOO_SHORT_MESSAGE,
    USERNAME_TOO_SHORT_MESSAGE,
    USERNAME_UNAVAILABLE_MESSAGE,
    OnboardingFlow,
)


@pytest.fixture
def flow(identity: IdentityManager) -> OnboardingFlow:
    return OnboardingFlow(identity)


def _sign_up(flow: OnboardingFlow, name: str = "alice", password: str = "secret1") -> None:
    flow.choose_sign_up()
    flow.set_name(name)
    flow.advance()
    flow.set_password(password)
    flow.set_confirm_password(password)
    flow.advance()


class TestInitialState:
    """Tests for a fresh flow."""

    def test_starts_on_welcome(self, flow: OnboardingFlow) -> None:
        assert flow.step is OnboardingStep.WELCOME
        assert int(flow.step) == 0
        assert flow.continue_enabled is True

    def test_advance_on_welcome_needs_a_choice(self, flow: OnboardingFlow) -> None:
        assert flow.advance() is False
        assert flow.step is OnboardingStep.WELCOME


class TestSignUpPath:
    """Tests for WELCOME → ENTER_USERNAME → ENTER_PASSWORD → CONFIRMATION."""

    def test_choose_sign_up(self, flow: OnboardingFlow) -> None:
        assert flow.choose_sign_up() is True
        assert flow.step is OnboardingStep.ENTER_USERNAME

    def test_short_username_blocks_continue(self, flow: OnboardingFlow) -> None:
        flow.choose_sign_up()
        flow.set_name("ab")

        assert flow.continue_enabled is False
        assert flow.validation_message == USERNAME_TOO_SHORT_MESSAGE
        assert flow.advance() is False
        assert flow.step is OnboardingStep.ENTER_USERNAME

    def test_taken_username_blocks_continue(
        self, flow: OnboardingFlow, identity: IdentityManager
    ) -> None:
        identity.sign_up("alice", "secret1")
        identity.sign_out()

        flow.choose_sign_up()
        flow.set_name("alice")

        assert flow.continue_enabled is False
        assert flow.validation_message == USERNAME_UNAVAILABLE_MESSAGE
        assert flow.advance() is False

    def test_set_name_sanitizes(self, flow: OnboardingFlow) -> None:
        flow.choose_sign_up()
        assert flow.set_name("al ice!_" + "x" * 20) == "alice_" + "x" * 10

    def test_valid_username_moves_to_password(self, flow: OnboardingFlow) -> None:
        flow.choose_sign_up()
        flow.set_name("alice")

        assert flow.continue_enabled is True
        assert flow.validation_message is None
        assert flow.advance() is True
        assert flow.step is OnboardingStep.ENTER_PASSWORD

    def test_password_hints(self, flow: OnboardingFlow) -> None:
        flow.choose_sign_up()
        flow.set_name("alice")
        flow.advance()

        flow.set_password("abc")
        assert flow.validation_message == PASSWORD_TOO_SHORT_MESSAGE
        flow.set_password("secret1")
        flow.set_confirm_password("secret2")
        assert flow.validation_message == PASSWORD_MISMATCH_MESSAGE
        assert flow.continue_enabled is False
        assert flow.advance() is False

    def test_valid_password_signs_up(
        self, flow: OnboardingFlow, identity: IdentityManager, store: FakeCredentialStore
    ) -> None:
        _sign_up(flow)

        assert flow.step is OnboardingStep.CONFIRMATION
        assert identity.signed_in is True
        assert identity.current_username == "alice"
        assert "alice" in store.records
        assert flow.password == ""
        assert flow.confirm_password == ""

    def test_confirmation_is_terminal(self, flow: OnboardingFlow) -> None:
        _sign_up(flow)
        assert flow.continue_enabled is False
        assert flow.advance() is False
        assert flow.back() is False
        assert flow.choose_login() is False
        assert flow.step is OnboardingStep.CONFIRMATION

    def test_sign_up_storage_failure_stays_on_password(
        self, flow: OnboardingFlow, store: FakeCredentialStore
    ) -> None:
        store.fail_writes = True
        _sign_up(flow)

        assert flow.step is OnboardingStep.ENTER_PASSWORD
        assert flow.error_message is not None
        assert "Credential store unavailable" in flow.error_message

    def test_username_taken_between_steps(
        self, flow: OnboardingFlow, store: FakeCredentialStore
    ) -> None:
        flow.choose_sign_up()
        flow.set_name("alice")
        flow.advance()
        store.records["alice"] = "0" * 64
        flow.set_password("secret1")
        flow.set_confirm_password("secret1")

        assert flow.advance() is False
        assert flow.step is OnboardingStep.ENTER_PASSWORD
        assert flow.error_message == "Username is unavailable: alice"
        assert store.records["alice"] == "0" * 64


class TestLoginPath:
    """Tests for WELCOME → LOGIN → CONFIRMATION."""

    @pytest.fixture(autouse=True)
    def _existing_user(self, identity: IdentityManager) -> None:
        identity.sign_up("alice", "secret1")
        identity.sign_out()

    def test_choose_login(self, flow: OnboardingFlow) -> None:
        assert flow.choose_login() is True
        assert flow.step is OnboardingStep.LOGIN

    def test_login_needs_both_fields(self, flow: OnboardingFlow) -> None:
        flow.choose_login()
        assert flow.continue_enabled is False
        flow.set_name("alice")
        assert flow.continue_enabled is False
        flow.set_password("secret1")
        assert flow.continue_enabled is True

    def test_failed_login_sets_attempt_flag(
        self, flow: OnboardingFlow, identity: IdentityManager
    ) -> None:
        flow.choose_login()
        flow.set_name("alice")
        flow.set_password("wrong12")

        assert flow.advance() is False
        assert flow.step is OnboardingStep.LOGIN
        assert flow.has_attempted_login is True
        assert flow.login_error == LOGIN_ERROR_MESSAGE
        assert flow.validation_message == LOGIN_ERROR_MESSAGE
        assert identity.signed_in is False

    def test_editing_clears_attempt_flag(self, flow: OnboardingFlow) -> None:
        flow.choose_login()
        flow.set_name("alice")
        flow.set_password("wrong12")
        flow.advance()

        flow.set_password("secret1")
        assert flow.has_attempted_login is False
        assert flow.login_error is None

    def test_successful_login(self, flow: OnboardingFlow, identity: IdentityManager) -> None:
        flow.choose_login()
        flow.set_name("alice")
        flow.set_password("secret1")

        assert flow.advance() is True
        assert flow.step is OnboardingStep.CONFIRMATION
        assert identity.session.is_authenticated


class TestBackAndReset:
    """Tests for back edges and the return to WELCOME."""

    def test_back_edges(self, flow: OnboardingFlow) -> None:
        flow.choose_sign_up()
        flow.set_name("alice")
        flow.advance()

        assert flow.back() is True
        assert flow.step is OnboardingStep.ENTER_USERNAME
        assert flow.back() is True
        assert flow.step is OnboardingStep.WELCOME
        assert flow.back() is False

    def test_back_from_login(self, flow: OnboardingFlow) -> None:
        flow.choose_login()
        assert flow.back() is True
        assert flow.step is OnboardingStep.WELCOME

    def test_login_not_reachable_from_username_step(self, flow: OnboardingFlow) -> None:
        flow.choose_sign_up()
        assert flow.choose_login() is False
        assert flow.step is OnboardingStep.ENTER_USERNAME

    def test_sign_out_returns_to_welcome(
        self, flow: OnboardingFlow, identity: IdentityManager
    ) -> None:
        _sign_up(flow)
        identity.sign_out()

        assert flow.step is OnboardingStep.WELCOME
        assert flow.name == ""

    def test_delete_account_returns_to_welcome(
        self, flow: OnboardingFlow, identity: IdentityManager
    ) -> None:
        _sign_up(flow)
        identity.delete_account()

        assert flow.step is OnboardingStep.WELCOME
        assert identity.login("alice", "secret1") is False

    def test_step_changes_are_published(self, flow: OnboardingFlow) -> None:
        steps: list[OnboardingStep] = []
        flow.subscribe(steps.append)

        _sign_up(flow)

        assert steps == [
            OnboardingStep.ENTER_USERNAME,
            OnboardingStep.ENTER_PASSWORD,
            OnboardingStep.CONFIRMATION,
        ]

    def test_closed_flow_ignores_sign_out(
        self, flow: OnboardingFlow, identity: IdentityManager
    ) -> None:
        _sign_up(flow)
        flow.close()
        identity.sign_out()
        assert flow.step is OnboardingStep.CONFIRMATION
