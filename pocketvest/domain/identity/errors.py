"""
Domain-specific errors for the identity bounded context.

All errors raised from the identity domain must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class IdentityDomainError(Exception):
    """Base error for all identity domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UsernameTakenError(IdentityDomainError):
    """Raised when signing up with a username that already has a record."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username is unavailable: {username}")
        self.username = username


class InvalidUsernameError(IdentityDomainError):
    """Raised when a username breaks the length or character rules."""

    def __init__(self, username: str) -> None:
        super().__init__(
            f"Invalid username: {username!r}. Use 3-16 letters, digits or underscores."
        )
        self.username = username


class InvalidPasswordError(IdentityDomainError):
    """Raised when a password is too short."""

    def __init__(self) -> None:
        super().__init__("Password must be at least 6 characters.")


class NotSignedInError(IdentityDomainError):
    """Raised when an operation needs an active session and there is none."""

    def __init__(self) -> None:
        super().__init__("No user is signed in.")


class CredentialPersistenceError(IdentityDomainError):
    """Raised when a credential change cannot be written durably."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Credential store unavailable: {reason}")
        self.reason = reason
