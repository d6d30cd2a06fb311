"""
Pydantic schemas for the identity API.

These schemas define the API contract for session flags and
onboarding actions. No business logic belongs here.
"""

from typing import Optional

from pydantic import BaseModel, Field

from pocketvest.application.dtos import SessionSnapshot


class SessionResponse(BaseModel):
    """Session and onboarding flags, read-only for the client."""

    current_username: str
    signed_in: bool
    join_date: Optional[str]
    onboarding_step: int = Field(..., ge=0, le=4)
    continue_enabled: bool
    has_attempted_login: bool
    validation_message: Optional[str]
    error_message: Optional[str]
    shows_home: bool

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionResponse":
        return cls(
            current_username=snapshot.current_username,
            signed_in=snapshot.signed_in,
            join_date=snapshot.join_date,
            onboarding_step=snapshot.onboarding_step,
            continue_enabled=snapshot.continue_enabled,
            has_attempted_login=snapshot.has_attempted_login,
            validation_message=snapshot.validation_message,
            error_message=snapshot.error_message,
            shows_home=snapshot.shows_home,
        )


class OnboardingActionResponse(BaseModel):
    """Result of an onboarding action."""

    changed: bool = Field(..., description="Whether the onboarding step moved")
    session: SessionResponse


class OnboardingFieldsRequest(BaseModel):
    """Form fields typed on the current onboarding step.

    Omitted fields keep their current value. The username is
    sanitized server-side to letters, digits and underscores.
    """

    name: Optional[str] = Field(default=None, max_length=64)
    password: Optional[str] = Field(default=None, max_length=256)
    confirm_password: Optional[str] = Field(default=None, max_length=256)
