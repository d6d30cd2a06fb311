"""
FastAPI router for the identity bounded context.

All routes delegate to the onboarding flow or the identity manager.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends

from pocketvest.application.context import AppContext
from pocketvest.interfaces.dependencies import get_context
from pocketvest.interfaces.identity.schemas import (
    OnboardingActionResponse,
    OnboardingFieldsRequest,
    SessionResponse,
)

router = APIRouter(tags=["identity"])


def _session(ctx: AppContext) -> SessionResponse:
    return SessionResponse.from_snapshot(ctx.session_snapshot())


def _action(ctx: AppContext, changed: bool) -> OnboardingActionResponse:
    return OnboardingActionResponse(changed=changed, session=_session(ctx))


@router.get("/session", response_model=SessionResponse, summary="Session flags")
def get_session(ctx: AppContext = Depends(get_context)) -> SessionResponse:
    """Return the current session and onboarding flags."""
    return _session(ctx)


@router.post(
    "/onboarding/sign-up",
    response_model=OnboardingActionResponse,
    summary="Choose sign up on the welcome screen",
)
def choose_sign_up(ctx: AppContext = Depends(get_context)) -> OnboardingActionResponse:
    return _action(ctx, ctx.onboarding.choose_sign_up())


@router.post(
    "/onboarding/login",
    response_model=OnboardingActionResponse,
    summary="Choose log in on the welcome screen",
)
def choose_login(ctx: AppContext = Depends(get_context)) -> OnboardingActionResponse:
    return _action(ctx, ctx.onboarding.choose_login())


@router.put(
    "/onboarding/fields",
    response_model=SessionResponse,
    summary="Update the onboarding form fields",
)
def update_fields(
    request: OnboardingFieldsRequest,
    ctx: AppContext = Depends(get_context),
) -> SessionResponse:
    """Store typed values and return the recomputed flags."""
    if request.name is not None:
        ctx.onboarding.set_name(request.name)
    if request.password is not None:
        ctx.onboarding.set_password(request.password)
    if request.confirm_password is not None:
        ctx.onboarding.set_confirm_password(request.confirm_password)
    return _session(ctx)


@router.post(
    "/onboarding/next",
    response_model=OnboardingActionResponse,
    summary="Press continue on the current step",
)
def advance(ctx: AppContext = Depends(get_context)) -> OnboardingActionResponse:
    return _action(ctx, ctx.onboarding.advance())


@router.post(
    "/onboarding/back",
    response_model=OnboardingActionResponse,
    summary="Go back one step",
)
def back(ctx: AppContext = Depends(get_context)) -> OnboardingActionResponse:
    return _action(ctx, ctx.onboarding.back())


@router.post("/session/sign-out", response_model=SessionResponse, summary="Sign out")
def sign_out(ctx: AppContext = Depends(get_context)) -> SessionResponse:
    ctx.identity.sign_out()
    return _session(ctx)


@router.delete(
    "/session/account",
    response_model=SessionResponse,
    summary="Delete the signed-in account",
)
def delete_account(ctx: AppContext = Depends(get_context)) -> SessionResponse:
    """Remove the current user's credentials and sign out."""
    ctx.identity.delete_account()
    return _session(ctx)
