# src/messagely/api/endpoints/auth.py
"""Authentication endpoints for the Messagely API."""

from __future__ import annotations

from fastapi import APIRouter, status

from messagely.api.dependencies import AuthServiceDep
from messagely.schemas.user import LoginRequest, RegisterRequest, TokenResponse

router = APIRouter(tags=["authentication"])


@router.post(
    "/login",
    summary="Exchange a username and password for a bearer token",
    status_code=status.HTTP_200_OK,
    response_model=TokenResponse,
)
def login_user(payload: LoginRequest, auth: AuthServiceDep) -> TokenResponse:
    """Authenticate and update the user's last-login timestamp."""
    token = auth.authenticate(payload.username, payload.password)
    return TokenResponse(token=token)


@router.post(
    "/register",
    summary="Register a new user and log them in",
    status_code=status.HTTP_201_CREATED,
    response_model=TokenResponse,
)
def register_user(payload: RegisterRequest, auth: AuthServiceDep) -> TokenResponse:
    """Create the account and return a token for it."""
    token = auth.register(payload)
    return TokenResponse(token=token)
