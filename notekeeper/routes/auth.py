"""
Notekeeper Backend - Authentication Route Handlers
====================================================

What:  POST /api/register and POST /api/login.
How:   Read the credentials body, delegate to the Authenticator, return the
       public user view plus a session token.
"""

import logging

from fastapi import APIRouter, Depends, status

from notekeeper.deps import get_authenticator
from notekeeper.schemas.auth import AuthResponse, CredentialsRequest, UserResponse
from notekeeper.schemas.common import ErrorResponse
from notekeeper.services.auth_service import Authenticator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing credentials or email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def register(
    body: CredentialsRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> AuthResponse:
    user, token = await authenticator.register(body.email, body.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing credentials", "model": ErrorResponse},
        401: {"description": "Invalid login credentials", "model": ErrorResponse},
    },
    summary="Log in with email and password",
    description=(
        "Returns a fresh session token. An unknown email and a wrong password "
        "produce the same 401 response."
    ),
)
async def login(
    body: CredentialsRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> AuthResponse:
    user, token = await authenticator.login(body.email, body.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)
