"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from ..core.schemas.common import ErrorResponse
from ..core.services import AuthService
from ..database import get_db_session

router = APIRouter(tags=["authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def register(request: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user and return a token pair."""
    auth_service = AuthService(session)
    return await auth_service.register_user(request)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login user and get JWT tokens."""
    auth_service = AuthService(session)
    return await auth_service.authenticate_user(request)


@router.post(
    "/refresh-token",
    response_model=AccessTokenResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def refresh_token(
    request: Optional[RefreshTokenRequest] = Body(default=None),
    session: AsyncSession = Depends(get_db_session),
):
    """Exchange a refresh token for a new access token."""
    auth_service = AuthService(session)
    # a bare POST carries no token at all
    return await auth_service.refresh_access_token(request or RefreshTokenRequest())
