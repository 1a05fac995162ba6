"""Authentication service implementation."""

from typing import Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...security import (
    InvalidTokenError,
    build_access_claims,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    dummy_verify,
    hash_password,
    needs_update,
    verify_password,
)
from ..exceptions import (
    ConflictError,
    ForbiddenError,
    InternalError,
    UnauthenticatedError,
    store_errors,
)
from ..logging import get_logger
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from .interfaces import IAuthService

logger = get_logger("services.auth")

EMAIL_TAKEN = "Email already exists"
INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


async def _hash(password: str) -> str:
    # bcrypt is CPU-bound; keep it off the event loop
    try:
        return await run_in_threadpool(hash_password, password)
    except (ValueError, TypeError) as exc:
        logger.error("Password hashing failed", exc_info=exc)
        raise InternalError() from exc


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def register_user(self, request: RegisterRequest) -> RegisterResponse:
        """Register new user.

        The email lookup is only a fast path: two concurrent registrations
        can both pass it, and the unique constraint on ``users.email`` then
        rejects the second insert, which is reported the same way.
        """
        with store_errors("register"):
            if await self.user_repo.is_email_taken(request.email):
                raise ConflictError(EMAIL_TAKEN)

            password_hash = await _hash(request.password)

            try:
                user = await self.user_repo.create_user(
                    {
                        "name": request.name,
                        "email": request.email,
                        "password_hash": password_hash,
                        "role": request.role,
                    }
                )
            except IntegrityError as exc:
                logger.info("Registration lost email uniqueness race")
                raise ConflictError(EMAIL_TAKEN) from exc

        logger.info("User registered", extra={"user_id": user.id, "role": user.role.value})
        access_token, refresh_token = self._issue_tokens(user)
        return RegisterResponse(
            message="User registered successfully",
            user_id=user.id,
            token=access_token,
            refresh_token=refresh_token,
        )

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return JWT tokens.

        Unknown email and wrong password give the same error and cost the
        same hashing time.
        """
        with store_errors("login"):
            user = await self.user_repo.get_by_email(request.email)

        if user is None:
            await run_in_threadpool(dummy_verify)
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        try:
            valid = await run_in_threadpool(verify_password, request.password, user.password_hash)
        except (ValueError, TypeError) as exc:
            logger.error("Stored password hash unreadable", exc_info=exc, extra={"user_id": user.id})
            raise InternalError() from exc
        if not valid:
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if needs_update(user.password_hash):
            new_hash = await _hash(request.password)
            with store_errors("rehash"):
                await self.user_repo.update_user(user, {"password_hash": new_hash})

        access_token, refresh_token = self._issue_tokens(user)
        return TokenResponse(token=access_token, refresh_token=refresh_token)

    async def refresh_access_token(self, request: RefreshTokenRequest) -> AccessTokenResponse:
        """Mint a short-lived access token from a refresh token."""
        if not request.refresh_token:
            raise UnauthenticatedError("No refresh token provided")

        try:
            claims = decode_refresh_token(request.refresh_token)
            user_id = int(claims["userId"])
        except InvalidTokenError as exc:
            logger.info("Rejected refresh token", extra={"reason": exc.reason})
            raise ForbiddenError(INVALID_REFRESH_TOKEN) from exc
        except (TypeError, ValueError) as exc:
            logger.info("Rejected refresh token", extra={"reason": "bad_user_id"})
            raise ForbiddenError(INVALID_REFRESH_TOKEN) from exc

        with store_errors("refresh"):
            user = await self.user_repo.get_by_id(user_id)
        if user is None:
            logger.info("Rejected refresh token", extra={"reason": "unknown_user"})
            raise ForbiddenError(INVALID_REFRESH_TOKEN)

        return AccessTokenResponse(access_token=create_access_token(build_access_claims(user)))

    def _issue_tokens(self, user: User) -> Tuple[str, str]:
        return create_access_token(build_access_claims(user)), create_refresh_token(user.id)
