"""Authentication middleware."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.exceptions import ForbiddenError, UnauthenticatedError
from ..core.logging import get_logger
from ..security import InvalidTokenError, decode_access_token

logger = get_logger("auth")


@dataclass(frozen=True)
class Principal:
    """Identity taken from a verified access token."""

    user_id: int
    username: str
    email: str
    role: str

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Principal":
        return cls(
            user_id=int(claims["userId"]),
            username=claims["username"],
            email=claims["useremail"],
            role=claims["role"],
        )


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication.

    No usable ``Authorization: Bearer <token>`` header gives 401; a token that
    fails verification for any reason gives 403.
    """

    def __init__(self):
        # errors are raised here so the 401/403 split stays under our control
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> Principal:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if credentials is None:
            raise UnauthenticatedError("Not authenticated")

        try:
            claims = decode_access_token(credentials.credentials)
        except InvalidTokenError as exc:
            logger.info(
                "Rejected bearer token",
                extra={"reason": exc.reason, "path": request.url.path},
            )
            raise ForbiddenError("Invalid or expired token") from exc

        principal = Principal.from_claims(claims)
        request.state.principal = principal
        return principal


jwt_bearer = JWTBearer()


async def get_current_principal(principal: Principal = Depends(jwt_bearer)) -> Principal:
    """Get the authenticated principal for this request."""
    return principal


async def get_current_user_id(principal: Principal = Depends(jwt_bearer)) -> int:
    """Get current authenticated user ID."""
    return principal.user_id
