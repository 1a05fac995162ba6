"""JWT token utilities.

Access and refresh tokens are both stateless HS256 JWTs signed with the one
``secret_key``. A ``type`` claim keeps the two from being used in place of
each other. Verification has a single failure kind, ``InvalidTokenError``;
its ``reason`` is for logs only and never reaches a client.
"""

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from ..config import get_settings

if TYPE_CHECKING:
    from ..core.models.user import User

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

ACCESS_CLAIMS = ("userId", "username", "useremail", "role")
REFRESH_CLAIMS = ("userId",)


class InvalidTokenError(Exception):
    """Token failed verification for any reason."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid token: {reason}")


def _encode(claims: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    to_encode = dict(claims)
    to_encode.update({"iat": now, "exp": now + expires_delta, "type": token_type})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def build_access_claims(user: "User") -> Dict[str, Any]:
    """Claim set carried by an access token for ``user``."""
    role = user.role.value if hasattr(user.role, "value") else str(user.role)
    return {
        "userId": user.id,
        "username": user.name,
        "useremail": user.email,
        "role": role,
    }


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token carrying ``data``."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)
    return _encode(data, ACCESS_TOKEN_TYPE, expires_delta)


def create_refresh_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed refresh token; it carries the user id only."""
    if expires_delta is None:
        expires_delta = timedelta(days=get_settings().refresh_token_expire_days)
    return _encode({"userId": user_id}, REFRESH_TOKEN_TYPE, expires_delta)


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Dict[str, Any]:
    """Verify signature, expiry and type; return the claims.

    Raises:
        InvalidTokenError: on any verification failure.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_iat": True},
        )
    except ExpiredSignatureError as exc:
        raise InvalidTokenError("expired") from exc
    except JWTClaimsError as exc:
        raise InvalidTokenError("invalid_claims") from exc
    except JWTError as exc:
        reason = "bad_signature" if "Signature verification failed" in str(exc) else "malformed"
        raise InvalidTokenError(reason) from exc

    if payload.get("type") != expected_type:
        raise InvalidTokenError("wrong_type")

    required = ACCESS_CLAIMS if expected_type == ACCESS_TOKEN_TYPE else REFRESH_CLAIMS
    if any(payload.get(claim) is None for claim in required):
        raise InvalidTokenError("missing_claims")

    return payload


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate an access token."""
    return decode_token(token, ACCESS_TOKEN_TYPE)


def decode_refresh_token(token: str) -> Dict[str, Any]:
    """Decode and validate a refresh token."""
    return decode_token(token, REFRESH_TOKEN_TYPE)
