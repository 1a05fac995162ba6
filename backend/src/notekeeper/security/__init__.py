"""Security utilities."""

from .jwt import (
    InvalidTokenError,
    build_access_claims,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    decode_token,
)
from .password import dummy_verify, hash_password, needs_update, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "dummy_verify",
    "needs_update",
    "InvalidTokenError",
    "build_access_claims",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "decode_access_token",
    "decode_refresh_token",
]
