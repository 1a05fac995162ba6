"""Middleware for authentication and other cross-cutting concerns."""

from .auth import JWTBearer, Principal, get_current_principal, get_current_user_id

__all__ = ["get_current_principal", "get_current_user_id", "JWTBearer", "Principal"]
