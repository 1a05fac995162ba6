"""
Service interfaces for the Notekeeper application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from ..schemas.common import HealthCheckResponse, MessageResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Account registration, login and token refresh."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> RegisterResponse:
        """Register new user and issue tokens."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return JWT tokens."""
        pass

    @abstractmethod
    async def refresh_access_token(self, request: RefreshTokenRequest) -> AccessTokenResponse:
        """Exchange a refresh token for a new access token."""
        pass


class INoteService(ABC):
    """Owner-scoped note operations."""

    @abstractmethod
    async def create_note(self, user_id: int, request: NoteCreate) -> NoteResponse:
        pass

    @abstractmethod
    async def get_note(self, note_id: int, user_id: int) -> NoteResponse:
        pass

    @abstractmethod
    async def update_note(self, note_id: int, user_id: int, request: NoteUpdate) -> NoteResponse:
        pass

    @abstractmethod
    async def delete_note(self, note_id: int, user_id: int) -> MessageResponse:
        pass

    @abstractmethod
    async def list_user_notes(self, user_id: int) -> List[NoteResponse]:
        pass

    @abstractmethod
    async def list_public_notes(self) -> List[NoteResponse]:
        pass

    @abstractmethod
    async def list_private_notes(self, user_id: int) -> List[NoteResponse]:
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
