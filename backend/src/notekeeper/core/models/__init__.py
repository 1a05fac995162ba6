"""
Database models for the Notekeeper application.

SQLAlchemy ORM models for the two stored entities:
    - User: account with email/password authentication and a role
    - Note: owned note with PUBLIC/PRIVATE visibility and tags
"""

from .base import BaseModel
from .note import Note
from .types import Role, Visibility
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "Role",
    "Visibility",
]
