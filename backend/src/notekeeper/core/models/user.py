"""
User model for authentication.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import Role

if TYPE_CHECKING:
    from .note import Note


class User(BaseModel):
    """User account, identified by email."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # compared as an exact string; no case folding
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", native_enum=False, length=10),
        default=Role.USER,
        nullable=False,
    )

    notes: Mapped[List["Note"]] = relationship(
        "Note",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        # authoritative uniqueness check; the service-level lookup is only a fast path
        UniqueConstraint("email", name="uq_users_email"),
        Index("idx_users_role", "role"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}', role={self.role.value if self.role else None})>"
