# Note model for user content
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import StringListType, Visibility

if TYPE_CHECKING:
    from .user import User


class Note(BaseModel):
    """Note with a title, free-form description, tags and a visibility flag."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    visibility: Mapped[Visibility] = mapped_column(
        Enum(Visibility, name="note_visibility", native_enum=False, length=10),
        default=Visibility.PRIVATE,
        nullable=False,
    )
    tags: Mapped[List[str]] = mapped_column(StringListType(), default=list, nullable=False)

    # owner reference
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="notes")

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
        Index("idx_notes_visibility", "visibility"),
        Index("idx_notes_user_visibility", "user_id", "visibility"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', user_id={self.user_id})>"

    def is_owned_by(self, user_id: int) -> bool:
        """Check if this note is owned by the specified user."""
        return self.user_id == user_id

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC
