"""Note repository for database operations."""

from typing import List, Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import MAX_ID
from ..models.note import Note
from ..models.types import Visibility


class NoteRepository:
    """Repository for note database operations.

    Ownership is not checked here; that is the service's job.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: int) -> Optional[Note]:
        """Get note by ID."""
        if not 1 <= note_id <= MAX_ID:
            return None
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: int) -> List[Note]:
        """All notes owned by ``user_id``, any visibility."""
        stmt = select(Note).where(Note.user_id == user_id).order_by(Note.id)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def list_public(self) -> List[Note]:
        """Every PUBLIC note, regardless of owner."""
        stmt = select(Note).where(Note.visibility == Visibility.PUBLIC).order_by(Note.id)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def list_by_user_and_visibility(
        self, user_id: int, visibility: Visibility
    ) -> List[Note]:
        stmt = (
            select(Note)
            .where(and_(Note.user_id == user_id, Note.visibility == visibility))
            .order_by(Note.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def update_note(self, note: Note, update_data: dict) -> Note:
        """Apply ``update_data`` to ``note`` and persist."""
        for key, value in update_data.items():
            setattr(note, key, value)

        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note: Note) -> None:
        await self.session.delete(note)
        await self.session.commit()
