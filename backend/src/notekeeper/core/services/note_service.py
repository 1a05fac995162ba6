"""Note service implementation.

Every operation takes the caller's user id from the verified access token.
Single-note reads, updates and deletes require ownership regardless of
visibility, and a note owned by someone else is reported exactly like a
missing one so that other users' notes cannot be probed for.
"""

from typing import Iterable, List

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError, store_errors
from ..logging import get_logger
from ..models.note import Note
from ..models.types import Visibility
from ..repositories.note_repository import NoteRepository
from ..schemas.common import MessageResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = get_logger("services.notes")

NOTE_NOT_FOUND = "Note not found"
NOTE_NOT_FOUND_OR_UNAUTHORIZED = "Note not found or unauthorized"


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def create_note(self, user_id: int, request: NoteCreate) -> NoteResponse:
        """Create new note owned by ``user_id``."""
        note_data = request.model_dump()
        note_data["user_id"] = user_id
        with store_errors("create_note"):
            note = await self.note_repo.create_note(note_data)
        return self._to_response(note)

    async def get_note(self, note_id: int, user_id: int) -> NoteResponse:
        """Get a note the caller owns."""
        with store_errors("get_note"):
            note = await self._get_owned(note_id, user_id)
        if note is None:
            raise NotFoundError(NOTE_NOT_FOUND)
        return self._to_response(note)

    async def update_note(self, note_id: int, user_id: int, request: NoteUpdate) -> NoteResponse:
        """Update fields present in ``request``; absent fields keep their values."""
        with store_errors("update_note", "Failed to update note"):
            note = await self._get_owned(note_id, user_id)
            if note is None:
                raise NotFoundError(NOTE_NOT_FOUND_OR_UNAUTHORIZED)

            changes = request.changes()
            if changes:
                note = await self.note_repo.update_note(note, changes)
        return self._to_response(note)

    async def delete_note(self, note_id: int, user_id: int) -> MessageResponse:
        with store_errors("delete_note", "Failed to delete note"):
            note = await self._get_owned(note_id, user_id)
            if note is None:
                raise NotFoundError(NOTE_NOT_FOUND_OR_UNAUTHORIZED)
            await self.note_repo.delete_note(note)

        logger.info("Note deleted", extra={"note_id": note_id, "user_id": user_id})
        return MessageResponse(message="Note deleted successfully")

    async def list_user_notes(self, user_id: int) -> List[NoteResponse]:
        """All of the caller's notes, any visibility."""
        with store_errors("list_user_notes"):
            notes = await self.note_repo.list_by_user(user_id)
        return self._to_responses(notes)

    async def list_public_notes(self) -> List[NoteResponse]:
        """PUBLIC notes from every user; needs no principal."""
        with store_errors("list_public_notes", "Failed to fetch public notes"):
            notes = await self.note_repo.list_public()
        return self._to_responses(notes)

    async def list_private_notes(self, user_id: int) -> List[NoteResponse]:
        """The caller's PRIVATE notes."""
        with store_errors("list_private_notes", "Failed to fetch private notes"):
            notes = await self.note_repo.list_by_user_and_visibility(user_id, Visibility.PRIVATE)
        return self._to_responses(notes)

    async def _get_owned(self, note_id: int, user_id: int):
        note = await self.note_repo.get_by_id(note_id)
        if note is None:
            return None
        if not note.is_owned_by(user_id):
            logger.info(
                "Note access denied to non-owner",
                extra={"note_id": note_id, "user_id": user_id},
            )
            return None
        return note

    def _to_response(self, note: Note) -> NoteResponse:
        return NoteResponse.model_validate(note)

    def _to_responses(self, notes: Iterable[Note]) -> List[NoteResponse]:
        return [self._to_response(note) for note in notes]
