"""Notes API endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/notes", tags=["notes"])

_AUTH_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post("", response_model=NoteResponse, responses=_AUTH_ERRORS)
async def create_note(
    request: NoteCreate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note owned by the caller."""
    note_service = NoteService(session)
    return await note_service.create_note(current_user_id, request)


@router.get("", response_model=List[NoteResponse], responses=_AUTH_ERRORS)
async def list_notes(
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's notes."""
    note_service = NoteService(session)
    return await note_service.list_user_notes(current_user_id)


# literal paths must be registered before /{note_id}
@router.get("/public", response_model=List[NoteResponse])
async def list_public_notes(session: AsyncSession = Depends(get_db_session)):
    """List PUBLIC notes from every user. No authentication."""
    note_service = NoteService(session)
    return await note_service.list_public_notes()


@router.get("/private", response_model=List[NoteResponse], responses=_AUTH_ERRORS)
async def list_private_notes(
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's PRIVATE notes."""
    note_service = NoteService(session)
    return await note_service.list_private_notes(current_user_id)


@router.get("/{note_id}", response_model=NoteResponse, responses={**_AUTH_ERRORS, **_NOT_FOUND})
async def get_note(
    note_id: int,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    return await note_service.get_note(note_id, current_user_id)


@router.put("/{note_id}", response_model=NoteResponse, responses={**_AUTH_ERRORS, **_NOT_FOUND})
async def update_note(
    note_id: int,
    request: NoteUpdate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note; fields left out of the body are kept."""
    note_service = NoteService(session)
    return await note_service.update_note(note_id, current_user_id, request)


@router.delete(
    "/{note_id}", response_model=MessageResponse, responses={**_AUTH_ERRORS, **_NOT_FOUND}
)
async def delete_note(
    note_id: int,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    return await note_service.delete_note(note_id, current_user_id)
