"""Unit tests for NoteService access rules with the note repository faked out."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

import src.notekeeper.core.services.note_service as ns
from src.notekeeper.core.exceptions import InternalError, NotFoundError
from src.notekeeper.core.models.types import Visibility
from src.notekeeper.core.schemas.notes import NoteCreate, NoteUpdate
from src.notekeeper.core.services.note_service import NoteService

OWNER = 1
STRANGER = 2


class Dummy(SimpleNamespace):
    def is_owned_by(self, user_id):
        return self.user_id == user_id


def _note(note_id, user_id=OWNER, visibility=Visibility.PRIVATE, **kw):
    now = datetime.now(timezone.utc)
    fields = dict(
        id=note_id,
        title=f"Note {note_id}",
        description="body",
        visibility=visibility,
        tags=["a"],
        user_id=user_id,
        created_at=now,
        updated_at=now,
    )
    fields.update(kw)
    return Dummy(**fields)


class FakeNoteRepo:
    def __init__(self, notes=()):
        self.notes = {n.id: n for n in notes}
        self.next_id = max(self.notes, default=0) + 1
        self.deleted = []
        self.updates = []
        self.fail_with = None

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def create_note(self, data):
        self._maybe_fail()
        note = _note(self.next_id, **data)
        self.notes[note.id] = note
        self.next_id += 1
        return note

    async def get_by_id(self, note_id):
        self._maybe_fail()
        return self.notes.get(note_id)

    async def list_by_user(self, user_id):
        self._maybe_fail()
        return [n for n in self.notes.values() if n.user_id == user_id]

    async def list_public(self):
        self._maybe_fail()
        return [n for n in self.notes.values() if n.visibility == Visibility.PUBLIC]

    async def list_by_user_and_visibility(self, user_id, visibility):
        self._maybe_fail()
        return [
            n for n in self.notes.values() if n.user_id == user_id and n.visibility == visibility
        ]

    async def update_note(self, note, data):
        self._maybe_fail()
        self.updates.append(data)
        for key, value in data.items():
            setattr(note, key, value)
        return note

    async def delete_note(self, note):
        self._maybe_fail()
        self.deleted.append(note.id)
        del self.notes[note.id]


@pytest.fixture
def repo(monkeypatch):
    fake = FakeNoteRepo(
        [
            _note(1, OWNER, Visibility.PRIVATE),
            _note(2, OWNER, Visibility.PUBLIC),
            _note(3, STRANGER, Visibility.PUBLIC),
            _note(4, STRANGER, Visibility.PRIVATE),
        ]
    )
    monkeypatch.setattr(ns, "NoteRepository", lambda s: fake, raising=True)
    return fake


@pytest.fixture
def svc(repo):
    return NoteService(session=None)


async def test_create_note_sets_owner(svc, repo):
    created = await svc.create_note(OWNER, NoteCreate(title="New", tags=["x"]))

    assert created.user_id == OWNER
    assert created.visibility == Visibility.PRIVATE
    assert created.tags == ["x"]
    assert repo.notes[created.id].title == "New"


async def test_owner_reads_own_note(svc, repo):
    note = await svc.get_note(1, OWNER)
    assert note.id == 1


@pytest.mark.parametrize("note_id", [3, 4])
async def test_public_or_not_other_users_note_is_not_found(svc, repo, note_id):
    with pytest.raises(NotFoundError) as exc_info:
        await svc.get_note(note_id, OWNER)
    assert exc_info.value.message == "Note not found"


async def test_missing_and_foreign_notes_are_indistinguishable(svc, repo):
    with pytest.raises(NotFoundError) as missing:
        await svc.update_note(999, OWNER, NoteUpdate(title="x"))
    with pytest.raises(NotFoundError) as foreign:
        await svc.update_note(4, OWNER, NoteUpdate(title="x"))

    assert missing.value.message == foreign.value.message
    assert repo.updates == []


async def test_update_merges_sent_fields(svc, repo):
    updated = await svc.update_note(1, OWNER, NoteUpdate(title="Renamed"))

    assert updated.title == "Renamed"
    assert updated.description == "body"
    assert updated.tags == ["a"]
    assert repo.updates == [{"title": "Renamed"}]


async def test_update_clears_description_and_tags(svc, repo):
    updated = await svc.update_note(
        1, OWNER, NoteUpdate.model_validate({"description": None, "tags": None})
    )
    assert updated.description is None
    assert updated.tags == []


async def test_empty_update_touches_nothing(svc, repo):
    updated = await svc.update_note(1, OWNER, NoteUpdate())
    assert updated.title == "Note 1"
    assert repo.updates == []


async def test_delete_own_note(svc, repo):
    response = await svc.delete_note(2, OWNER)
    assert response.message == "Note deleted successfully"
    assert repo.deleted == [2]


async def test_delete_foreign_note_rejected(svc, repo):
    with pytest.raises(NotFoundError, match="Note not found or unauthorized"):
        await svc.delete_note(3, OWNER)
    assert 3 in repo.notes


async def test_list_user_notes_only_own(svc, repo):
    notes = await svc.list_user_notes(OWNER)
    assert [n.id for n in notes] == [1, 2]


async def test_list_public_notes_spans_users(svc, repo):
    notes = await svc.list_public_notes()
    assert [n.id for n in notes] == [2, 3]


async def test_list_private_notes_only_own_private(svc, repo):
    notes = await svc.list_private_notes(STRANGER)
    assert [n.id for n in notes] == [4]


async def test_store_failure_becomes_internal_error(svc, repo):
    repo.fail_with = OperationalError("SELECT", {}, Exception("connection lost"))
    with pytest.raises(InternalError, match="Failed to fetch public notes"):
        await svc.list_public_notes()
