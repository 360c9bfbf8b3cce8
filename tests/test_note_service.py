"""
Notekeeper Backend - Note Service Unit Tests
===============================================

What:  Tests for NoteService create/list/update/delete and ownership rules.
How:   Real NoteStore on an in-memory SQLite database; mock sessions for
       database failure paths.

What we test:
    ✅ create → list returns the note first (newest-first ordering)
    ✅ Blank text rejected with nothing stored
    ✅ update replaces only the text
    ✅ delete is not idempotent (second delete → NotFoundError)
    ✅ One user can never see or touch another user's notes
    ✅ Database failures surface as DatabaseError
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from notekeeper.exceptions import DatabaseError, NotFoundError, ValidationError
from notekeeper.models.note import Note
from notekeeper.services.note_service import NoteService
from notekeeper.stores.notes import NoteStore


async def count_notes(session) -> int:
    return await session.scalar(select(func.count()).select_from(Note))


class TestNoteServiceCreate:

    @pytest.mark.asyncio
    async def test_create_then_list_returns_note_first(self, note_service, alice):
        user, _ = alice

        created = await note_service.create_note(user.id, "buy milk")
        listed = await note_service.list_notes(user.id)

        assert listed[0].id == created.id
        assert listed[0].text == "buy milk"
        assert created.owner_id == user.id
        assert created.updated_at is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    async def test_create_blank_text_rejected_and_nothing_stored(self, note_service, db_session, alice, text):
        user, _ = alice

        with pytest.raises(ValidationError, match="Note text is required"):
            await note_service.create_note(user.id, text)

        assert await count_notes(db_session) == 0

    @pytest.mark.asyncio
    async def test_create_keeps_text_as_submitted(self, note_service, alice):
        user, _ = alice
        note = await note_service.create_note(user.id, "  padded  ")
        assert note.text == "  padded  "


class TestNoteServiceList:

    @pytest.mark.asyncio
    async def test_list_empty_for_new_user(self, note_service, alice):
        user, _ = alice
        assert await note_service.list_notes(user.id) == []

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, note_service, alice):
        user, _ = alice
        first = await note_service.create_note(user.id, "one")
        second = await note_service.create_note(user.id, "two")
        third = await note_service.create_note(user.id, "three")

        listed = await note_service.list_notes(user.id)

        assert [n.id for n in listed] == [third.id, second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_excludes_other_users_notes(self, note_service, alice, bob):
        alice_user, _ = alice
        bob_user, _ = bob
        await note_service.create_note(alice_user.id, "alice's note")

        assert await note_service.list_notes(bob_user.id) == []


class TestNoteServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_replaces_only_text(self, note_service, alice):
        user, _ = alice
        original = await note_service.create_note(user.id, "buy milk")

        updated = await note_service.update_note(user.id, original.id, "buy milk and eggs")

        assert updated.id == original.id
        assert updated.owner_id == original.owner_id
        assert updated.created_at == original.created_at
        assert updated.created_at.tzinfo is not None
        assert updated.updated_at.tzinfo is not None
        assert updated.text == "buy milk and eggs"
        assert updated.updated_at is not None

        listed = await note_service.list_notes(user.id)
        assert [n.text for n in listed] == ["buy milk and eggs"]

    @pytest.mark.asyncio
    async def test_listed_timestamps_match_created_ones(self, note_service, db_session, alice):
        user, _ = alice
        created = await note_service.create_note(user.id, "buy milk")
        db_session.expunge_all()

        listed = await note_service.list_notes(user.id)

        assert listed[0].created_at == created.created_at
        assert listed[0].created_at.utcoffset().total_seconds() == 0

    @pytest.mark.asyncio
    async def test_update_blank_text_rejected(self, note_service, alice):
        user, _ = alice
        note = await note_service.create_note(user.id, "keep me")

        with pytest.raises(ValidationError):
            await note_service.update_note(user.id, note.id, "  ")

        assert (await note_service.list_notes(user.id))[0].text == "keep me"

    @pytest.mark.asyncio
    async def test_update_missing_note_not_found(self, note_service, alice):
        user, _ = alice
        with pytest.raises(NotFoundError):
            await note_service.update_note(user.id, uuid.uuid4(), "text")

    @pytest.mark.asyncio
    async def test_update_other_users_note_not_found(self, note_service, alice, bob):
        alice_user, _ = alice
        bob_user, _ = bob
        note = await note_service.create_note(alice_user.id, "private")

        with pytest.raises(NotFoundError) as exc_info:
            await note_service.update_note(bob_user.id, note.id, "hijacked")

        assert exc_info.value.message == "Note not found"
        assert (await note_service.list_notes(alice_user.id))[0].text == "private"


class TestNoteServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_note(self, note_service, db_session, alice):
        user, _ = alice
        note = await note_service.create_note(user.id, "temporary")

        result = await note_service.delete_note(user.id, note.id)

        assert result is None
        assert await note_service.list_notes(user.id) == []
        assert await count_notes(db_session) == 0

    @pytest.mark.asyncio
    async def test_second_delete_not_found(self, note_service, alice):
        user, _ = alice
        note = await note_service.create_note(user.id, "temporary")
        await note_service.delete_note(user.id, note.id)

        with pytest.raises(NotFoundError):
            await note_service.delete_note(user.id, note.id)

    @pytest.mark.asyncio
    async def test_update_then_delete_then_delete_again(self, note_service, alice):
        user, _ = alice
        note = await note_service.create_note(user.id, "draft")
        await note_service.update_note(user.id, note.id, "final")
        await note_service.delete_note(user.id, note.id)

        with pytest.raises(NotFoundError):
            await note_service.delete_note(user.id, note.id)

    @pytest.mark.asyncio
    async def test_delete_other_users_note_not_found(self, note_service, alice, bob):
        alice_user, _ = alice
        bob_user, _ = bob
        note = await note_service.create_note(alice_user.id, "private")

        with pytest.raises(NotFoundError):
            await note_service.delete_note(bob_user.id, note.id)

        assert [n.id for n in await note_service.list_notes(alice_user.id)] == [note.id]


class TestNoteStoreFailures:
    """Database errors are wrapped so the API answers a generic 500."""

    def setup_method(self):
        self.error = OperationalError("SELECT 1", {}, Exception("connection refused"))

    @pytest.mark.asyncio
    async def test_list_wraps_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=self.error)
        service = NoteService(notes=NoteStore(mock_db_session))

        with pytest.raises(DatabaseError):
            await service.list_notes(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_create_wraps_database_error(self, mock_db_session):
        mock_db_session.flush = AsyncMock(side_effect=self.error)
        service = NoteService(notes=NoteStore(mock_db_session))

        with pytest.raises(DatabaseError) as exc_info:
            await service.create_note(uuid.uuid4(), "text")

        assert exc_info.value.context["error_type"] == "OperationalError"
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_update_and_delete_wrap_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=self.error)
        service = NoteService(notes=NoteStore(mock_db_session))

        with pytest.raises(DatabaseError):
            await service.update_note(uuid.uuid4(), uuid.uuid4(), "text")
        with pytest.raises(DatabaseError):
            await service.delete_note(uuid.uuid4(), uuid.uuid4())

    @pytest.mark.asyncio
    async def test_validation_happens_before_store_access(self, mock_db_session):
        service = NoteService(notes=NoteStore(mock_db_session))

        with pytest.raises(ValidationError):
            await service.update_note(uuid.uuid4(), uuid.uuid4(), "")

        mock_db_session.execute.assert_not_awaited()
