"""
NotesApp Backend — Note Handler Unit Tests
============================================

What:  Tests for NoteService (create, get, list, update, delete).
How:   Uses mock DB sessions and patched repositories (no real DB).

What we test:
    ✅ Create validation order and defaults
    ✅ Notes can only be filed under the caller's own categories
    ✅ Partial update: empty fields ignored, category Unchanged / Cleared / SetTo
    ✅ Nothing is mutated when validation fails
    ✅ Ownership checks on update and delete
    ✅ DTO timestamps are always UTC-aware
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from notesapp.commands import (
    CLEARED,
    CreateNoteCommand,
    DeleteNoteCommand,
    GetAllNotesQuery,
    GetNoteByIdQuery,
    SetTo,
    UpdateNoteCommand,
)
from notesapp.exceptions import NoteOperationError, NotFoundError, UnauthorizedError
from notesapp.models.category import Category
from notesapp.models.note import Note
from notesapp.results import Err, Ok
from notesapp.services.note_service import NoteService
from notesapp.services.projections import to_category_dto, to_note_dto

MODULE = "notesapp.services.note_service"


def make_note(owner_id, now, category_id=None, title="N1", content="body"):
    return Note(
        id=uuid4(), title=title, content_markdown=content, user_id=owner_id,
        category_id=category_id, created=now, last_modified=now,
    )


def make_category(owner_id, now, name="Work"):
    return Category(id=uuid4(), name=name, user_id=owner_id, created=now, last_modified=now)


async def _assign_id(db, note):
    note.id = uuid4()
    return note


class TestCreateNote:
    """Tests for create_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_in_category(self, mock_db_session, owner_id, now):
        """A note filed under the caller's category carries its id and name."""
        category = make_category(owner_id, now)
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            cat_repo.get_by_id = AsyncMock(return_value=category)
            note_repo.create = AsyncMock(side_effect=_assign_id)

            result = await self.service.create_note(
                mock_db_session,
                CreateNoteCommand(title="N1", caller_id=owner_id, category_id=category.id),
            )

        dto = result.unwrap()
        assert dto.title == "N1"
        assert dto.category_id == str(category.id)
        assert dto.category_name == "Work"

    @pytest.mark.asyncio
    async def test_content_defaults_to_empty(self, mock_db_session, owner_id):
        """Missing content becomes an empty document; no category gives empty strings."""
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.create = AsyncMock(side_effect=_assign_id)

            result = await self.service.create_note(
                mock_db_session, CreateNoteCommand(title="N1", caller_id=owner_id)
            )

        dto = result.unwrap()
        assert dto.content == ""
        assert dto.category_id == ""
        assert dto.category_name == ""

    @pytest.mark.asyncio
    async def test_unknown_category_is_not_found(self, mock_db_session, owner_id):
        """A category id with no row is reported as an invalid CategoryId."""
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            cat_repo.get_by_id = AsyncMock(return_value=None)
            note_repo.create = AsyncMock()

            result = await self.service.create_note(
                mock_db_session,
                CreateNoteCommand(title="N1", caller_id=owner_id, category_id=uuid4()),
            )

        assert isinstance(result.error, NotFoundError)
        assert result.error.message == "Invalid CategoryId."
        note_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_users_category_is_refused(
        self, mock_db_session, owner_id, other_user_id, now
    ):
        """A note cannot be filed under a category that belongs to someone else."""
        foreign = make_category(other_user_id, now)
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            cat_repo.get_by_id = AsyncMock(return_value=foreign)
            note_repo.create = AsyncMock()

            result = await self.service.create_note(
                mock_db_session,
                CreateNoteCommand(title="N1", caller_id=owner_id, category_id=foreign.id),
            )

        assert isinstance(result.error, NotFoundError)
        assert result.error.message == "Invalid CategoryId."
        note_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_category_checked_before_title(self, mock_db_session, owner_id):
        """The category check runs before the title check."""
        with patch(f"{MODULE}.category_repository") as cat_repo:
            cat_repo.get_by_id = AsyncMock(return_value=None)
            result = await self.service.create_note(
                mock_db_session,
                CreateNoteCommand(title="", caller_id=owner_id, category_id=uuid4()),
            )

        assert isinstance(result.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_empty_title_rejected(self, mock_db_session, owner_id):
        """An empty title is a note operation error."""
        result = await self.service.create_note(
            mock_db_session, CreateNoteCommand(title="", caller_id=owner_id)
        )
        assert isinstance(result.error, NoteOperationError)
        assert result.error.message == "Note title cannot be empty."

    @pytest.mark.asyncio
    async def test_null_title_rejected(self, mock_db_session, owner_id):
        """A null title is rejected like an empty one."""
        result = await self.service.create_note(
            mock_db_session, CreateNoteCommand(title=None, caller_id=owner_id)
        )
        assert isinstance(result.error, NoteOperationError)

    @pytest.mark.asyncio
    async def test_title_over_200_characters_rejected(self, mock_db_session, owner_id):
        """Titles longer than 200 characters are refused."""
        result = await self.service.create_note(
            mock_db_session, CreateNoteCommand(title="t" * 201, caller_id=owner_id)
        )
        assert isinstance(result.error, NoteOperationError)

    @pytest.mark.asyncio
    async def test_missing_caller_is_unauthorized(self, mock_db_session):
        """No caller id means Unauthorized."""
        result = await self.service.create_note(
            mock_db_session, CreateNoteCommand(title="N1", caller_id="")
        )
        assert isinstance(result, Err)
        assert isinstance(result.error, UnauthorizedError)


class TestReadNotes:
    """Tests for get_note and list_notes."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_resolves_category_name(self, mock_db_session, owner_id, now):
        """A single note is returned with its category's name."""
        category = make_category(owner_id, now, name="Home")
        note = make_note(owner_id, now, category_id=category.id)
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            cat_repo.get_by_id = AsyncMock(return_value=category)

            result = await self.service.get_note(
                mock_db_session, GetNoteByIdQuery(note_id=note.id, caller_id=owner_id)
            )

        assert result.unwrap().category_name == "Home"

    @pytest.mark.asyncio
    async def test_get_missing_is_not_found(self, mock_db_session, owner_id):
        """An unknown note id yields NotFoundError."""
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=None)
            result = await self.service.get_note(
                mock_db_session, GetNoteByIdQuery(note_id=uuid4(), caller_id=owner_id)
            )

        assert isinstance(result.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_list_empty_is_ok(self, mock_db_session, owner_id):
        """An empty store lists as Ok([]), not an error."""
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.list_all = AsyncMock(return_value=[])
            result = await self.service.list_notes(
                mock_db_session, GetAllNotesQuery(caller_id=owner_id)
            )

        assert isinstance(result, Ok)
        assert result.value == []

    @pytest.mark.asyncio
    async def test_list_projects_category_names(self, mock_db_session, owner_id, now):
        """Joined category names are projected; uncategorised notes get ""."""
        with_category = make_note(owner_id, now, category_id=uuid4(), title="A")
        without_category = make_note(owner_id, now, title="B")
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.list_all = AsyncMock(
                return_value=[(with_category, "Work"), (without_category, None)]
            )
            result = await self.service.list_notes(
                mock_db_session, GetAllNotesQuery(caller_id=owner_id)
            )

        names = [(n.title, n.category_name) for n in result.unwrap()]
        assert names == [("A", "Work"), ("B", "")]


class TestUpdateNote:
    """Tests for update_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_empty_fields_leave_note_unchanged(self, mock_db_session, owner_id, now):
        """Empty title/content and an Unchanged category keep the stored values."""
        category_id = uuid4()
        note = make_note(owner_id, now, category_id=category_id)
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock(side_effect=lambda db, n: n)
            cat_repo.get_by_id = AsyncMock(return_value=None)

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(note_id=note.id, caller_id=owner_id, title="", content=""),
            )

        dto = result.unwrap()
        assert dto.title == "N1"
        assert dto.content == "body"
        assert note.category_id == category_id

    @pytest.mark.asyncio
    async def test_title_and_content_applied(self, mock_db_session, owner_id, now):
        """Non-empty title and content replace the stored values."""
        note = make_note(owner_id, now)
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock(side_effect=lambda db, n: n)

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(
                    note_id=note.id, caller_id=owner_id, title="New", content="# Heading"
                ),
            )

        dto = result.unwrap()
        assert (dto.title, dto.content) == ("New", "# Heading")

    @pytest.mark.asyncio
    async def test_cleared_category(self, mock_db_session, owner_id, now):
        """Cleared removes the note's category."""
        note = make_note(owner_id, now, category_id=uuid4())
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock(side_effect=lambda db, n: n)

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(note_id=note.id, caller_id=owner_id, category=CLEARED),
            )

        assert note.category_id is None
        assert result.unwrap().category_id == ""

    @pytest.mark.asyncio
    async def test_set_to_existing_category(self, mock_db_session, owner_id, now):
        """SetTo moves the note into another of the caller's categories."""
        note = make_note(owner_id, now)
        target = make_category(owner_id, now, name="Home")
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock(side_effect=lambda db, n: n)
            cat_repo.get_by_id = AsyncMock(return_value=target)

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(note_id=note.id, caller_id=owner_id, category=SetTo(target.id)),
            )

        dto = result.unwrap()
        assert dto.category_id == str(target.id)
        assert dto.category_name == "Home"

    @pytest.mark.asyncio
    async def test_set_to_unknown_category_mutates_nothing(self, mock_db_session, owner_id, now):
        """An unknown target category leaves the whole note untouched."""
        note = make_note(owner_id, now)
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock()
            cat_repo.get_by_id = AsyncMock(return_value=None)

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(
                    note_id=note.id, caller_id=owner_id, title="Changed",
                    category=SetTo(uuid4()),
                ),
            )

        assert isinstance(result.error, NotFoundError)
        assert result.error.message == "Invalid CategoryId."
        assert note.title == "N1"
        note_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_to_other_users_category_refused(
        self, mock_db_session, owner_id, other_user_id, now
    ):
        """A note cannot be moved into a category owned by someone else."""
        note = make_note(owner_id, now)
        foreign = make_category(other_user_id, now)
        with patch(f"{MODULE}.category_repository") as cat_repo, \
             patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock()
            cat_repo.get_by_id = AsyncMock(return_value=foreign)

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(note_id=note.id, caller_id=owner_id, category=SetTo(foreign.id)),
            )

        assert isinstance(result.error, NotFoundError)
        assert note.category_id is None
        note_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_owner_is_unauthorized(self, mock_db_session, owner_id, other_user_id, now):
        """Another user's update is refused and the note is untouched."""
        note = make_note(owner_id, now)
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock()

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(note_id=note.id, caller_id=other_user_id, title="Mine"),
            )

        assert isinstance(result.error, UnauthorizedError)
        assert note.title == "N1"

    @pytest.mark.asyncio
    async def test_vanished_row_is_operation_error(self, mock_db_session, owner_id, now):
        """A row deleted before the flush is reported with the note id."""
        note = make_note(owner_id, now)
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.update = AsyncMock(return_value=None)

            result = await self.service.update_note(
                mock_db_session,
                UpdateNoteCommand(note_id=note.id, caller_id=owner_id, title="X"),
            )

        assert isinstance(result.error, NoteOperationError)
        assert result.error.note_id == note.id


class TestDeleteNote:
    """Tests for delete_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_owner_deletes(self, mock_db_session, owner_id, now):
        """The owner's delete returns Ok(True)."""
        note = make_note(owner_id, now)
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.delete = AsyncMock(return_value=True)

            result = await self.service.delete_note(
                mock_db_session, DeleteNoteCommand(note_id=note.id, caller_id=owner_id)
            )

        assert result.unwrap() is True

    @pytest.mark.asyncio
    async def test_missing_is_not_found(self, mock_db_session, owner_id):
        """Deleting an unknown note yields NotFoundError."""
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=None)
            note_repo.delete = AsyncMock()

            result = await self.service.delete_note(
                mock_db_session, DeleteNoteCommand(note_id=uuid4(), caller_id=owner_id)
            )

        assert isinstance(result.error, NotFoundError)
        note_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_owner_is_unauthorized(self, mock_db_session, owner_id, other_user_id, now):
        """Another user cannot delete the note."""
        note = make_note(owner_id, now)
        with patch(f"{MODULE}.note_repository") as note_repo:
            note_repo.get_by_id = AsyncMock(return_value=note)
            note_repo.delete = AsyncMock()

            result = await self.service.delete_note(
                mock_db_session, DeleteNoteCommand(note_id=note.id, caller_id=other_user_id)
            )

        assert isinstance(result.error, UnauthorizedError)
        note_repo.delete.assert_not_awaited()


class TestProjections:
    """Tests for the entity → DTO mapping."""

    def test_naive_timestamps_read_back_as_utc(self, owner_id):
        """Offset-less values (as SQLite returns them) are tagged as UTC."""
        naive = datetime(2026, 1, 2, 3, 4, 5, 678901)
        note = make_note(owner_id, naive)
        category = make_category(owner_id, naive)

        note_dto = to_note_dto(note)
        category_dto = to_category_dto(category)

        expected = naive.replace(tzinfo=timezone.utc)
        assert note_dto.created == expected
        assert note_dto.created.tzinfo is not None
        assert category_dto.last_modified == expected
        assert category_dto.last_modified.tzinfo is not None

    def test_aware_timestamps_kept(self, owner_id, now):
        """Values that already carry UTC are passed through."""
        dto = to_note_dto(make_note(owner_id, now))
        assert dto.created == now
