"""
Daybook Backend — Resource Store Service Tests
================================================

What:  Tests for the generic ResourceService through its three concrete
       services.
How:   Unit tests use the mock DB session; ordering and policy tests run
       against the in-memory SQLite engine.

What we test:
    ✅ create() sets the owner from the caller, never from the fields
    ✅ get/update/delete raise NotFoundError for unknown and malformed ids
    ✅ SQLAlchemy failures become DatabaseError
    ✅ list ordering per resource; empty-list policy both ways
    ✅ ownership enforcement both ways
    ✅ update() never touches id or owner
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from app.config import Settings
from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.services.event_service import EventService
from app.services.note_service import NoteService
from app.services.task_service import TaskService


def strict_settings(**overrides):
    values = {"enforce_ownership": True, "empty_list_is_not_found": True}
    values.update(overrides)
    return Settings(**values)


class TestCreate:

    def setup_method(self):
        self.service = NoteService(strict_settings())

    @pytest.mark.asyncio
    async def test_owner_comes_from_caller(self, mock_db_session):
        note = await self.service.create(
            mock_db_session, "user-alice", {"note": "  remember  ", "user_id": "mallory"}
        )
        assert note.user_id == "user-alice"
        assert note.note == "remember"
        mock_db_session.add.assert_called_once_with(note)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_validation_failure_persists_nothing(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.create(mock_db_session, "user-alice", {})
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_flush_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))
        )
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create(mock_db_session, "user-alice", {"note": "x"})
        assert exc_info.value.context["operation"] == "create"


class TestNotFound:

    def setup_method(self):
        self.service = TaskService(strict_settings())

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError, match="Task not found"):
            await self.service.get(mock_db_session, str(uuid4()), "user-alice")

    @pytest.mark.asyncio
    async def test_malformed_id_never_queries(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get(mock_db_session, "not-a-uuid", "user-alice")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_and_delete_unknown_id(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.update(mock_db_session, str(uuid4()), {"status": "completed"}, "user-alice")
        with pytest.raises(NotFoundError):
            await self.service.delete(mock_db_session, str(uuid4()), "user-alice")
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )
        with pytest.raises(DatabaseError):
            await self.service.get(mock_db_session, str(uuid4()), "user-alice")


class TestListOrdering:

    @pytest.mark.asyncio
    async def test_events_sorted_by_date_time(self, db_session):
        service = EventService(strict_settings())
        await service.create(db_session, "user-alice", {"event": "later", "date_time": "2024-01-02"})
        await service.create(db_session, "user-alice", {"event": "sooner", "date_time": "2024-01-01"})

        events = await service.list_for_owner(db_session, "user-alice")
        assert [e.event for e in events] == ["sooner", "later"]

    @pytest.mark.asyncio
    async def test_tasks_sorted_by_due_date_undated_first(self, db_session):
        service = TaskService(strict_settings())
        await service.create(db_session, "user-alice", {"task": "march", "due_date": "2024-03-01"})
        await service.create(db_session, "user-alice", {"task": "someday"})
        await service.create(db_session, "user-alice", {"task": "january", "due_date": "2024-01-15"})

        tasks = await service.list_for_owner(db_session, "user-alice")
        assert [t.task for t in tasks] == ["someday", "january", "march"]

    @pytest.mark.asyncio
    async def test_notes_in_insertion_order(self, db_session):
        service = NoteService(strict_settings())
        for text in ("first", "second", "third"):
            await service.create(db_session, "user-alice", {"note": text})

        notes = await service.list_for_owner(db_session, "user-alice")
        assert [n.note for n in notes] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_list_only_returns_callers_records(self, db_session):
        service = NoteService(strict_settings())
        await service.create(db_session, "user-alice", {"note": "mine"})
        await service.create(db_session, "user-bob", {"note": "his"})

        notes = await service.list_for_owner(db_session, "user-alice")
        assert [n.note for n in notes] == ["mine"]


class TestPolicies:

    @pytest.mark.asyncio
    async def test_empty_list_is_not_found_by_default(self, db_session):
        service = EventService(strict_settings())
        with pytest.raises(NotFoundError, match="No events found for this user"):
            await service.list_for_owner(db_session, "user-alice")

    @pytest.mark.asyncio
    async def test_empty_list_returned_when_policy_off(self, db_session):
        service = EventService(strict_settings(empty_list_is_not_found=False))
        assert await service.list_for_owner(db_session, "user-alice") == []

    @pytest.mark.asyncio
    async def test_other_users_record_hidden_when_enforced(self, db_session):
        service = NoteService(strict_settings())
        note = await service.create(db_session, "user-alice", {"note": "private"})

        with pytest.raises(NotFoundError):
            await service.get(db_session, str(note.id), "user-bob")
        with pytest.raises(NotFoundError):
            await service.delete(db_session, str(note.id), "user-bob")
        assert (await service.get(db_session, str(note.id), "user-alice")).note == "private"

    @pytest.mark.asyncio
    async def test_other_users_record_visible_when_not_enforced(self, db_session):
        service = NoteService(strict_settings(enforce_ownership=False))
        note = await service.create(db_session, "user-alice", {"note": "shared"})

        fetched = await service.get(db_session, str(note.id), "user-bob")
        assert fetched.user_id == "user-alice"


class TestUpdate:

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, db_session):
        service = TaskService(strict_settings())
        task = await service.create(
            db_session, "user-alice", {"task": "buy milk", "due_date": "2024-01-05"}
        )

        updated = await service.update(db_session, str(task.id), {"status": "completed"}, "user-alice")
        assert updated.status == "completed"
        assert updated.task == "buy milk"
        assert updated.due_date.replace(tzinfo=timezone.utc) == datetime(2024, 1, 5, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_update_cannot_change_id_or_owner(self, db_session):
        service = NoteService(strict_settings())
        note = await service.create(db_session, "user-alice", {"note": "v1"})
        original_id = note.id

        updated = await service.update(
            db_session,
            str(note.id),
            {"note": "v2", "id": uuid4(), "user_id": "user-mallory"},
            "user-alice",
        )
        assert updated.id == original_id
        assert updated.user_id == "user-alice"
        assert updated.note == "v2"

    @pytest.mark.asyncio
    async def test_update_reruns_full_validation(self, db_session):
        service = EventService(strict_settings())
        event = await service.create(db_session, "user-alice", {"date_time": "2024-01-01"})

        with pytest.raises(ValidationError, match="dateTime is required"):
            await service.update(db_session, str(event.id), {"date_time": None}, "user-alice")

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, db_session):
        service = EventService(strict_settings())
        event = await service.create(db_session, "user-alice", {"date_time": "2024-01-01"})

        await service.delete(db_session, str(event.id), "user-alice")
        with pytest.raises(NotFoundError):
            await service.get(db_session, str(event.id), "user-alice")

    @pytest.mark.asyncio
    async def test_null_status_keeps_stored_status(self, db_session):
        service = TaskService(strict_settings())
        task = await service.create(db_session, "user-alice", {"task": "x", "status": "completed"})

        updated = await service.update(
            db_session, str(task.id), {"status": None, "task": "y"}, "user-alice"
        )
        assert updated.status == "completed"
        assert updated.task == "y"
