"""
Daybook Backend — Resource Store Service
==========================================

What:  The persistence-facing operations shared by notes, tasks and events:
       create, get, list_for_owner, update, delete.
Why:   The three resources differ only in their model, their validator and
       the column their lists are sorted by. Each concrete service sets
       those three things and inherits the rest.
How:   Each method receives the request's AsyncSession (injected by FastAPI)
       and the caller's verified user id. Writes are flushed, not committed;
       get_db_session commits once the handler returns.

Ownership:
    The owner is always the caller's identity and is written exactly once,
    in create(). Validators only ever return mutable fields, so update()
    cannot reach user_id or id.

    By-id operations are scoped to the owner while settings.enforce_ownership
    is on; a record belonging to someone else is reported exactly like a
    missing one.

Error Handling Strategy:
    NotFoundError and ValidationError propagate as-is. SQLAlchemy failures are
    wrapped in DatabaseError with the operation name in the context.
"""

import logging
import uuid
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, settings as app_settings
from app.database import Base
from app.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Written once at insert; never part of an update.
IMMUTABLE_COLUMNS = ("id", "user_id", "created_at")


class ResourceService(Generic[ModelT]):
    """
    Generic CRUD service for one user-owned resource type.

    Subclasses set:
        model:      the ORM class
        resource:   singular resource name, used in messages ("task")
        validator:  staticmethod mapping raw fields to cleaned mutable fields
    and may set keep_on_null and override ordering() for the list query.
    """

    model: Type[ModelT]
    resource: str
    validator: Callable[[Dict[str, Any]], Dict[str, Any]]
    # Fields where an explicit null on update means "leave as stored".
    keep_on_null: Tuple[str, ...] = ()

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or app_settings

    # ── Hooks ─────────────────────────────────────────────────────────────

    def ordering(self) -> Tuple[Any, ...]:
        """ORDER BY clauses for list_for_owner()."""
        return ()

    def validate(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self.validator(fields)

    # ── Operations ────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, user_id: str, fields: Dict[str, Any]) -> ModelT:
        """
        Validate and persist a new record owned by `user_id`.

        Raises:
            ValidationError: a required field is missing or malformed (→ 400)
            DatabaseError:   insert failed (→ 500)
        """
        values = self.validate(fields)
        record = self.model(user_id=user_id, **values)
        db.add(record)
        await self._flush(db, "create")
        logger.info("%s %s created for user %s", self.resource, record.id, user_id)
        return record

    async def get(
        self, db: AsyncSession, record_id: str, user_id: Optional[str] = None
    ) -> ModelT:
        """
        Fetch one record by id.

        A malformed id cannot exist in the store and is reported as not found.

        Raises:
            NotFoundError: no such record, or owned by another user while
                           ownership is enforced (→ 404)
            DatabaseError: query failed (→ 500)
        """
        parsed_id = self._parse_id(record_id)
        if parsed_id is None:
            raise NotFoundError(resource=self.resource, resource_id=record_id)

        query = select(self.model).where(self.model.id == parsed_id)
        if self.settings.enforce_ownership and user_id is not None:
            query = query.where(self.model.user_id == user_id)

        result = await self._execute(db, query, "get")
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=record_id)
        return record

    async def list_for_owner(self, db: AsyncSession, user_id: str) -> List[ModelT]:
        """
        All records owned by `user_id`, in the resource's natural order.

        Raises:
            NotFoundError: the user owns nothing and
                           settings.empty_list_is_not_found is on (→ 404)
        """
        query = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(*self.ordering())
        )
        result = await self._execute(db, query, "list")
        records = list(result.scalars().all())

        if not records and self.settings.empty_list_is_not_found:
            raise NotFoundError(
                resource=self.resource,
                message=f"No {self.resource}s found for this user",
            )
        return records

    async def update(
        self,
        db: AsyncSession,
        record_id: str,
        fields: Dict[str, Any],
        user_id: Optional[str] = None,
    ) -> ModelT:
        """
        Replace the provided mutable fields and re-run full validation.

        `fields` holds only what the client sent; everything else keeps its
        stored value and is validated again alongside the new values.
        A null for a field in keep_on_null counts as not sent.
        """
        record = await self.get(db, record_id, user_id)

        fields = {
            name: value
            for name, value in fields.items()
            if not (value is None and name in self.keep_on_null)
        }
        merged = {name: getattr(record, name) for name in self._mutable_fields()}
        merged.update(fields)
        values = self.validate(merged)

        for name, value in values.items():
            setattr(record, name, value)
        await self._flush(db, "update")
        logger.info("%s %s updated (%s)", self.resource, record.id, ", ".join(sorted(fields)) or "no fields")
        return record

    async def delete(
        self, db: AsyncSession, record_id: str, user_id: Optional[str] = None
    ) -> None:
        """Hard-delete one record. Raises NotFoundError if absent."""
        record = await self.get(db, record_id, user_id)
        try:
            await db.delete(record)
        except SQLAlchemyError as e:
            raise self._database_error("delete", e)
        await self._flush(db, "delete")
        logger.info("%s %s deleted", self.resource, record_id)

    # ── Internals ─────────────────────────────────────────────────────────

    def _mutable_fields(self) -> List[str]:
        return [
            column.key
            for column in self.model.__table__.columns
            if column.key not in IMMUTABLE_COLUMNS
        ]

    @staticmethod
    def _parse_id(record_id: str) -> Optional[uuid.UUID]:
        try:
            return uuid.UUID(str(record_id))
        except ValueError:
            return None

    async def _execute(self, db: AsyncSession, query, operation: str):
        try:
            return await db.execute(query)
        except SQLAlchemyError as e:
            raise self._database_error(operation, e)

    async def _flush(self, db: AsyncSession, operation: str) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error(operation, e)

    def _database_error(self, operation: str, error: Exception) -> DatabaseError:
        logger.error(
            "Database error during %s %s: %s", self.resource, operation, str(error),
            exc_info=True,
        )
        return DatabaseError(
            message=f"Could not {operation} the {self.resource}. Please try again.",
            context={"operation": operation, "error_type": type(error).__name__},
        )
