"""Todo permission repository stored in a relational database."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Optional, Union

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from todolist.entities import (
    Metadata,
    db_error_to_persistence_error,
    permission_from_row,
    permission_to_row,
)
from todolist.errors import PersistenceError
from todolist.generator import TimeGenerator
from todolist.model import TodoId, TodoPermission, UserId
from todolist.repositories import PermissionStream, TodoPermissionRepository
from todolist.schema import todo_permission_table

logger = logging.getLogger(__name__)


@contextmanager
def _database_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as error:
        raise db_error_to_persistence_error(error) from error


def _key(todo_id: TodoId, user_id: UserId):
    return and_(
        todo_permission_table.c.todo_id == todo_id.value,
        todo_permission_table.c.user_id == user_id.value,
    )


async def _stream(
    rows: list[Mapping[str, Any]],
) -> AsyncIterator[Union[TodoPermission, PersistenceError]]:
    for row in rows:
        try:
            yield permission_from_row(row)
        except PersistenceError as error:
            yield error


class SqlTodoPermissionRepository(TodoPermissionRepository):
    """Stores permissions in the ``todo_permission`` table."""

    def __init__(self, engine: Engine, time_generator: TimeGenerator) -> None:
        self._engine = engine
        self._time_generator = time_generator

    def __repr__(self) -> str:
        return (
            f"SqlTodoPermissionRepository(engine={self._engine!r}, "
            f"time_generator={self._time_generator!r})"
        )

    def _new_metadata(self) -> Metadata:
        now = self._time_generator.new_utc_primitive_date_time()
        return Metadata(created_at=now, updated_at=now)

    async def get(self, todo_id: TodoId, user_id: UserId) -> Optional[TodoPermission]:
        with _database_errors(), self._engine.connect() as connection:
            row = (
                connection.execute(
                    select(todo_permission_table).where(_key(todo_id, user_id))
                )
                .mappings()
                .one_or_none()
            )
        return None if row is None else permission_from_row(row)

    async def upsert(self, todo_permission: TodoPermission) -> TodoPermission:
        values = permission_to_row(todo_permission, self._new_metadata())
        key = _key(todo_permission.todo_id, todo_permission.user_id)
        with _database_errors(), self._engine.begin() as connection:
            exists = (
                connection.execute(
                    select(todo_permission_table.c.todo_id).where(key)
                ).first()
                is not None
            )
            if exists:
                connection.execute(
                    update(todo_permission_table).where(key).values(role=values["role"])
                )
            else:
                connection.execute(insert(todo_permission_table).values(values))
            row = dict(
                connection.execute(select(todo_permission_table).where(key))
                .mappings()
                .one()
            )
        return permission_from_row(row)

    async def search_permission_by_todo_id(self, todo_id: TodoId) -> PermissionStream:
        with _database_errors(), self._engine.connect() as connection:
            rows = [
                dict(row)
                for row in connection.execute(
                    select(todo_permission_table).where(
                        todo_permission_table.c.todo_id == todo_id.value
                    )
                ).mappings()
            ]
        logger.debug("Found %d permissions for todo.id=%s", len(rows), todo_id)
        return _stream(rows)

    async def remove(
        self, todo_id: TodoId, user_id: UserId
    ) -> Optional[TodoPermission]:
        key = _key(todo_id, user_id)
        with _database_errors(), self._engine.begin() as connection:
            row = (
                connection.execute(select(todo_permission_table).where(key))
                .mappings()
                .one_or_none()
            )
            if row is None:
                return None
            row = dict(row)
            connection.execute(delete(todo_permission_table).where(key))
        return permission_from_row(row)