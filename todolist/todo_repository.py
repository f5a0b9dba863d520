"""Todo repository stored in a relational database."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from todolist.entities import (
    Metadata,
    db_error_to_persistence_error,
    todo_from_row,
    todo_to_row,
)
from todolist.generator import TimeGenerator
from todolist.model import Todo, TodoId
from todolist.repositories import TodoRepository
from todolist.schema import todo_table

logger = logging.getLogger(__name__)

_UPDATED_COLUMNS = (
    "title",
    "status",
    "due_date_whole_day",
    "due_date_period_start",
    "due_date_period_duration",
    "content_markdown",
    "content_plain_text",
    "updated_at",
)


@contextmanager
def _database_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as error:
        raise db_error_to_persistence_error(error) from error


class SqlTodoRepository(TodoRepository):
    """Stores todo items in the ``todo`` table."""

    def __init__(self, engine: Engine, time_generator: TimeGenerator) -> None:
        self._engine = engine
        self._time_generator = time_generator

    def __repr__(self) -> str:
        return (
            f"SqlTodoRepository(engine={self._engine!r}, "
            f"time_generator={self._time_generator!r})"
        )

    def _new_metadata(self) -> Metadata:
        now = self._time_generator.new_utc_primitive_date_time()
        return Metadata(created_at=now, updated_at=now)

    def _by_id(self, todo_id: TodoId):
        return select(todo_table).where(todo_table.c.id == todo_id.value)

    async def get(self, todo_id: TodoId) -> Optional[Todo]:
        logger.debug("Getting todo todo.id=%s", todo_id)
        with _database_errors(), self._engine.connect() as connection:
            row = connection.execute(self._by_id(todo_id)).mappings().one_or_none()
        return None if row is None else todo_from_row(row)

    async def upsert(self, todo: Todo) -> Todo:
        logger.debug("Upserting todo todo.id=%s", todo.id)
        values = todo_to_row(todo, self._new_metadata())
        with _database_errors(), self._engine.begin() as connection:
            exists = (
                connection.execute(
                    select(todo_table.c.id).where(todo_table.c.id == todo.id.value)
                ).first()
                is not None
            )
            if exists:
                connection.execute(
                    update(todo_table)
                    .where(todo_table.c.id == todo.id.value)
                    .values({name: values[name] for name in _UPDATED_COLUMNS})
                )
            else:
                connection.execute(insert(todo_table).values(values))
            row = dict(connection.execute(self._by_id(todo.id)).mappings().one())
        return todo_from_row(row)

    async def remove(self, todo_id: TodoId) -> Optional[Todo]:
        logger.debug("Removing todo todo.id=%s", todo_id)
        with _database_errors(), self._engine.begin() as connection:
            row = connection.execute(self._by_id(todo_id)).mappings().one_or_none()
            if row is None:
                return None
            row = dict(row)
            connection.execute(delete(todo_table).where(todo_table.c.id == todo_id.value))
        return todo_from_row(row)