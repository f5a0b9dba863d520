"""Wiring of repositories and centres from a configuration."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from todolist.configuration import Configuration, Postgres
from todolist.generator import DefaultTimeGenerator
from todolist.permission_centre import DefaultPermissionCentre, PermissionCentre
from todolist.schema import migrate
from todolist.todo_centre import DefaultTodoCentre, TodoCentre
from todolist.todo_permission_repository import SqlTodoPermissionRepository
from todolist.todo_repository import SqlTodoRepository

logger = logging.getLogger(__name__)

_ACQUIRE_TIMEOUT_SECONDS = 5


def database_url(postgres: Postgres) -> str:
    """Build the database URL for the configured server."""
    return (
        f"postgresql://{postgres.username}:{postgres.password}"
        f"@{postgres.address}/{postgres.database}"
    )


class RepositoryModule:
    """Owns the database engine, migrates it and hands out repositories."""

    def __init__(
        self, configuration: Configuration, engine: Optional[Engine] = None
    ) -> None:
        if engine is None:
            engine = create_engine(
                database_url(configuration.postgres),
                pool_timeout=_ACQUIRE_TIMEOUT_SECONDS,
            )
        logger.info("Starting migration.")
        try:
            migrate(engine)
        except SQLAlchemyError:
            logger.error("Migration failed.")
            raise
        self._engine = engine

    def todo_repository(self) -> SqlTodoRepository:
        return SqlTodoRepository(self._engine, DefaultTimeGenerator())

    def todo_permission_repository(self) -> SqlTodoPermissionRepository:
        return SqlTodoPermissionRepository(self._engine, DefaultTimeGenerator())


class CentreModule:
    """Builds the centres on top of a repository module."""

    def __init__(
        self, configuration: Configuration, repository_module: RepositoryModule
    ) -> None:
        self._permission = DefaultPermissionCentre(
            repository_module.todo_permission_repository()
        )
        self._todo = DefaultTodoCentre(
            repository_module.todo_repository(), self._permission
        )

    def todo_centre(self) -> TodoCentre:
        return self._todo

    def permission_centre(self) -> PermissionCentre:
        return self._permission