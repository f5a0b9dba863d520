"""Database schema for todo items and permissions, with ordered migrations."""

from __future__ import annotations

import time
from dataclasses import dataclass

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    DateTime,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Uuid,
    delete,
    insert,
    select,
)
from sqlalchemy.engine import Connection, Engine

metadata = MetaData()

todo_table = Table(
    "todo",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("title", String, nullable=False),
    Column("status", SmallInteger, nullable=False),
    Column("due_date_whole_day", Date, nullable=True),
    Column("due_date_period_start", DateTime, nullable=True),
    Column("due_date_period_duration", Integer, nullable=True),
    Column("content_markdown", String, nullable=True),
    Column("content_plain_text", String, nullable=True),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

todo_permission_table = Table(
    "todo_permission",
    metadata,
    Column("todo_id", Uuid, nullable=False),
    Column("user_id", Uuid, nullable=False),
    Column("role", SmallInteger, nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
    PrimaryKeyConstraint("todo_id", "user_id"),
)

_migration_table = Table(
    "seaql_migrations",
    MetaData(),
    Column("version", String, primary_key=True),
    Column("applied_at", BigInteger, nullable=False),
)


@dataclass(frozen=True)
class _Migration:
    name: str
    table: Table

    def up(self, connection: Connection) -> None:
        self.table.create(connection, checkfirst=True)

    def down(self, connection: Connection) -> None:
        self.table.drop(connection)


MIGRATIONS: tuple[_Migration, ...] = (
    _Migration("m001_create_todo_table", todo_table),
    _Migration("m002_create_todo_permission_table", todo_permission_table),
)


def _applied(connection: Connection) -> set[str]:
    _migration_table.create(connection, checkfirst=True)
    return set(connection.scalars(select(_migration_table.c.version)))


def migrate(engine: Engine) -> list[str]:
    """Apply every pending migration in order; return the names applied."""
    applied: list[str] = []
    with engine.begin() as connection:
        done = _applied(connection)
        for migration in MIGRATIONS:
            if migration.name in done:
                continue
            migration.up(connection)
            connection.execute(
                insert(_migration_table).values(
                    version=migration.name, applied_at=int(time.time())
                )
            )
            applied.append(migration.name)
    return applied


def rollback(engine: Engine) -> list[str]:
    """Revert every applied migration, newest first; return the names reverted."""
    reverted: list[str] = []
    with engine.begin() as connection:
        done = _applied(connection)
        for migration in reversed(MIGRATIONS):
            if migration.name not in done:
                continue
            migration.down(connection)
            connection.execute(
                delete(_migration_table).where(
                    _migration_table.c.version == migration.name
                )
            )
            reverted.append(migration.name)
    return reverted