import pytest
from sqlalchemy import create_engine, inspect

from todolist.schema import MIGRATIONS, migrate, rollback

NAMES = ["m001_create_todo_table", "m002_create_todo_permission_table"]


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path / 'db.sqlite'}")
    yield eng
    eng.dispose()


def test_migration_order_is_fixed(engine):
    applied = migrate(engine)
    assert applied == NAMES
    assert applied == [m.name for m in MIGRATIONS]


def test_migrate_applies_all_in_order(engine):
    assert migrate(engine) == NAMES
    tables = set(inspect(engine).get_table_names())
    assert {"todo", "todo_permission"} <= tables


def test_migrate_twice_applies_nothing_more(engine):
    migrate(engine)
    assert migrate(engine) == []


def test_todo_columns(engine):
    migrate(engine)
    columns = {c["name"]: c for c in inspect(engine).get_columns("todo")}
    assert set(columns) == {
        "id",
        "title",
        "status",
        "due_date_whole_day",
        "due_date_period_start",
        "due_date_period_duration",
        "content_markdown",
        "content_plain_text",
        "created_at",
        "updated_at",
    }
    assert columns["title"]["nullable"] is False
    assert columns["due_date_whole_day"]["nullable"] is True
    assert columns["content_plain_text"]["nullable"] is True
    assert inspect(engine).get_pk_constraint("todo")["constrained_columns"] == ["id"]


def test_permission_primary_key(engine):
    migrate(engine)
    pk = inspect(engine).get_pk_constraint("todo_permission")["constrained_columns"]
    assert pk == ["todo_id", "user_id"]


def test_rollback_reverts_newest_first(engine):
    migrate(engine)
    assert rollback(engine) == list(reversed(NAMES))
    tables = set(inspect(engine).get_table_names())
    assert "todo" not in tables
    assert "todo_permission" not in tables


def test_rollback_without_migrations_reverts_nothing(engine):
    assert rollback(engine) == []


def test_migrate_after_rollback_reapplies(engine):
    migrate(engine)
    rollback(engine)
    assert migrate(engine) == NAMES