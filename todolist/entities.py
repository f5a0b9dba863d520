"""Mapping between domain objects and database rows."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Mapping

from todolist.errors import InvalidStateError, UnexpectedPersistenceError
from todolist.model import (
    MarkdownContent,
    Period,
    PlainContent,
    Todo,
    TodoId,
    TodoPermission,
    TodoPermissionRole,
    TodoStatus,
    TodoTitle,
    UserId,
    WholeDay,
)


@dataclass(frozen=True)
class Metadata:
    """Timestamps stored alongside a record, as naive UTC datetimes."""

    created_at: dt.datetime
    updated_at: dt.datetime


def _to_naive_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)


def _to_aware_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def todo_to_row(todo: Todo, metadata: Metadata) -> dict[str, Any]:
    """Build the column values that store a todo item."""
    due = todo.due_date
    if isinstance(due, WholeDay):
        whole_day, period_start, period_duration = due.date, None, None
    else:
        whole_day = None
        period_start = _to_naive_utc(due.start)
        period_duration = int(due.duration.total_seconds())

    content = todo.content
    if isinstance(content, MarkdownContent):
        markdown, plain = content.text, None
    else:
        markdown, plain = None, content.text

    return {
        "id": todo.id.value,
        "title": todo.title.value,
        "due_date_whole_day": whole_day,
        "due_date_period_start": period_start,
        "due_date_period_duration": period_duration,
        "status": int(todo.status),
        "content_markdown": markdown,
        "content_plain_text": plain,
        "created_at": metadata.created_at,
        "updated_at": metadata.updated_at,
    }


def todo_from_row(row: Mapping[str, Any]) -> Todo:
    """Rebuild a todo item from stored column values.

    Raises InvalidStateError when the stored columns do not describe a valid item.
    """
    whole_day = row["due_date_whole_day"]
    start = row["due_date_period_start"]
    duration = row["due_date_period_duration"]
    if whole_day is not None and start is None and duration is None:
        due_date: WholeDay | Period = WholeDay(whole_day)
    elif whole_day is None and start is not None and duration is not None:
        due_date = Period(_to_aware_utc(start), dt.timedelta(seconds=duration))
    else:
        raise InvalidStateError("Invalid due_date.")

    markdown = row["content_markdown"]
    plain = row["content_plain_text"]
    if markdown is not None and plain is None:
        content: MarkdownContent | PlainContent = MarkdownContent(markdown)
    elif markdown is None and plain is not None:
        content = PlainContent(plain)
    else:
        raise InvalidStateError("Invalid content.")

    code = row["status"] & 0xFF
    try:
        status = TodoStatus(code)
    except ValueError:
        raise InvalidStateError(f"Invalid status value: {code}") from None

    return Todo(
        id=TodoId(row["id"]),
        title=TodoTitle(row["title"]),
        due_date=due_date,
        status=status,
        content=content,
    )


def permission_to_row(permission: TodoPermission, metadata: Metadata) -> dict[str, Any]:
    """Build the column values that store a permission."""
    return {
        "todo_id": permission.todo_id.value,
        "user_id": permission.user_id.value,
        "role": int(permission.role),
        "created_at": metadata.created_at,
        "updated_at": metadata.updated_at,
    }


def permission_from_row(row: Mapping[str, Any]) -> TodoPermission:
    """Rebuild a permission from stored column values."""
    code = row["role"] & 0xFF
    try:
        role = TodoPermissionRole(code)
    except ValueError:
        raise InvalidStateError(f"Invalid TodoPermissionRole: {code}") from None
    return TodoPermission(TodoId(row["todo_id"]), UserId(row["user_id"]), role)


def db_error_to_persistence_error(error: BaseException) -> UnexpectedPersistenceError:
    """Wrap a database failure as an unexpected persistence error."""
    return UnexpectedPersistenceError(str(error), error)