"""Conversions between wire values and domain values."""

from __future__ import annotations

import uuid
from typing import Callable, Optional, TypeVar

from todolist.errors import ConvertError
from todolist.model import TodoContent, TodoDueDate, TodoId, TodoStatus, TodoTitle

T = TypeVar("T")


def parse_todo_id(value: str) -> TodoId:
    """Parse a textual UUID into a todo id."""
    try:
        return TodoId(uuid.UUID(value))
    except ValueError as exc:
        raise ConvertError("UUID Error", exc) from exc


def todo_id_to_str(todo_id: TodoId) -> str:
    return str(todo_id.value)


def parse_title(value: str) -> TodoTitle:
    """Build a title, rejecting the empty string."""
    if not value:
        raise ConvertError("An empty title.")
    return TodoTitle(value)


def title_to_str(title: TodoTitle) -> str:
    return title.value


def parse_status(value: int) -> TodoStatus:
    """Map a wire status code onto a status."""
    try:
        return TodoStatus(value)
    except ValueError as exc:
        raise ConvertError(f"Invalid status code: {value}.") from exc


def status_to_code(status: TodoStatus) -> int:
    return int(status)


def require_due_date(
    value: Optional[T], convert: Callable[[T], TodoDueDate]
) -> TodoDueDate:
    """Convert an optional value into a due date; absence is an error."""
    if value is None:
        raise ConvertError("Unable to convert an empty Option to TodoDueDate!")
    return convert(value)


def require_content(
    value: Optional[T], convert: Callable[[T], TodoContent]
) -> TodoContent:
    """Convert an optional value into content; absence is an error."""
    if value is None:
        raise ConvertError("Unable to convert an empty Option to TodoContent!")
    return convert(value)