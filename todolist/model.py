"""Domain model: todo items, users and permissions."""

from __future__ import annotations

import datetime as dt
import enum
import uuid
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TodoId:
    value: uuid.UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TodoTitle:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class WholeDay:
    """A due date covering a whole calendar day."""

    date: dt.date


@dataclass(frozen=True)
class Period:
    """A due date starting at a UTC instant and lasting for a duration."""

    start: dt.datetime
    duration: dt.timedelta


TodoDueDate = Union[WholeDay, Period]


class TodoStatus(enum.IntEnum):
    UNSPECIFIED = 0
    ACTIVE = 1
    POSTPONED = 2
    CANCELLED = 3
    DONE = 4


@dataclass(frozen=True)
class MarkdownContent:
    text: str


@dataclass(frozen=True)
class PlainContent:
    text: str


TodoContent = Union[MarkdownContent, PlainContent]


@dataclass(frozen=True)
class Todo:
    id: TodoId
    title: TodoTitle
    due_date: TodoDueDate
    status: TodoStatus
    content: TodoContent


@dataclass(frozen=True)
class UserId:
    value: uuid.UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserCreatedAt:
    value: dt.datetime


@dataclass(frozen=True)
class User:
    id: UserId
    created_at: UserCreatedAt


class TodoPermissionRole(enum.IntEnum):
    OWNER = 0
    VIEW = 1
    EDIT = 2

    def can_edit(self) -> bool:
        """Whether this role allows changing the todo item."""
        return self in (TodoPermissionRole.OWNER, TodoPermissionRole.EDIT)


@dataclass(frozen=True)
class TodoPermission:
    todo_id: TodoId
    user_id: UserId
    role: TodoPermissionRole

    @classmethod
    def new_owner(cls, todo_id: TodoId, user_id: UserId) -> TodoPermission:
        return cls(todo_id, user_id, TodoPermissionRole.OWNER)

    @classmethod
    def new_edit(cls, todo_id: TodoId, user_id: UserId) -> TodoPermission:
        return cls(todo_id, user_id, TodoPermissionRole.EDIT)

    @classmethod
    def new_view(cls, todo_id: TodoId, user_id: UserId) -> TodoPermission:
        return cls(todo_id, user_id, TodoPermissionRole.VIEW)