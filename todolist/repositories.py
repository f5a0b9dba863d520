"""Storage interfaces used by the centres."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional, Union

from todolist.errors import PersistenceError
from todolist.model import Todo, TodoId, TodoPermission, User, UserId

PermissionStream = AsyncIterator[Union[TodoPermission, PersistenceError]]
"""Stream of stored permissions; rows that could not be read arrive as errors."""


class AuthRepository(ABC):
    """Looks users up."""

    @abstractmethod
    async def search(self, user_id: UserId) -> Optional[User]:
        """Return the user with the given id, or None. Raises PersistenceError."""


class TodoPermissionRepository(ABC):
    """Stores the permissions users hold on todo items."""

    @abstractmethod
    async def get(self, todo_id: TodoId, user_id: UserId) -> Optional[TodoPermission]:
        """Return the permission of a user on a todo item, or None."""

    @abstractmethod
    async def upsert(self, todo_permission: TodoPermission) -> TodoPermission:
        """Insert the permission or update its role; return what was stored."""

    @abstractmethod
    async def search_permission_by_todo_id(self, todo_id: TodoId) -> PermissionStream:
        """Return a stream of every permission held on a todo item.

        Failing to start the search raises PersistenceError; a row that cannot
        be read is yielded as a PersistenceError instead of a permission.
        """

    @abstractmethod
    async def remove(
        self, todo_id: TodoId, user_id: UserId
    ) -> Optional[TodoPermission]:
        """Delete a permission and return it, or None if there was none."""


class TodoRepository(ABC):
    """Stores todo items."""

    @abstractmethod
    async def get(self, todo_id: TodoId) -> Optional[Todo]:
        """Return the todo item with the given id, or None."""

    @abstractmethod
    async def upsert(self, todo: Todo) -> Todo:
        """Insert or update a todo item and return what was stored."""

    @abstractmethod
    async def remove(self, todo_id: TodoId) -> Optional[Todo]:
        """Delete a todo item and return it, or None if there was none."""