"""Business rules around todo permissions."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from todolist.errors import (
    PersistenceError,
    UnexpectedCentreError,
    centre_error_from_persistence,
)
from todolist.model import TodoId, TodoPermission, UserId
from todolist.repositories import TodoPermissionRepository

logger = logging.getLogger(__name__)


class PermissionCentre(ABC):
    """Answers and changes who may do what with a todo item."""

    @abstractmethod
    async def has_owner(self, todo_id: TodoId) -> bool:
        """Whether any permission is held on the todo item."""

    @abstractmethod
    async def get(self, todo_id: TodoId, user_id: UserId) -> Optional[TodoPermission]:
        """Return the permission of a user on a todo item, or None."""

    @abstractmethod
    async def upsert(self, todo_permission: TodoPermission) -> TodoPermission:
        """Store a permission and return it."""

    @abstractmethod
    async def remove(self, todo_permission: TodoPermission) -> Optional[TodoPermission]:
        """Remove a permission and return it, or None if it did not exist."""


class DefaultPermissionCentre(PermissionCentre):
    """Permission centre backed by a permission repository."""

    def __init__(self, permission: TodoPermissionRepository) -> None:
        self._permission = permission

    def __repr__(self) -> str:
        return f"DefaultPermissionCentre(permission={self._permission!r})"

    async def get(self, todo_id: TodoId, user_id: UserId) -> Optional[TodoPermission]:
        logger.debug("Looking for todo permission todo.id=%s user.id=%s", todo_id, user_id)
        try:
            result = await self._permission.get(todo_id, user_id)
        except PersistenceError as cause:
            raise centre_error_from_persistence(cause) from cause
        if result is not None:
            logger.debug("Todo permission was found")
        else:
            logger.warning("Todo permission not found")
        return result

    async def has_owner(self, todo_id: TodoId) -> bool:
        try:
            stream = await self._permission.search_permission_by_todo_id(todo_id)
        except PersistenceError as cause:
            logger.warning("Unable to search the permission")
            raise centre_error_from_persistence(cause) from cause

        logger.debug("Reading permission")
        async for item in stream:
            if not isinstance(item, PersistenceError):
                return True
        return False

    async def upsert(self, todo_permission: TodoPermission) -> TodoPermission:
        logger.debug("Inserting a new todo permission")
        try:
            return await self._permission.upsert(todo_permission)
        except PersistenceError as cause:
            logger.error("Unable to insert the permission")
            raise UnexpectedCentreError(
                "Unable to insert the permission", cause
            ) from cause

    async def remove(self, todo_permission: TodoPermission) -> Optional[TodoPermission]:
        logger.info("Removing todo permission")
        try:
            result = await self._permission.remove(
                todo_permission.todo_id, todo_permission.user_id
            )
        except PersistenceError as cause:
            logger.error("Unable to remove todo permission: %s", cause)
            raise centre_error_from_persistence(cause) from cause
        if result is not None:
            logger.info("Todo permission was removed")
        else:
            logger.info("Todo permission was not found")
        return result