"""Business rules around todo items."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from todolist.errors import (
    CentreError,
    PersistenceError,
    UnauthorizedError,
    UnexpectedCentreError,
    centre_error_from_persistence,
)
from todolist.model import Todo, TodoId, TodoPermission, TodoPermissionRole, UserId
from todolist.permission_centre import PermissionCentre
from todolist.repositories import TodoRepository

logger = logging.getLogger(__name__)


class TodoCentre(ABC):
    """Changes todo items on behalf of users."""

    @abstractmethod
    async def upsert(self, todo: Todo, user_id: UserId) -> Todo:
        """Create or update a todo item the user may edit."""

    @abstractmethod
    async def remove(self, todo_id: TodoId, user_id: UserId) -> Optional[Todo]:
        """Remove a todo item the user owns; return it, or None if absent."""


class DefaultTodoCentre(TodoCentre):
    """Todo centre backed by a todo repository and a permission centre."""

    def __init__(self, todo: TodoRepository, permission: PermissionCentre) -> None:
        self._todo = todo
        self._permission = permission

    def __repr__(self) -> str:
        return f"DefaultTodoCentre(todo={self._todo!r}, permission={self._permission!r})"

    async def _store(self, todo: Todo) -> Todo:
        try:
            return await self._todo.upsert(todo)
        except PersistenceError as cause:
            raise centre_error_from_persistence(cause) from cause

    async def upsert(self, todo: Todo, user_id: UserId) -> Todo:
        try:
            todo_permission = await self._permission.get(todo.id, user_id)
        except CentreError as cause:
            raise UnexpectedCentreError("Unable to get permission", cause) from cause

        if todo_permission is not None:
            if todo_permission.role.can_edit():
                logger.info("Upserting todo")
                return await self._store(todo)
            logger.warning("An unauthorised attempt to edit a todo item")
            raise UnauthorizedError("Unable to edit the todo item")

        try:
            owned = await self._permission.has_owner(todo.id)
        except CentreError as cause:
            logger.error("Unable to check permissions: %s", cause)
            raise
        if owned:
            logger.error("Security error. An attempt to edit an invalid todo item")
            raise UnauthorizedError("Not allowed")

        logger.info("Considering the todo item as a brand new one")
        try:
            await self._permission.upsert(TodoPermission.new_owner(todo.id, user_id))
        except CentreError as cause:
            logger.error("Unable to create a new permission: %s", cause)
            raise
        logger.info("A new permission was added, upserting todo item.")
        return await self._store(todo)

    async def remove(self, todo_id: TodoId, user_id: UserId) -> Optional[Todo]:
        permission = await self._permission.get(todo_id, user_id)

        if permission is None or permission.role != TodoPermissionRole.OWNER:
            logger.warning("An unauthorized attempt to remove a todo item")
            raise UnauthorizedError("You are not the owner!")

        try:
            removed = await self._todo.remove(todo_id)
        except PersistenceError as cause:
            logger.warning("Unable to remove the todo, an error happened: %s", cause)
            raise centre_error_from_persistence(cause) from cause

        if removed is not None:
            try:
                await self._permission.remove(permission)
            except CentreError as error:
                logger.warning(
                    "Recovering the todo item %s due to an failure during the "
                    "permission removing: %s",
                    todo_id,
                    error,
                )
                try:
                    await self._todo.upsert(removed)
                except PersistenceError as recovery_error:
                    logger.error("Unable to recover todo item: %s", recovery_error)
                else:
                    logger.info("Todo item recovered.")
                raise UnexpectedCentreError("Unable ") from error
            return removed

        logger.warning(
            "There is no todo item, but there is a permission for it. Cleaning up it"
        )
        try:
            await self._permission.remove(permission)
        except CentreError as error:
            logger.warning(
                "There is a problem. A permission exists for the todo item, "
                "but unable to remove it"
            )
            raise UnexpectedCentreError(
                "Unable to remove an orphan permission.", error
            ) from error
        logger.info("Permission for todo has been removed.")
        return None