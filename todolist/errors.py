"""Error types shared across the todo list domain, persistence and centres."""

from __future__ import annotations

from typing import Any


class _ValueEquality:
    """Compare exceptions by their type and arguments rather than identity."""

    args: tuple[Any, ...]

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class ConvertError(_ValueEquality, ValueError):
    """A value could not be converted between representations."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} -> {self.cause}"


class PersistenceError(_ValueEquality, Exception):
    """Base class of every error raised by a repository."""

    def __init__(self, message: str, *extra: Any) -> None:
        super().__init__(message, *extra)
        self.message = message


class InvalidStateError(PersistenceError):
    """Stored data does not describe a valid domain object."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    def __str__(self) -> str:
        return f"InvalidState: {self.message}"


class UnexpectedPersistenceError(PersistenceError):
    """The storage layer failed in a way that was not anticipated."""

    def __init__(self, message: str, cause: Any = None) -> None:
        super().__init__(message, cause)
        self.cause = cause

    def __str__(self) -> str:
        return f"UnexpectedError: {self.message}{self.cause!r}"


class UnexpectedModelStateError(PersistenceError):
    """A stored model was found in an unexpected state."""

    def __init__(self, message: str, cause: Any = None) -> None:
        super().__init__(message, cause)
        self.cause = cause

    def __str__(self) -> str:
        return f"UnexpectedModelState: {self.message}{self.cause!r}"


class CentreError(_ValueEquality, Exception):
    """Base class of every error raised by a centre."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.message} -> {self.cause!r}"


class UnexpectedCentreError(CentreError):
    """A centre operation failed for an unexpected reason."""


class UnauthorizedError(CentreError):
    """The user is not allowed to perform the requested operation."""


def centre_error_from_persistence(error: PersistenceError) -> UnexpectedCentreError:
    """Wrap a persistence failure as an unexpected centre error."""
    return UnexpectedCentreError("Unexpected persistence error.", error)