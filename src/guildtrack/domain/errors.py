"""Errors raised by the tracking domain."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


class TrackingError(Exception):
    """Base class for user resolution and tracking failures."""


class NotFoundError(TrackingError, LookupError):
    """A user, guild or guild member does not exist in the directory.

    This is a definitive answer from the directory, not a transient condition, so
    it is never retried.
    """


class GuildNotFoundError(NotFoundError):
    def __init__(self, guild_id: int) -> None:
        super().__init__(f"Discord guild {guild_id} does not exist")
        self.guild_id = guild_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int, *, guild_id: int | None = None) -> None:
        if guild_id is None:
            message = f"Discord user {user_id} does not exist"
        else:
            message = f"Discord user {user_id} does not exist in guild {guild_id}"
        super().__init__(message)
        self.user_id = user_id
        self.guild_id = guild_id


class TransactionError(TrackingError):
    """The store failed to apply or commit a tracking transaction."""


class MissingCollaboratorError(TrackingError, ValueError):
    """A required collaborator was not supplied at construction time."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required collaborator: {name}")
        self.name = name


def require_collaborator(value: T | None, name: str) -> T:
    if value is None:
        raise MissingCollaboratorError(name)
    return value
