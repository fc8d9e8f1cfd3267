"""Ports for the remote user directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from guildtrack.domain.model import RemoteUser


@runtime_checkable
class Guild(Protocol):
    """A guild as exposed by the directory."""

    @property
    def id(self) -> int: ...

    async def get_user(self, user_id: int) -> RemoteUser | None:
        """Return the member with ``user_id``, or ``None`` if not a member."""
        ...


@runtime_checkable
class DirectoryClient(Protocol):
    """Read access to the authoritative user directory."""

    async def get_user(self, user_id: int) -> RemoteUser | None:
        """Return the user without guild scope, or ``None`` if unknown."""
        ...

    async def get_guild(self, guild_id: int) -> Guild | None: ...


__all__ = ["DirectoryClient", "Guild"]
