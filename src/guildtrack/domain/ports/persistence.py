"""Ports for persisting tracked guild users."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from guildtrack.domain.model import GuildUser, GuildUserCreationData, GuildUserPatch


@runtime_checkable
class GuildUserRepository(Protocol):
    """Persistence contract for guild users."""

    async def get(self, user_id: int, guild_id: int) -> GuildUser | None: ...

    async def list_by_guild(self, guild_id: int) -> Sequence[GuildUser]: ...

    async def try_update(self, user_id: int, guild_id: int, patch: GuildUserPatch) -> bool:
        """Apply ``patch`` to the stored record; return whether one existed."""
        ...

    async def create(self, data: GuildUserCreationData) -> GuildUser: ...


@dataclass(slots=True)
class TrackingRepositories:
    """Repositories available inside a tracking transaction."""

    guild_users: GuildUserRepository


@runtime_checkable
class TrackingTransaction(Protocol):
    """One atomic unit of work against the store.

    Leaving the ``async with`` block with an exception, or without calling
    ``commit``, discards every change made inside it.
    """

    @property
    def repositories(self) -> TrackingRepositories: ...

    async def __aenter__(self) -> TrackingTransaction: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


@runtime_checkable
class GuildUserStore(Protocol):
    """Entry point of the store adapter."""

    def begin_create_transaction(self) -> TrackingTransaction: ...


__all__ = [
    "GuildUserRepository",
    "GuildUserStore",
    "TrackingRepositories",
    "TrackingTransaction",
]
