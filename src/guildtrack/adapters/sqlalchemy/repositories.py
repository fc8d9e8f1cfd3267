"""Repository implementations backed by SQLAlchemy async sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from guildtrack.adapters.sqlalchemy.mappings import guild_user_table
from guildtrack.domain.errors import TransactionError
from guildtrack.domain.model import GuildUser

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from guildtrack.domain.model import GuildUserCreationData, GuildUserPatch


class SqlAlchemyGuildUserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: int, guild_id: int) -> GuildUser | None:
        return await self.session.get(GuildUser, (user_id, guild_id))

    async def list_by_guild(self, guild_id: int) -> Sequence[GuildUser]:
        stmt = (
            select(GuildUser)
            .where(guild_user_table.c.guild_id == guild_id)
            .order_by(guild_user_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def try_update(self, user_id: int, guild_id: int, patch: GuildUserPatch) -> bool:
        record = await self.get(user_id, guild_id)
        if record is None:
            return False
        patch.apply_to(record)
        await self._flush(f"update guild user {user_id} in guild {guild_id}")
        return True

    async def create(self, data: GuildUserCreationData) -> GuildUser:
        record = data.build()
        self.session.add(record)
        await self._flush(f"create guild user {data.user_id} in guild {data.guild_id}")
        return record

    async def _flush(self, action: str) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise TransactionError(f"Failed to {action}") from exc


if TYPE_CHECKING:
    from typing import cast

    from guildtrack.domain.ports.persistence import GuildUserRepository

    _session_stub = cast("AsyncSession", object())
    _repo_check: GuildUserRepository = SqlAlchemyGuildUserRepository(_session_stub)
