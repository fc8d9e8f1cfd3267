"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from guildtrack.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyGuildUserStore,
    is_started,
    startup,
)
from guildtrack.domain.model import RemoteUser
from guildtrack.domain.resolution import UserService
from guildtrack.domain.tracking import UserTracker

if TYPE_CHECKING:
    from collections.abc import Sequence

    from guildtrack.domain.model import GuildUser
    from guildtrack.domain.ports.context import RequestContext
    from guildtrack.domain.ports.directory import DirectoryClient
    from guildtrack.domain.ports.persistence import GuildUserStore

log = getLogger(__name__)


async def _default_store() -> GuildUserStore:
    if not is_started():
        await startup()
    return SqlAlchemyGuildUserStore()


async def build_user_tracker(*, store: GuildUserStore | None = None) -> UserTracker:
    """Return a tracker over ``store``, or over the SQLAlchemy store by default."""

    return UserTracker(store or await _default_store())


async def build_user_service(
    directory: DirectoryClient,
    context: RequestContext,
    *,
    store: GuildUserStore | None = None,
) -> UserService:
    """Wire a ``UserService`` from the given directory and request context."""

    tracker = await build_user_tracker(store=store)
    return UserService(directory, context, tracker)


async def record_observation(
    *,
    guild_id: int,
    user_id: int,
    username: str | None = None,
    discriminator: int = 0,
    nickname: str | None = None,
    store: GuildUserStore | None = None,
) -> GuildUser | None:
    """Track a guild user described by plain values and return the stored record."""

    effective_store = store or await _default_store()
    observed = RemoteUser(
        id=user_id,
        guild_id=guild_id,
        username=username,
        discriminator_value=discriminator,
        nickname=nickname,
    )
    log.info("Recording observation of user %s in guild %s", user_id, guild_id)
    await UserTracker(effective_store).track_user(observed)
    return await get_guild_user_record(guild_id=guild_id, user_id=user_id, store=effective_store)


async def get_guild_user_record(
    *,
    guild_id: int,
    user_id: int,
    store: GuildUserStore | None = None,
) -> GuildUser | None:
    """Return the stored record for a guild user, if it is tracked."""

    effective_store = store or await _default_store()
    async with effective_store.begin_create_transaction() as transaction:
        return await transaction.repositories.guild_users.get(user_id, guild_id)


async def list_guild_users(
    *,
    guild_id: int,
    store: GuildUserStore | None = None,
) -> Sequence[GuildUser]:
    """Return every tracked user of a guild, ordered by user id."""

    effective_store = store or await _default_store()
    async with effective_store.begin_create_transaction() as transaction:
        return await transaction.repositories.guild_users.list_by_guild(guild_id)
