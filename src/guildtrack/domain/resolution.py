"""Resolve users through the remote directory."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from guildtrack.domain.errors import GuildNotFoundError, UserNotFoundError, require_collaborator

if TYPE_CHECKING:
    from guildtrack.domain.model import RemoteUser
    from guildtrack.domain.ports.context import RequestContext
    from guildtrack.domain.ports.directory import DirectoryClient, Guild
    from guildtrack.domain.tracking import UserTracker

log = getLogger(__name__)


class UserService:
    """Looks users up in the directory and records what it sees.

    Resolving a guild member is also an observation of it: unless ``track=False``
    is passed, every successful lookup that yields a guild member updates the
    tracked record before returning. Callers must not treat lookups as read-only.
    """

    def __init__(
        self,
        directory: DirectoryClient | None,
        context: RequestContext | None,
        tracker: UserTracker | None,
    ) -> None:
        self._directory = require_collaborator(directory, "directory")
        self._context = require_collaborator(context, "context")
        self._tracker = require_collaborator(tracker, "tracker")

    async def get_user(self, user_id: int, *, track: bool = True) -> RemoteUser:
        """Resolve a user within the guild of the current request, if there is one."""

        return await self.resolve_user(
            user_id,
            guild_id=self._context.current_guild_id,
            track=track,
        )

    async def resolve_user(
        self,
        user_id: int,
        *,
        guild_id: int | None = None,
        track: bool = True,
    ) -> RemoteUser:
        """Resolve a user globally, or through ``guild_id`` when given.

        Raises ``NotFoundError`` if the guild or the user does not exist.
        """

        if guild_id is None:
            log.debug("Resolving user %s globally", user_id)
            user = await self._directory.get_user(user_id)
        else:
            log.debug("Resolving user %s in guild %s", user_id, guild_id)
            guild = await self._require_guild(guild_id)
            user = await guild.get_user(user_id)

        if user is None:
            raise UserNotFoundError(user_id, guild_id=guild_id)

        if track and user.is_guild_member:
            await self._tracker.track_user(user)

        return user

    async def get_guild_user(
        self,
        guild_id: int,
        user_id: int,
        *,
        track: bool = True,
    ) -> RemoteUser:
        """Resolve a member of ``guild_id``; it is always scoped to that guild."""

        guild = await self._require_guild(guild_id)
        user = await guild.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id, guild_id=guild_id)

        if track:
            await self._tracker.track_user(user)

        return user

    async def track_user(self, user: RemoteUser) -> None:
        await self._tracker.track_user(user)

    async def _require_guild(self, guild_id: int) -> Guild:
        guild = await self._directory.get_guild(guild_id)
        if guild is None:
            raise GuildNotFoundError(guild_id)
        return guild
