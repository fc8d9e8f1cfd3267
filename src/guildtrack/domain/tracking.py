"""Record observations of guild users in the local store."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from guildtrack.domain.errors import require_collaborator
from guildtrack.domain.model import GuildUserCreationData, GuildUserPatch

if TYPE_CHECKING:
    from guildtrack.domain.model import RemoteUser
    from guildtrack.domain.ports.persistence import GuildUserStore

Clock = Callable[[], datetime]

log = getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


class UserTracker:
    """Merges observed guild users into the store.

    Updates can be triggered from several different sources, not all of which
    have all of the user's info, so only the fields present in an observation
    are written. See ``GuildUserPatch`` for the exact policy.
    """

    def __init__(self, store: GuildUserStore | None, *, clock: Clock = utcnow) -> None:
        self._store = require_collaborator(store, "store")
        self._clock = clock

    async def track_user(self, user: RemoteUser) -> None:
        """Update the stored record for ``user``, creating it when missing.

        Runs in a single transaction; any failure rolls it back and propagates.
        """

        if user.guild_id is None:
            raise ValueError(f"Cannot track user {user.id} without a guild")

        async with self._store.begin_create_transaction() as transaction:
            guild_users = transaction.repositories.guild_users
            seen_at = self._clock()
            patch = GuildUserPatch.from_identity(user, seen_at=seen_at)
            if await guild_users.try_update(user.id, user.guild_id, patch):
                log.debug("Updated guild user %s in guild %s", user.id, user.guild_id)
            else:
                await guild_users.create(GuildUserCreationData.from_identity(user, seen_at=seen_at))
                log.debug("Started tracking guild user %s in guild %s", user.id, user.guild_id)
            await transaction.commit()
