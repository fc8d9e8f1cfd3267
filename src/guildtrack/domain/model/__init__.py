"""Public domain model surface."""

from __future__ import annotations

from guildtrack.domain.model.guild_user import (
    UNKNOWN_DISCRIMINATOR,
    UNKNOWN_USERNAME,
    GuildUser,
    GuildUserCreationData,
    GuildUserPatch,
)
from guildtrack.domain.model.identity import MAX_DISCRIMINATOR, RemoteUser

__all__ = [
    "MAX_DISCRIMINATOR",
    "UNKNOWN_DISCRIMINATOR",
    "UNKNOWN_USERNAME",
    "GuildUser",
    "GuildUserCreationData",
    "GuildUserPatch",
    "RemoteUser",
]
