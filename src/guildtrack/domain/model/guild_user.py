"""Locally tracked guild users and the patches that update them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime

    from guildtrack.domain.model.identity import RemoteUser

UNKNOWN_USERNAME: Final[str] = "[UNKNOWN USERNAME]"
UNKNOWN_DISCRIMINATOR: Final[str] = "????"


@dataclass(eq=False, kw_only=True)
class GuildUser:
    """What we last knew about a user within one guild.

    Keyed by ``(user_id, guild_id)``. Only ``GuildUserPatch`` mutates an
    existing record.
    """

    user_id: int
    guild_id: int
    username: str
    discriminator: str
    nickname: str | None
    first_seen: datetime
    last_seen: datetime

    @property
    def key(self) -> tuple[int, int]:
        return (self.user_id, self.guild_id)


@dataclass(frozen=True, slots=True, kw_only=True)
class GuildUserCreationData:
    """Initial values for a guild user seen for the first time."""

    user_id: int
    guild_id: int
    username: str
    discriminator: str
    nickname: str | None
    first_seen: datetime
    last_seen: datetime

    @classmethod
    def from_identity(cls, user: RemoteUser, *, seen_at: datetime) -> GuildUserCreationData:
        if user.guild_id is None:
            raise ValueError(f"User {user.id} is not a guild member")
        return cls(
            user_id=user.id,
            guild_id=user.guild_id,
            username=user.username if user.username is not None else UNKNOWN_USERNAME,
            discriminator=user.discriminator if user.has_discriminator else UNKNOWN_DISCRIMINATOR,
            nickname=user.nickname,
            first_seen=seen_at,
            last_seen=seen_at,
        )

    def build(self) -> GuildUser:
        return GuildUser(
            user_id=self.user_id,
            guild_id=self.guild_id,
            username=self.username,
            discriminator=self.discriminator,
            nickname=self.nickname,
            first_seen=self.first_seen,
            last_seen=self.last_seen,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class GuildUserPatch:
    """Field-level update for an existing guild user.

    ``None`` fields are left alone. ``nickname`` is only written when
    ``update_nickname`` is set, since ``None`` is a legitimate nickname value.
    """

    last_seen: datetime
    username: str | None = None
    discriminator: str | None = None
    nickname: str | None = None
    update_nickname: bool = False

    @classmethod
    def from_identity(cls, user: RemoteUser, *, seen_at: datetime) -> GuildUserPatch:
        # Observations come from several sources, not all of which know the full user.
        has_username = user.username is not None
        has_discriminator = user.has_discriminator
        update_nickname = has_username and has_discriminator
        return cls(
            last_seen=seen_at,
            username=user.username if has_username else None,
            discriminator=user.discriminator if has_discriminator else None,
            nickname=user.nickname if update_nickname else None,
            update_nickname=update_nickname,
        )

    def apply_to(self, record: GuildUser) -> GuildUser:
        if self.username is not None:
            record.username = self.username
        if self.discriminator is not None:
            record.discriminator = self.discriminator
        if self.update_nickname:
            record.nickname = self.nickname
        record.last_seen = max(self.last_seen, record.first_seen)
        return record
