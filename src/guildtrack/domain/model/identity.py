"""Identities as reported by the remote user directory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

MAX_DISCRIMINATOR: Final[int] = 9999


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoteUser:
    """A user observed in the directory, optionally within a guild.

    Any attribute may be missing at a given call: ``username`` is ``None`` and
    ``discriminator_value`` is ``0`` when the source did not report them.
    """

    id: int
    username: str | None = None
    discriminator_value: int = 0
    guild_id: int | None = None
    nickname: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.discriminator_value <= MAX_DISCRIMINATOR:
            raise ValueError(
                f"discriminator_value must be between 0 and {MAX_DISCRIMINATOR}, "
                f"got {self.discriminator_value}"
            )

    @property
    def discriminator(self) -> str:
        return f"{self.discriminator_value:04d}"

    @property
    def has_discriminator(self) -> bool:
        return self.discriminator_value != 0

    @property
    def is_guild_member(self) -> bool:
        return self.guild_id is not None
