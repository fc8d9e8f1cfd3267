"""Port for the request context of the caller."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestContext(Protocol):
    """Exposes the guild the current request is associated with, if any."""

    @property
    def current_guild_id(self) -> int | None: ...


__all__ = ["RequestContext"]
