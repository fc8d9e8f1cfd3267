"""Domain port definitions for adapters."""

from __future__ import annotations

from .context import RequestContext
from .directory import DirectoryClient, Guild
from .persistence import (
    GuildUserRepository,
    GuildUserStore,
    TrackingRepositories,
    TrackingTransaction,
)

__all__ = [
    "DirectoryClient",
    "Guild",
    "GuildUserRepository",
    "GuildUserStore",
    "RequestContext",
    "TrackingRepositories",
    "TrackingTransaction",
]
