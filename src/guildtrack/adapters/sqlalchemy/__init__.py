"""SQLAlchemy adapter package for guildtrack."""

from __future__ import annotations

from .mappings import create_all_tables, guild_user_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyGuildUserRepository
from .unit_of_work import (
    SqlAlchemyGuildUserStore,
    SqlAlchemyTrackingTransaction,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyGuildUserRepository",
    "SqlAlchemyGuildUserStore",
    "SqlAlchemyTrackingTransaction",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "guild_user_table",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
