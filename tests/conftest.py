from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from guildtrack.adapters.sqlalchemy import create_all_tables, start_mappers
from guildtrack.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyGuildUserStore,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'guildtrack.db'}")
    start_mappers()
    await create_all_tables(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_store(sqlite_engine: AsyncEngine) -> AsyncIterator[SqlAlchemyGuildUserStore]:
    await startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemyGuildUserStore()
    finally:
        await shutdown()
