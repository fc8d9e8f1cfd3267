"""SQLAlchemy-backed tracking transactions and adapter lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from guildtrack.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from guildtrack.adapters.sqlalchemy.repositories import SqlAlchemyGuildUserRepository
from guildtrack.config import get_database_config
from guildtrack.domain.errors import TransactionError
from guildtrack.domain.ports.persistence import TrackingRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncEngine


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: AsyncEngine | None = None
    _session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    @engine.setter
    def engine(self, value: AsyncEngine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call guildtrack.adapters.sqlalchemy."
                "unit_of_work.startup() before opening a transaction."
            )
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


async def startup(
    *,
    engine: AsyncEngine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the async engine, metadata, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        config = get_database_config()
        engine = create_async_engine(database_uri or config.uri)
    start_mappers()
    await create_all_tables(engine)

    _STATE.engine = engine


def configured_engine() -> AsyncEngine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


async def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        await _STATE.engine.dispose()
    _STATE.engine = None


class SqlAlchemyTrackingTransaction:
    """One session, one transaction. Uncommitted work is discarded on exit."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self.session_factory = session_factory or _STATE.session_factory
        self._session: AsyncSession | None = None
        self._repositories: TrackingRepositories | None = None

    async def __aenter__(self) -> SqlAlchemyTrackingTransaction:
        self.session = self.session_factory()
        self._repositories = TrackingRepositories(
            guild_users=SqlAlchemyGuildUserRepository(self.session),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            await self.rollback()
        await self.session.close()
        self.session = None
        self._repositories = None
        return False  # don't swallow exceptions

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise TransactionError("Failed to commit tracking transaction") from exc

    async def rollback(self) -> None:
        await self.session.rollback()

    @property
    def repositories(self) -> TrackingRepositories:
        if self._repositories is None:
            raise StartupError("Tracking transaction not entered")
        return self._repositories

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise StartupError("Tracking transaction session not initialised")
        return self._session

    @session.setter
    def session(self, session: AsyncSession | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Tracking transaction session already initialised")
        self._session = session


class SqlAlchemyGuildUserStore:
    """Store adapter handing out SQLAlchemy tracking transactions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory

    def begin_create_transaction(self) -> SqlAlchemyTrackingTransaction:
        return SqlAlchemyTrackingTransaction(self._session_factory)


if TYPE_CHECKING:
    from guildtrack.domain.ports.persistence import GuildUserStore, TrackingTransaction

    _store_check: GuildUserStore = SqlAlchemyGuildUserStore()
    _tx_check: TrackingTransaction = SqlAlchemyTrackingTransaction()
