"""Async database manager for Trackwell (single-DB, single writer)."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from trackwell.common.config import TrackwellSettings, get_settings
from trackwell.common.models import Base

# Import all model modules so Base.metadata is complete for create_all().
import trackwell.authorization.models  # noqa: F401
import trackwell.products.models  # noqa: F401
import trackwell.checkpoints.models  # noqa: F401
import trackwell.transfers.models  # noqa: F401
import trackwell.certifications.models  # noqa: F401
import trackwell.events.models  # noqa: F401


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Manages a single async database engine.

    Every state-mutating operation goes through ``write_session()``, which
    holds one process-wide lock for the lifetime of the transaction. Reads
    use ``get_session()`` and run concurrently against committed state.
    """

    def __init__(self, settings: TrackwellSettings | None = None):
        self._settings = settings or get_settings()
        self.engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._write_lock: asyncio.Lock | None = None

    async def init(self) -> None:
        url = self._settings.db_url
        self.engine = create_async_engine(url, echo=False)
        if self.engine.dialect.name == "sqlite":
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys
            )
        self._session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False
        )
        self._write_lock = asyncio.Lock()

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise RuntimeError("DatabaseManager not initialized, call init() first")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    @asynccontextmanager
    async def write_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Serialized session: commits all writes of one operation or none."""
        if self._write_lock is None:
            raise RuntimeError("DatabaseManager not initialized, call init() first")
        async with self._write_lock:
            async with self.get_session() as session:
                yield session

    async def create_all(self) -> None:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized, call init() first")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None
            self._write_lock = None
