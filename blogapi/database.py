import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from blogapi.exceptions import ConstraintViolationError, DatabaseConnectionError
from blogapi.utils.query_counter import QueryCounter, install_query_counter
from blogapi.utils.query_monitor import install_query_monitor

logger = logging.getLogger(__name__)

Base = declarative_base()


def engine_options(database_url: str, environment: str = "development", echo: bool = False) -> dict:
    """Pool settings for ``create_async_engine`` based on backend and environment."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            # every connection to :memory: is a new database, so share one
            return {"echo": echo, "poolclass": StaticPool}
        return {"echo": echo}

    # Environment-based configurations
    if environment == "production":
        return {
            "echo": echo,
            "pool_size": 20,
            "max_overflow": 50,
            "pool_timeout": 60,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        }
    return {
        "echo": echo,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
    }


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """
    Owns the async engine and its connection pool.

    Repositories borrow short-lived sessions through :meth:`session`; nothing
    outside this class touches the engine directly except schema management
    helpers below. Driver errors raised inside a session are translated into
    the application's error taxonomy.
    """

    def __init__(
        self,
        database_url: str,
        *,
        environment: str = "development",
        echo: bool = False,
        query_counter: QueryCounter | None = None,
        query_monitor: bool = False,
        slow_query_threshold_ms: int = 100,
    ) -> None:
        self.url = database_url
        self.engine: AsyncEngine = create_async_engine(
            database_url, **engine_options(database_url, environment=environment, echo=echo)
        )
        if self.engine.dialect.name == "sqlite":
            _enable_sqlite_foreign_keys(self.engine)

        self.query_counter = query_counter
        if query_counter is not None:
            install_query_counter(self.engine, query_counter)
        if query_monitor:
            install_query_monitor(self.engine, slow_threshold_ms=slow_query_threshold_ms)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
            except IntegrityError as e:
                logger.warning(f"Constraint violation: {e.orig}")
                raise ConstraintViolationError.from_integrity_error(e) from e
            except (InterfaceError, OperationalError, OSError) as e:
                logger.error(f"Database unavailable: {e}")
                raise DatabaseConnectionError(str(getattr(e, "orig", e))) from e
            except DBAPIError as e:
                if e.connection_invalidated:
                    logger.error(f"Database connection lost: {e}")
                    raise DatabaseConnectionError(str(e.orig)) from e
                raise

    async def ping(self) -> bool:
        """Run ``SELECT 1``; raises :class:`DatabaseConnectionError` when unreachable."""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
        return True

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed.")
