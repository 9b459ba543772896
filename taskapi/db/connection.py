# db/connection.py
import asyncio
import logging
from contextlib import asynccontextmanager

import asyncpg

from taskapi.errors import (
    Conflict,
    StoreError,
    StoreUnavailable,
    TaskApiError,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

# SQLSTATE codes and classes, see PostgreSQL "Errcodes Table"
_INVALID_INPUT_CODES = {"23502", "23514"}           # not_null_violation, check_violation
_INVALID_INPUT_CLASSES = {"22"}                     # data_exception
_CONFLICT_CODES = {"23503", "23505", "23P01"}       # foreign_key, unique, exclusion
_TRANSIENT_CLASSES = {"08", "53", "57"}             # connection, resources, operator intervention

_NETWORK_ERRORS = (asyncio.TimeoutError, TimeoutError, OSError)


def translate_store_error(exc: BaseException) -> TaskApiError:
    """Map a driver-level exception onto the error taxonomy."""
    cause = str(exc) or exc.__class__.__name__
    sqlstate = getattr(exc, "sqlstate", None) or ""

    if sqlstate in _INVALID_INPUT_CODES or sqlstate[:2] in _INVALID_INPUT_CLASSES:
        return ValidationFailed("Request violates a column constraint", cause=cause)
    # Client-side argument encoding errors (e.g. int32 overflow)
    if isinstance(exc, asyncpg.InterfaceError) and isinstance(exc, ValueError):
        return ValidationFailed("Request contains a value the column cannot hold", cause=cause)
    if sqlstate in _CONFLICT_CODES:
        return Conflict(cause=cause)
    if sqlstate[:2] in _TRANSIENT_CLASSES or isinstance(exc, _NETWORK_ERRORS):
        return StoreUnavailable(cause=cause)
    return StoreError(cause=cause)


class Database:
    """Owns the asyncpg pool. Created once at startup and closed on shutdown."""

    def __init__(self, dsn: str, min_size: int = 1, max_size: int = 16,
                 acquire_timeout: float = 5.0, command_timeout=None):
        self.dsn = dsn
        self.min_size = min(min_size, max_size)
        self.max_size = max_size
        self.acquire_timeout = acquire_timeout
        self.command_timeout = command_timeout
        self.pool = None

    @classmethod
    def from_settings(cls, settings):
        return cls(
            settings.DATABASE_URL,
            min_size=settings.DATABASE_POOL_MIN_SIZE,
            max_size=settings.DATABASE_POOL_MAX_SIZE,
            acquire_timeout=settings.DATABASE_ACQUIRE_TIMEOUT,
            command_timeout=settings.DATABASE_COMMAND_TIMEOUT,
        )

    async def connect(self):
        # Errors here are fatal: the server must not start without a store
        self.pool = await asyncpg.create_pool(
            self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )
        try:
            await self.pool.fetchval("SELECT 1")
        except BaseException:
            await self.close()
            raise
        logger.info(f"Database pool ready (max_size={self.max_size}, acquire_timeout={self.acquire_timeout}s)")

    async def close(self):
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Borrow a connection, translating driver errors raised while it is held."""
        if self.pool is None:
            raise RuntimeError("Database pool is not initialized")
        try:
            async with self.pool.acquire(timeout=self.acquire_timeout) as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, *_NETWORK_ERRORS) as e:
            raise translate_store_error(e) from e

    async def fetch(self, query: str, *args):
        async with self.acquire() as conn:
            return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args):
        async with self.acquire() as conn:
            return await conn.fetchrow(query, *args)

    async def fetchval(self, query: str, *args):
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args)

    async def execute(self, query: str, *args) -> str:
        async with self.acquire() as conn:
            return await conn.execute(query, *args)

    async def ping(self) -> bool:
        return await self.fetchval("SELECT 1") == 1
