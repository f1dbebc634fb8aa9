"""aiosqlite connection pool for the ledger database file."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from nexus_ledger.config import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """
    Fixed-size pool of WAL-mode connections to one database file.

    The optional schema script runs once, on the first connection, before the
    pool hands out any connection.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 2,
        busy_timeout: int = 30000,
        schema: str | None = None,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout
        self.schema = schema

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._connections: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return bool(self._connections)

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    async def open(self) -> None:
        """Create the database directory, connections and schema."""
        async with self._lock:
            if self._connections:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            for _ in range(self.pool_size):
                self._connections.append(await self._connect())
            if self.schema:
                await self._connections[0].executescript(self.schema)
                await self._connections[0].commit()
            for conn in self._connections:
                self._idle.put_nowait(conn)

            logger.info("sqlite_pool_opened", db_path=str(self.db_path), size=self.pool_size)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection, opening the pool on first use."""
        if not self._connections:
            await self.open()
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; commit on success, roll back on error."""
        async with self.acquire() as conn:
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue()
            logger.info("sqlite_pool_closed", db_path=str(self.db_path))
