import abc
import contextlib
import logging
from typing import AsyncContextManager, AsyncIterator, Dict, List, Optional, Sequence

import aiomysql

import cfg  # configure file
from errors import StorageError


# stores and readers talk to the DB only through these interfaces,
# so the DB can be replaced by anything implementing them (e.g. an in-memory one in tests)


class Executor(abc.ABC):
    """Runs parameterized queries. Parameters use the DB-API 'format' paramstyle (%s)."""

    @abc.abstractmethod
    async def execute(self, query: str, args: Sequence = ()) -> int:
        """Runs a single INSERT/UPDATE, returns the id generated by it (0 if none was)."""

    @abc.abstractmethod
    async def executemany(self, query: str, args: Sequence[Sequence]) -> None:
        """Runs the same statement once per element of args."""

    @abc.abstractmethod
    async def fetchone(self, query: str, args: Sequence = ()) -> Optional[Dict]:
        """Runs a SELECT, returns its first row as a dict or None if there are no rows."""

    @abc.abstractmethod
    async def fetchall(self, query: str, args: Sequence = ()) -> List[Dict]:
        """Runs a SELECT, returns all of its rows as dicts."""


class Storage(Executor):
    """
    Executor which runs every query outside of an explicit transaction and
    additionally can open a transaction scope.
    """

    @abc.abstractmethod
    def transaction(self) -> AsyncContextManager[Executor]:
        """
        Opens a transaction. The yielded executor runs all queries inside of it.
        The transaction is committed when the block exits normally and rolled back
        when it exits with an exception, which is then re-raised.
        """


class ConnectionExecutor(Executor):
    """Executor over a single aiomysql connection, driver errors are re-raised as StorageError."""

    def __init__(self, conn: aiomysql.Connection):
        self._conn = conn

    async def execute(self, query: str, args: Sequence = ()) -> int:
        try:
            async with self._conn.cursor() as cur:
                await cur.execute(query, tuple(args))
                return cur.lastrowid or 0
        except aiomysql.Error as error:
            logging.error(f'ConnectionExecutor.execute: query={query!r}; args={args}; an error occurred: {error}')
            raise StorageError(str(error)) from error

    async def executemany(self, query: str, args: Sequence[Sequence]) -> None:
        if not args:
            return
        try:
            async with self._conn.cursor() as cur:
                await cur.executemany(query, [tuple(x) for x in args])
        except aiomysql.Error as error:
            logging.error(f'ConnectionExecutor.executemany: query={query!r}; an error occurred: {error}')
            raise StorageError(str(error)) from error

    async def fetchone(self, query: str, args: Sequence = ()) -> Optional[Dict]:
        try:
            async with self._conn.cursor() as cur:
                await cur.execute(query, tuple(args))
                return await cur.fetchone()
        except aiomysql.Error as error:
            logging.error(f'ConnectionExecutor.fetchone: query={query!r}; args={args}; an error occurred: {error}')
            raise StorageError(str(error)) from error

    async def fetchall(self, query: str, args: Sequence = ()) -> List[Dict]:
        try:
            async with self._conn.cursor() as cur:
                await cur.execute(query, tuple(args))
                return list(await cur.fetchall())
        except aiomysql.Error as error:
            logging.error(f'ConnectionExecutor.fetchall: query={query!r}; args={args}; an error occurred: {error}')
            raise StorageError(str(error)) from error


class MySQLStorage(Storage):
    """
    Storage backed by a pool of aiomysql connections.
    Reads take a connection from the pool in autocommit mode,
    every transaction holds its own connection until it is committed or rolled back.
    """

    def __init__(self, pool: aiomysql.Pool):
        self._pool = pool

    @classmethod
    async def connect(cls, host: str = cfg.DB_HOST, port: int = cfg.DB_PORT, user: str = cfg.DB_USER,
                      password: str = cfg.DB_PASSWORD, db: str = cfg.DATABASE,
                      minsize: int = cfg.DB_POOL_MINSIZE, maxsize: int = cfg.DB_POOL_MAXSIZE) -> 'MySQLStorage':
        try:
            pool = await aiomysql.create_pool(host=host, port=port, user=user, password=password, db=db,
                                              minsize=minsize, maxsize=maxsize, autocommit=True,
                                              cursorclass=aiomysql.DictCursor)
            # cursorclass=aiomysql.DictCursor: SELECT`s result will be presented in dicts
        except aiomysql.Error as error:
            logging.error(f'MySQLStorage.connect: host={host}; port={port}; db={db}; could not connect: {error}')
            raise StorageError(str(error)) from error
        logging.info(f'MySQLStorage.connect: host={host}; port={port}; db={db}; pool of connections is created')
        return cls(pool)

    async def close(self) -> None:
        self._pool.close()
        await self._pool.wait_closed()
        logging.info('MySQLStorage.close: pool of connections is closed')

    @contextlib.asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiomysql.Connection]:
        try:
            conn = await self._pool.acquire()
        except aiomysql.Error as error:
            logging.error(f'MySQLStorage._connection: could not get a connection from the pool: {error}')
            raise StorageError(str(error)) from error
        try:
            yield conn
        finally:
            self._pool.release(conn)

    async def execute(self, query: str, args: Sequence = ()) -> int:
        async with self._connection() as conn:
            return await ConnectionExecutor(conn).execute(query, args)

    async def executemany(self, query: str, args: Sequence[Sequence]) -> None:
        async with self._connection() as conn:
            await ConnectionExecutor(conn).executemany(query, args)

    async def fetchone(self, query: str, args: Sequence = ()) -> Optional[Dict]:
        async with self._connection() as conn:
            return await ConnectionExecutor(conn).fetchone(query, args)

    async def fetchall(self, query: str, args: Sequence = ()) -> List[Dict]:
        async with self._connection() as conn:
            return await ConnectionExecutor(conn).fetchall(query, args)

    @staticmethod
    async def _rollback(conn: aiomysql.Connection) -> bool:
        try:
            await conn.rollback()
        except aiomysql.Error as error:
            logging.error(f'MySQLStorage.transaction: rollback failed: {error}')
            return False
        return True

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[Executor]:
        async with self._connection() as conn:
            try:
                await conn.begin()
            except aiomysql.Error as error:
                logging.error(f'MySQLStorage.transaction: could not start a transaction: {error}')
                raise StorageError(str(error)) from error
            logging.debug('MySQLStorage.transaction: started transaction')

            try:
                yield ConnectionExecutor(conn)
            except BaseException as error:
                if await self._rollback(conn):
                    logging.info(f'MySQLStorage.transaction: an error occurred: {error!r}, rolled back')
                raise

            try:
                await conn.commit()
            except aiomysql.Error as error:
                logging.error(f'MySQLStorage.transaction: commit failed: {error}')
                await self._rollback(conn)
                raise StorageError(str(error)) from error
            logging.debug('MySQLStorage.transaction: committed transaction')
