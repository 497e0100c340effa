"""Base repository class."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import duckdb
from loguru import logger

from app.repositories.db import get_db
from app.repositories.errors import PersistenceFailure


class BaseRepository:
    """Base repository with common functionality.

    Pass ``conn`` to share one connection between repositories (a sync run
    does); otherwise the thread-local connection is used.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection | None = None, read_only: bool = True):
        self._db = conn if conn is not None else get_db(read_only)
        self._read_only = read_only and conn is None
        logger.debug("{} initialized", self.__class__.__name__)

    def _check_writable(self) -> None:
        if self._read_only:
            raise PersistenceFailure(f"{self.__class__.__name__} is read-only")

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run a block atomically, rolling back on any error."""
        self._check_writable()
        self._db.execute("BEGIN TRANSACTION")
        try:
            yield
        except Exception:
            self._db.execute("ROLLBACK")
            raise
        self._db.execute("COMMIT")

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self._db.execute(query, params)
        return self._db.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()

    def count(self, table: str, where: str = "", params: list | None = None) -> int:
        """Row count of a table, optionally filtered."""
        query = f"SELECT COUNT(*) FROM {table}"
        if where:
            query += f" WHERE {where}"
        return int(self.fetchone(query, params)[0])
