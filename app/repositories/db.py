"""DuckDB connection management."""

import threading
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL, ALL_INDEXES
from settings import DB_PATH

_local = threading.local()

REQUIRED_TABLES = ("person", "mandate", "external_id", "ballot", "vote", "sync_metadata")


def _missing_tables(conn: duckdb.DuckDBPyConnection) -> list[str]:
    rows = conn.execute("SELECT table_name FROM information_schema.tables WHERE table_schema = 'main'").fetchall()
    present = {r[0] for r in rows}
    return [t for t in REQUIRED_TABLES if t not in present]


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Create missing tables and their indexes. Safe on an existing store."""
    missing = _missing_tables(conn)
    if not missing:
        return

    for ddl in ALL_DDL:
        conn.execute(ddl)
    for index in ALL_INDEXES:
        conn.execute(index)
    logger.info("DB schema ready (created: {})", ", ".join(missing))


def _create_if_absent(path: str) -> None:
    """A read-only connection cannot create the file, so create it first."""
    if path == ":memory:" or Path(path).exists():
        return
    logger.warning("DB not found: {}. Creating empty DB.", path)
    with duckdb.connect(path) as conn:
        init_tables(conn)


def get_db(read_only: bool = True, path: str = DB_PATH) -> duckdb.DuckDBPyConnection:
    """Thread-local shared connection, opened on first use."""
    conn = getattr(_local, "conn", None)
    if conn is None:
        _create_if_absent(path)
        conn = duckdb.connect(path, read_only=read_only)
        _local.conn = conn
        logger.debug("DB connected: {} (read_only={})", path, read_only)
    return conn


def close_db() -> None:
    """Close the thread-local connection, if any."""
    conn = getattr(_local, "conn", None)
    if conn is not None:
        conn.close()
        _local.conn = None
        logger.debug("DB connection closed")


def get_write_connection(path: str = DB_PATH) -> duckdb.DuckDBPyConnection:
    """Dedicated writable connection with the schema in place; the caller closes it."""
    conn = duckdb.connect(path)
    init_tables(conn)
    return conn
