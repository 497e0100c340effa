"""Main sync orchestration - blocking entry points."""

import asyncio
from datetime import timedelta

import duckdb
from loguru import logger

from app.models import BallotSyncResult, DeceasedSyncResult
from app.repositories import BallotRepository, PersonRepository, SyncMetadataRepository, get_write_connection
from etl.deceased import METADATA_KEY, DeceasedSync, close_deceased_mandates
from etl.votes import ProgressCallback, VotesSync, metadata_key
from settings import DB_PATH, DEFAULT_SESSION, GRAPH_MIN_INTERVAL
from source_client import BallotsClient, GraphClient, MinIntervalGate


def _recently_synced(conn: duckdb.DuckDBPyConnection, source_key: str, min_interval: timedelta | None) -> bool:
    """True when ``min_interval`` is set and the last run is younger than it."""
    if min_interval is None or SyncMetadataRepository(conn).should_sync(source_key, min_interval):
        return False
    logger.info("{} synced less than {} ago, skipping", source_key, min_interval)
    return True


async def _sync_votes_async(
    session: int,
    dry_run: bool,
    on_progress: ProgressCallback | None,
    min_interval: timedelta | None,
    db_path: str,
) -> BallotSyncResult:
    """Async ballot sync implementation."""
    conn = get_write_connection(db_path)
    try:
        if _recently_synced(conn, metadata_key(session), min_interval):
            return BallotSyncResult(session=session, success=True, skipped=True, dry_run=dry_run)
        async with BallotsClient() as client:
            return await VotesSync(client, conn, session, dry_run=dry_run, on_progress=on_progress).run()
    finally:
        conn.close()


async def _sync_deceased_async(
    dry_run: bool,
    close_mandates: bool,
    gate: MinIntervalGate | None,
    min_interval: timedelta | None,
    db_path: str,
) -> DeceasedSyncResult:
    """Async death-date sync implementation."""
    conn = get_write_connection(db_path)
    try:
        if _recently_synced(conn, METADATA_KEY, min_interval):
            return DeceasedSyncResult(success=True, skipped=True, dry_run=dry_run)
        async with GraphClient(gate=gate or MinIntervalGate(GRAPH_MIN_INTERVAL)) as client:
            return await DeceasedSync(client, conn, dry_run=dry_run).run(close_mandates=close_mandates)
    finally:
        conn.close()


def sync_votes(
    session: int = DEFAULT_SESSION,
    dry_run: bool = False,
    on_progress: ProgressCallback | None = None,
    min_interval: timedelta | None = None,
    db_path: str = DB_PATH,
) -> BallotSyncResult:
    """Sync the ballots of a session. Never raises for failed runs.

    With ``min_interval``, a session synced more recently than that is
    skipped (``result.skipped``).
    """
    try:
        return asyncio.run(_sync_votes_async(session, dry_run, on_progress, min_interval, db_path))
    except Exception as e:
        logger.exception("Ballot sync for session {} crashed", session)
        return BallotSyncResult(session=session, dry_run=dry_run, errors=[f"fatal error: {e}"])


def sync_deceased(
    dry_run: bool = False,
    close_mandates: bool = False,
    gate: MinIntervalGate | None = None,
    min_interval: timedelta | None = None,
    db_path: str = DB_PATH,
) -> DeceasedSyncResult:
    """Sync death dates from the knowledge graph. Never raises for failed runs."""
    try:
        return asyncio.run(_sync_deceased_async(dry_run, close_mandates, gate, min_interval, db_path))
    except Exception as e:
        logger.exception("Deceased sync crashed")
        return DeceasedSyncResult(dry_run=dry_run, errors=[f"fatal error: {e}"])


def update_deceased_mandates(db_path: str = DB_PATH) -> int:
    """Run the mandate pass on its own."""
    conn = get_write_connection(db_path)
    try:
        return close_deceased_mandates(conn)
    finally:
        conn.close()


def votes_stats() -> dict:
    """Current ballot/vote counts and last sync runs."""
    stats = BallotRepository().get_stats()
    stats["last_runs"] = SyncMetadataRepository().get_all()
    return stats


def deceased_stats() -> dict:
    """Current deceased counts."""
    return PersonRepository().get_deceased_stats()
