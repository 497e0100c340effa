"""Sync metadata repository - last run per source."""

from datetime import datetime, timedelta

from loguru import logger

from app.repositories.base import BaseRepository


class SyncMetadataRepository(BaseRepository):
    """Repository for sync bookkeeping."""

    def get(self, source_key: str) -> dict | None:
        """Last recorded run of a source."""
        row = self.fetchone(
            "SELECT last_sync_at, item_count, duration_s, success FROM sync_metadata WHERE source_key = ?",
            [source_key],
        )
        if row is None:
            return None
        return {
            "source_key": source_key,
            "last_sync_at": row[0],
            "item_count": row[1],
            "duration_s": row[2],
            "success": row[3],
        }

    def mark_completed(self, source_key: str, item_count: int, duration_s: float, success: bool) -> None:
        """Record a finished run."""
        self._check_writable()
        self.execute(
            """
            INSERT OR REPLACE INTO sync_metadata (source_key, last_sync_at, item_count, duration_s, success)
            VALUES (?, ?, ?, ?, ?)
            """,
            [source_key, datetime.now(), item_count, duration_s, success],
        )
        logger.debug("Sync metadata saved: {} ({} items)", source_key, item_count)

    def should_sync(self, source_key: str, min_interval: timedelta) -> bool:
        """True if the source never ran or ran longer ago than ``min_interval``."""
        state = self.get(source_key)
        if state is None:
            return True
        return datetime.now() - state["last_sync_at"] >= min_interval

    def get_all(self) -> list[dict]:
        """All sources, most recent first."""
        rows = self.fetchall("SELECT source_key FROM sync_metadata ORDER BY last_sync_at DESC")
        return [self.get(r[0]) for r in rows]
